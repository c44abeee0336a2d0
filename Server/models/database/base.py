"""
Folio Server - Database Base

Shared declarative base for all SQLAlchemy models so they share one
metadata object and can reference each other by table name.
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
