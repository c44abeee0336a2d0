"""
Folio Server - Models Package

This package contains all data models for the Folio server:
- database: SQLAlchemy database models
- enums: Enumerations shared across the server
- auth: Authentication-related Pydantic models
- api: API endpoint Pydantic models
- infrastructure: Dataclass models for infrastructure components
"""

# Re-export all models for convenient importing
from models.enums import *
from models.database import *
from models.auth import *
from models.api import *
from models.infrastructure import *
