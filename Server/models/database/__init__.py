"""
Folio Server - Database Models Package

This package contains all SQLAlchemy database model definitions.
All models share a common declarative base for proper table relationships.
"""

from models.database.base import Base

from models.database.role import Role, Permission, RolePermission
from models.database.user import User
from models.database.setting import ServerSetting
from models.database.library import Library, Series, Volume, Chapter
from models.database.app_user_rating import AppUserRating
from models.database.external_recommendation import ExternalRecommendation

__all__ = [
    'Base',
    'Role',
    'Permission',
    'RolePermission',
    'User',
    'ServerSetting',
    'Library',
    'Series',
    'Volume',
    'Chapter',
    'AppUserRating',
    'ExternalRecommendation',
]
