"""
Folio Server - Enumerations Package

This package contains the enumerations shared by database models,
API models and the settings reconciler.
"""

from models.enums.server_setting_key import ServerSettingKey
from models.enums.library_type import LibraryType
from models.enums.media_options import EncodeFormat, CoverImageSize, LogLevel, ScrobbleProvider

__all__ = [
    'ServerSettingKey',
    'LibraryType',
    'EncodeFormat',
    'CoverImageSize',
    'LogLevel',
    'ScrobbleProvider',
]
