"""
Folio Server - Exceptions Package

Contains all exception classes for the Folio server.
"""

from exceptions.settings_error import (
    FolioSettingsError,
    SettingsValidationError,
    SettingsPermissionError,
    SettingsPersistenceError
)

__all__ = [
    'FolioSettingsError',
    'SettingsValidationError',
    'SettingsPermissionError',
    'SettingsPersistenceError',
]
