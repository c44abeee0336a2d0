"""
Folio Server - Settings Error Exceptions

Exceptions raised by the settings reconciler. Each carries a localization
key and its arguments so the route can translate it for the calling user.
"""


class FolioSettingsError(Exception):
    """Base exception for settings errors"""

    def __init__(self, message_key: str, *args):
        super().__init__(message_key, *args)
        self.message_key = message_key
        self.args_for_message = args


class SettingsValidationError(FolioSettingsError):
    """A desired value failed validation; nothing was applied"""
    pass


class SettingsPermissionError(FolioSettingsError):
    """The server cannot write to a requested directory; nothing was applied"""
    pass


class SettingsPersistenceError(FolioSettingsError):
    """Committing the settings failed and the transaction was rolled back"""
    pass
