"""
Folio Server - Seed Data

Default values written on first run and restored by the reset endpoints.
"""

from pathlib import Path
from typing import Dict

import configuration
import task_frequencies
from models.enums import ServerSettingKey, LogLevel, EncodeFormat, CoverImageSize

INSTALL_VERSION = "1.0.0"

# Fallback used when no data directory is configured
DEFAULT_DATA_DIRECTORY = Path("data")

DEFAULT_EMAIL_SERVICE_URL = "https://email.folioserver.net"


def GetDefaultSettings(data_directory: Path = DEFAULT_DATA_DIRECTORY) -> Dict[ServerSettingKey, str]:
    """
    Build the default value of every settings row

    Args:
        data_directory: Root under which the cache and bookmark folders live

    Returns:
        Mapping of key to serialized default value
    """
    data_directory = Path(data_directory).absolute()
    return {
        ServerSettingKey.CacheDirectory: str(data_directory / "cache"),
        ServerSettingKey.TaskScan: task_frequencies.DAILY,
        ServerSettingKey.TaskBackup: task_frequencies.DAILY,
        ServerSettingKey.LoggingLevel: LogLevel.Debug.value,
        ServerSettingKey.Port: str(configuration.DEFAULT_PORT),
        ServerSettingKey.IpAddresses: configuration.DEFAULT_IP_ADDRESSES,
        ServerSettingKey.AllowStatCollection: "True",
        ServerSettingKey.EnableOpds: "True",
        ServerSettingKey.BaseUrl: configuration.DEFAULT_BASE_URL,
        ServerSettingKey.BookmarkDirectory: str(data_directory / "bookmarks"),
        ServerSettingKey.EmailServiceUrl: DEFAULT_EMAIL_SERVICE_URL,
        ServerSettingKey.InstallVersion: INSTALL_VERSION,
        ServerSettingKey.EncodeMediaAs: EncodeFormat.PNG.value,
        ServerSettingKey.TotalBackups: "30",
        ServerSettingKey.EnableFolderWatching: "False",
        ServerSettingKey.TotalLogs: "30",
        ServerSettingKey.HostName: "",
        ServerSettingKey.CoverImageSize: CoverImageSize.Default.value,
        ServerSettingKey.OnDeckProgressDays: "30",
        ServerSettingKey.OnDeckUpdateDays: "7",
        ServerSettingKey.CacheSize: str(configuration.DEFAULT_CACHE_SIZE),
    }


# Permission name -> description
DEFAULT_PERMISSIONS = {
    "admin": "Full administrative access to all server functions",
    "can_download": "Can download archives of series and volumes",
    "can_bookmark": "Can save page bookmarks",
    "can_change_password": "Can change their own password",
}

DEFAULT_ROLES = {
    "Admin": {
        "description": "Full administrative access",
        "permissions": ["admin", "can_download", "can_bookmark", "can_change_password"],
    },
    "Reader": {
        "description": "Can read, bookmark and download",
        "permissions": ["can_download", "can_bookmark", "can_change_password"],
    },
    "Read-Only": {
        "description": "Can only read",
        "permissions": [],
    },
}
