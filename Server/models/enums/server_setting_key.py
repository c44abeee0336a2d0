"""
Folio Server - Server Setting Key Enumeration

Enumerated identifiers for every configurable server parameter.
Each member maps to exactly one row in the settings table.
"""

from enum import Enum


class ServerSettingKey(str, Enum):
    """
    Keys of the settings table
    The value of each member is the string stored in the key column
    """
    CacheDirectory = "CacheDirectory"
    TaskScan = "TaskScan"
    TaskBackup = "TaskBackup"
    LoggingLevel = "LoggingLevel"
    Port = "Port"
    IpAddresses = "IpAddresses"
    AllowStatCollection = "AllowStatCollection"
    EnableOpds = "EnableOpds"
    BaseUrl = "BaseUrl"
    BookmarkDirectory = "BookmarkDirectory"
    EmailServiceUrl = "EmailServiceUrl"
    InstallVersion = "InstallVersion"
    EncodeMediaAs = "EncodeMediaAs"
    TotalBackups = "TotalBackups"
    EnableFolderWatching = "EnableFolderWatching"
    TotalLogs = "TotalLogs"
    HostName = "HostName"
    CoverImageSize = "CoverImageSize"
    OnDeckProgressDays = "OnDeckProgressDays"
    OnDeckUpdateDays = "OnDeckUpdateDays"
    CacheSize = "CacheSize"
