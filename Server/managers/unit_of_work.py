"""
Folio Server - Unit of Work

Wraps one SQLAlchemy session for the lifetime of a request and exposes the
settings and user repositories that share it. Changes are only persisted by
Commit(); Rollback() discards them.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

from models.database import ServerSetting, User
from models.enums import ServerSettingKey
from models.api.settings import ServerSettingDto

logger = logging.getLogger(__name__)


# ServerSettingDto field for every key
DTO_FIELDS = {
    ServerSettingKey.CacheDirectory: "cache_directory",
    ServerSettingKey.TaskScan: "task_scan",
    ServerSettingKey.TaskBackup: "task_backup",
    ServerSettingKey.LoggingLevel: "logging_level",
    ServerSettingKey.Port: "port",
    ServerSettingKey.IpAddresses: "ip_addresses",
    ServerSettingKey.AllowStatCollection: "allow_stat_collection",
    ServerSettingKey.EnableOpds: "enable_opds",
    ServerSettingKey.BaseUrl: "base_url",
    ServerSettingKey.BookmarkDirectory: "bookmarks_directory",
    ServerSettingKey.EmailServiceUrl: "email_service_url",
    ServerSettingKey.InstallVersion: "install_version",
    ServerSettingKey.EncodeMediaAs: "encode_media_as",
    ServerSettingKey.TotalBackups: "total_backups",
    ServerSettingKey.EnableFolderWatching: "enable_folder_watching",
    ServerSettingKey.TotalLogs: "total_logs",
    ServerSettingKey.HostName: "host_name",
    ServerSettingKey.CoverImageSize: "cover_image_size",
    ServerSettingKey.OnDeckProgressDays: "on_deck_progress_days",
    ServerSettingKey.OnDeckUpdateDays: "on_deck_update_days",
    ServerSettingKey.CacheSize: "cache_size",
}


def SerializeSettingValue(value) -> str:
    """
    String form of a typed setting value as stored in the settings table

    bool -> "True"/"False", Enum -> its value, None -> "", anything else -> str()
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def SettingsToDto(values: Dict[ServerSettingKey, str]) -> ServerSettingDto:
    """
    Build a snapshot from serialized row values
    Keys without a row keep the ServerSettingDto default.
    """
    data = {}
    for key, raw in values.items():
        field = DTO_FIELDS.get(key)
        if field is None:
            continue
        annotation = ServerSettingDto.model_fields[field].annotation
        if annotation is bool:
            data[field] = raw.strip().lower() == "true"
        elif annotation is int:
            try:
                data[field] = int(raw)
            except ValueError:
                logger.warning(f"Setting {key.value} holds non-numeric value {raw!r}, using default")
        else:
            data[field] = raw
    return ServerSettingDto(**data)


def DtoToSettings(dto: ServerSettingDto) -> Dict[ServerSettingKey, str]:
    """Serialize every field of a snapshot, keyed by ServerSettingKey"""
    return {key: SerializeSettingValue(getattr(dto, field)) for key, field in DTO_FIELDS.items()}


class SettingsRepository:
    """
    Access to the settings table within a unit of work
    """

    def __init__(self, session):
        self.session = session

    def GetSettings(self) -> List[ServerSetting]:
        """All settings rows, ordered by key"""
        return self.session.query(ServerSetting).order_by(ServerSetting.key).all()

    def GetSetting(self, key: ServerSettingKey) -> Optional[ServerSetting]:
        return self.session.query(ServerSetting).filter(ServerSetting.key == key.value).first()

    def GetValue(self, key: ServerSettingKey, default: str = "") -> str:
        setting = self.GetSetting(key)
        return setting.value if setting else default

    def Update(self, setting: ServerSetting) -> None:
        """Mark a row as changed (attached to the session if it is not already)"""
        self.session.add(setting)

    def GetSettingsDto(self) -> ServerSettingDto:
        """Current snapshot of every setting"""
        values = {}
        for setting in self.GetSettings():
            try:
                values[setting.setting_key] = setting.value
            except ValueError:
                logger.warning(f"Ignoring unknown setting key in database: {setting.key}")
        return SettingsToDto(values)


class UserRepository:
    """
    Access to the users table within a unit of work
    """

    def __init__(self, session):
        self.session = session

    def GetUserById(self, user_id: int) -> Optional[User]:
        return self.session.query(User).filter(User.user_id == user_id).first()


class UnitOfWork:
    """
    One session, its repositories and the commit/rollback boundary

    Usage:
        with UnitOfWork(db_manager) as uow:
            setting = uow.settings.GetSetting(ServerSettingKey.BaseUrl)
            ...
            uow.Commit()
    """

    def __init__(self, db_manager):
        self.session = db_manager.GetSession()
        self.settings = SettingsRepository(self.session)
        self.users = UserRepository(self.session)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.Close()
        return False

    def HasChanges(self) -> bool:
        """True when rows were added, modified or deleted since the last commit"""
        if self.session.new or self.session.deleted:
            return True
        return any(self.session.is_modified(obj) for obj in self.session.dirty)

    def Commit(self) -> None:
        self.session.commit()

    def Rollback(self) -> None:
        self.session.rollback()

    def Close(self) -> None:
        self.session.close()
