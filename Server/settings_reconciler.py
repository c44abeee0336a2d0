"""
Folio Server - Settings Reconciler

Compares the stored settings rows against a desired ServerSettingDto and
applies the differences.

The work happens in two phases:
1. Plan - every key is normalized and validated. A failure raises before
   any row, side effect or configuration value has been touched. The
   bookmark directory write check runs last since it creates the directory.
2. Apply - rows are updated, immediate side effects fire (log level,
   stats job, folder watcher, email client) and the unit of work commits.

After a successful commit the configuration mirror is updated, bookmark
files are moved to a new bookmark directory (best effort) and recurring
tasks are rescheduled.
"""

import ipaddress
import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from exceptions import SettingsValidationError, SettingsPermissionError, SettingsPersistenceError
from models.api.settings import ServerSettingDto
from models.database import ServerSetting
from models.enums import ServerSettingKey
from models.infrastructure import (
    PendingSettingChange, BookmarkMigration, ReconcileResult, ServerContext
)
from managers.unit_of_work import UnitOfWork, DTO_FIELDS, SerializeSettingValue, SettingsToDto
from logging_config import SwitchLogLevel
import configuration
import seed

logger = logging.getLogger(__name__)

MIN_RETENTION = 1
MAX_RETENTION = 30
BOOKMARK_FOLDER_NAME = "bookmarks"

# Never changed through an update request
READ_ONLY_KEYS = {ServerSettingKey.CacheDirectory, ServerSettingKey.InstallVersion}

# Managed by the container environment when running in Docker
DOCKER_MANAGED_KEYS = {ServerSettingKey.Port, ServerSettingKey.IpAddresses}

# Settings that are mirrored into appsettings.json, with their configuration key
CONFIGURATION_MIRROR = {
    ServerSettingKey.Port: "port",
    ServerSettingKey.CacheSize: "cache_size",
    ServerSettingKey.IpAddresses: "ip_addresses",
    ServerSettingKey.BaseUrl: "base_url",
}


# ==================== Normalization Helpers ====================

def NormalizeBaseUrl(base_url: Optional[str]) -> str:
    """Ensure a base URL starts and ends with '/' ("foo" -> "/foo/")"""
    path = (base_url or "").strip()
    if not path.startswith("/"):
        path = f"/{path}"
    if not path.endswith("/"):
        path = f"{path}/"
    return path


def RemoveEndingSlash(url: Optional[str]) -> str:
    return (url or "").strip().rstrip("/")


def SplitIpAddresses(ip_addresses: Optional[str]) -> List[str]:
    """Comma separated entries, trimmed, empty entries dropped"""
    return [entry.strip() for entry in (ip_addresses or "").split(",") if entry.strip()]


def FindInvalidIpAddress(ip_addresses: Optional[str]) -> Optional[str]:
    """
    First entry that is not a valid IPv4/IPv6 address

    Returns:
        The offending entry, or None if every entry parses
    """
    for entry in SplitIpAddresses(ip_addresses):
        try:
            ipaddress.ip_address(entry)
        except ValueError:
            return entry
    return None


def NormalizeBookmarkDirectory(desired: Optional[str], current: str, directory_manager) -> str:
    """
    Resolve the bookmark directory to store

    Empty or blank keeps the current directory; otherwise 'bookmarks' is appended
    unless the path already ends with it. The result is an absolute path.
    """
    desired = (desired or "").strip()
    if not desired:
        return directory_manager.GetFullPath(current)

    bookmark_directory = desired
    if not (desired.endswith(BOOKMARK_FOLDER_NAME) or desired.endswith(f"{BOOKMARK_FOLDER_NAME}/")):
        bookmark_directory = directory_manager.JoinPath(desired, BOOKMARK_FOLDER_NAME)
    return directory_manager.GetFullPath(bookmark_directory)


def GetDefaultSettingsDto(context: ServerContext) -> ServerSettingDto:
    """Snapshot holding the first-run defaults"""
    return SettingsToDto(seed.GetDefaultSettings(context.configuration.data_directory))


# ==================== Reconciler ====================

class SettingsReconciler:
    """
    Applies desired settings against the settings table
    """

    def __init__(self, context: ServerContext):
        self.context = context

    # -------------------- Plan phase --------------------

    def _PlanValue(self, key: ServerSettingKey, stored: str, desired: ServerSettingDto) -> Optional[str]:
        """
        New serialized value for one key

        Returns:
            The value to store, or None when the key is left untouched

        Raises:
            SettingsValidationError
        """
        if key in READ_ONLY_KEYS:
            return None

        if key in DOCKER_MANAGED_KEYS and self.context.is_docker:
            return None

        raw_value = getattr(desired, DTO_FIELDS[key])

        if key == ServerSettingKey.IpAddresses:
            value = SerializeSettingValue(raw_value)
            if value == stored:
                return None
            invalid = FindInvalidIpAddress(value)
            if invalid is not None:
                raise SettingsValidationError("ip-address-invalid", invalid)
            return value

        if key == ServerSettingKey.BaseUrl:
            value = NormalizeBaseUrl(raw_value)

        elif key == ServerSettingKey.HostName:
            value = RemoveEndingSlash(raw_value)

        elif key == ServerSettingKey.EmailServiceUrl:
            value = RemoveEndingSlash(raw_value or self.context.email_manager.DEFAULT_API_URL)

        elif key == ServerSettingKey.BookmarkDirectory:
            value = NormalizeBookmarkDirectory(
                raw_value, stored or self.context.directory_manager.bookmark_directory, self.context.directory_manager
            )

        elif key in (ServerSettingKey.TotalBackups, ServerSettingKey.TotalLogs):
            value = SerializeSettingValue(raw_value)
            if value == stored:
                return None
            if raw_value < MIN_RETENTION or raw_value > MAX_RETENTION:
                message_key = "total-backups" if key == ServerSettingKey.TotalBackups else "total-logs"
                raise SettingsValidationError(message_key)
            return value

        else:
            value = SerializeSettingValue(raw_value)

        return None if value == stored else value

    def Plan(self, settings: List[ServerSetting], desired: ServerSettingDto) -> Tuple[List[PendingSettingChange], Optional[BookmarkMigration]]:
        """
        Validate the desired state against the stored rows
        Nothing is changed except creating an accepted new bookmark directory.

        Returns:
            (changes, bookmark migration or None)

        Raises:
            SettingsValidationError, SettingsPermissionError
        """
        changes = []
        migration = None

        for setting in settings:
            try:
                key = setting.setting_key
            except ValueError:
                logger.warning(f"Skipping unknown setting key: {setting.key}")
                continue

            new_value = self._PlanValue(key, setting.value, desired)
            if new_value is None:
                continue

            changes.append(PendingSettingChange(key=key, old_value=setting.value, new_value=new_value))
            if key == ServerSettingKey.BookmarkDirectory:
                migration = BookmarkMigration(source_directory=setting.value, target_directory=new_value)

        # Probing creates the directory, so it runs only once every other key passed
        if migration is not None:
            self._CheckBookmarkAccess(migration.target_directory)

        return changes, migration

    def _CheckBookmarkAccess(self, directory: str) -> None:
        """
        Raises:
            SettingsPermissionError: Directory is not writable; anything the probe created is removed
        """
        directory_manager = self.context.directory_manager
        created = directory_manager.FindFirstMissing(directory)
        if directory_manager.CheckWriteAccess(directory):
            return

        if created is not None:
            try:
                directory_manager.ClearAndDeleteDirectory(created)
            except OSError:
                logger.exception(f"Could not remove {created} after failed write check")
        raise SettingsPermissionError("bookmark-dir-permissions")

    # -------------------- Apply phase --------------------

    def _FireSideEffect(self, change: PendingSettingChange) -> None:
        """Side effects that take effect as soon as a value is accepted"""
        key = change.key
        try:
            if key == ServerSettingKey.LoggingLevel:
                SwitchLogLevel(change.new_value)

            elif key == ServerSettingKey.AllowStatCollection:
                if change.new_value == "True":
                    self.context.task_scheduler.ScheduleStatsTasks()
                else:
                    self.context.task_scheduler.CancelStatsTasks()

            elif key == ServerSettingKey.EnableFolderWatching:
                if change.new_value == "True":
                    self.context.library_watcher.StartWatching()
                else:
                    self.context.library_watcher.StopWatching()

            elif key == ServerSettingKey.EmailServiceUrl:
                self.context.email_manager.ConfigureClient(change.new_value)

        except Exception:
            logger.exception(f"Side effect for {key.value} failed")

    def _UpdateConfiguration(self, changes: List[PendingSettingChange]) -> None:
        values = {}
        for change in changes:
            config_key = CONFIGURATION_MIRROR.get(change.key)
            if config_key is None:
                continue
            if config_key in ("port", "cache_size"):
                values[config_key] = int(change.new_value)
            else:
                values[config_key] = change.new_value

        if values:
            self.context.configuration.Update(**values)

    def _MigrateBookmarks(self, migration: BookmarkMigration) -> bool:
        """Move bookmark files after commit; failures are logged, never rolled back"""
        try:
            self.context.directory_manager.MoveBookmarks(migration.source_directory, migration.target_directory)
            logger.info(f"Bookmarks moved from {migration.source_directory} to {migration.target_directory}")
            return True
        except OSError:
            logger.exception(
                f"Failed to move bookmarks from {migration.source_directory} to {migration.target_directory}"
            )
            return False

    def _Reschedule(self) -> None:
        try:
            self.context.task_scheduler.ScheduleTasks()
        except Exception:
            logger.exception("Failed to reschedule recurring tasks")

    def Reconcile(self, desired: ServerSettingDto) -> ReconcileResult:
        """
        Apply a desired settings state

        Args:
            desired: Full desired state

        Returns:
            ReconcileResult with the persisted snapshot

        Raises:
            SettingsValidationError: Invalid IP entry or retention count
            SettingsPermissionError: Bookmark directory not writable
            SettingsPersistenceError: Commit failed and was rolled back
        """
        with self.context.settings_lock, UnitOfWork(self.context.db_manager) as uow:
            settings = uow.settings.GetSettings()
            changes, migration = self.Plan(settings, desired)

            if not changes:
                logger.info("Server settings unchanged")
                return ReconcileResult(settings=desired)

            rows: Dict[str, ServerSetting] = {setting.key: setting for setting in settings}
            for change in changes:
                setting = rows[change.key.value]
                setting.value = change.new_value
                uow.settings.Update(setting)
                self._FireSideEffect(change)

            try:
                if uow.HasChanges():
                    uow.Commit()
            except SQLAlchemyError:
                logger.exception("There was an exception when updating server settings")
                uow.Rollback()
                raise SettingsPersistenceError("generic-error")

            logger.info(f"Server settings updated: {', '.join(change.key.value for change in changes)}")
            self._UpdateConfiguration(changes)

            result = ReconcileResult(
                settings=uow.settings.GetSettingsDto(),
                changed_keys=[change.key for change in changes],
                bookmark_migration=migration
            )

        if migration is not None:
            result.bookmark_migration_succeeded = self._MigrateBookmarks(migration)

        self._Reschedule()
        return result

    # -------------------- Reset operations --------------------

    def ResetSettings(self) -> ReconcileResult:
        """Restore every setting to its first-run default"""
        return self.Reconcile(GetDefaultSettingsDto(self.context))

    def _ResetSetting(self, key: ServerSettingKey, value: str) -> ServerSettingDto:
        with self.context.settings_lock, UnitOfWork(self.context.db_manager) as uow:
            setting = uow.settings.GetSetting(key)
            if setting is None:
                setting = ServerSetting(key=key.value, value=value)
            setting.value = value
            uow.settings.Update(setting)

            try:
                uow.Commit()
            except SQLAlchemyError:
                logger.exception(f"There was an exception when resetting {key.value}")
                uow.Rollback()
                raise SettingsPersistenceError("generic-error")

            return uow.settings.GetSettingsDto()

    def ResetIpAddresses(self) -> ServerSettingDto:
        snapshot = self._ResetSetting(ServerSettingKey.IpAddresses, configuration.DEFAULT_IP_ADDRESSES)
        self.context.configuration.Update(ip_addresses=configuration.DEFAULT_IP_ADDRESSES)
        return snapshot

    def ResetBaseUrl(self) -> ServerSettingDto:
        snapshot = self._ResetSetting(ServerSettingKey.BaseUrl, configuration.DEFAULT_BASE_URL)
        self.context.configuration.Update(base_url=configuration.DEFAULT_BASE_URL)
        return snapshot

    def ResetEmailServiceUrl(self) -> ServerSettingDto:
        return self._ResetSetting(ServerSettingKey.EmailServiceUrl, self.context.email_manager.DEFAULT_API_URL)
