"""
Folio Server - Settings API Models

Pydantic models for the settings management endpoints.
ServerSettingDto is both the desired state accepted by POST /api/settings
and the snapshot returned by every settings endpoint.
"""

from pydantic import BaseModel, field_validator

from models.enums import EncodeFormat, CoverImageSize, LogLevel
import task_frequencies


class ServerSettingDto(BaseModel):
    """One strongly typed field per ServerSettingKey"""
    cache_directory: str = ""
    task_scan: str = task_frequencies.DAILY
    task_backup: str = task_frequencies.DAILY
    logging_level: LogLevel = LogLevel.Debug
    port: int = 5000
    # Comma separated list of addresses the server binds to
    ip_addresses: str = ""
    allow_stat_collection: bool = True
    enable_opds: bool = True
    base_url: str = "/"
    bookmarks_directory: str = ""
    email_service_url: str = ""
    install_version: str = ""
    encode_media_as: EncodeFormat = EncodeFormat.PNG
    total_backups: int = 30
    enable_folder_watching: bool = False
    total_logs: int = 30
    host_name: str = ""
    cover_image_size: CoverImageSize = CoverImageSize.Default
    on_deck_progress_days: int = 30
    on_deck_update_days: int = 7
    cache_size: int = 75

    @field_validator("task_scan", "task_backup")
    @classmethod
    def ValidateTaskFrequency(cls, value: str) -> str:
        value = (value or "").strip().lower()
        if value not in task_frequencies.OPTIONS:
            raise ValueError(f"Task frequency must be one of: {', '.join(task_frequencies.OPTIONS)}")
        return value
