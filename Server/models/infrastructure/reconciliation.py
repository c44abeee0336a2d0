"""
Folio Server - Reconciliation Models

Dataclasses describing a planned settings change and the outcome of a
reconciliation run.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from models.enums import ServerSettingKey
from models.api.settings import ServerSettingDto


@dataclass
class PendingSettingChange:
    """A validated new value for one settings row, not yet applied"""
    key: ServerSettingKey
    old_value: str
    new_value: str


@dataclass
class BookmarkMigration:
    """Bookmark files to move once the new directory has been committed"""
    source_directory: str
    target_directory: str


@dataclass
class ReconcileResult:
    """
    Outcome of a settings update
    settings is the persisted snapshot after commit, or the desired state
    unchanged when nothing differed.
    """
    settings: ServerSettingDto
    changed_keys: List[ServerSettingKey] = field(default_factory=list)
    bookmark_migration: Optional[BookmarkMigration] = None
    bookmark_migration_succeeded: Optional[bool] = None

    @property
    def has_changes(self) -> bool:
        return len(self.changed_keys) > 0
