"""
Folio Server - Infrastructure Models Package

This package contains dataclass models for infrastructure components
like scheduled jobs, reconciliation results and the server context.
"""

from models.infrastructure.recurring_job import RecurringJob
from models.infrastructure.reconciliation import PendingSettingChange, BookmarkMigration, ReconcileResult
from models.infrastructure.server_context import ServerContext

__all__ = [
    'RecurringJob',
    'PendingSettingChange',
    'BookmarkMigration',
    'ReconcileResult',
    'ServerContext',
]
