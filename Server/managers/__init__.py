"""
Folio Server - Managers Package

This package contains manager classes for the database, the filesystem,
background tasks and outbound services.
"""

from managers.database_manager import DatabaseManager
from managers.unit_of_work import UnitOfWork
from managers.directory_manager import DirectoryManager
from managers.email_manager import EmailManager
from managers.task_scheduler import TaskScheduler
from managers.library_watcher import LibraryWatcher
from managers.library_scanner import LibraryScanner
from managers.stats_manager import StatsManager

__all__ = [
    'DatabaseManager',
    'UnitOfWork',
    'DirectoryManager',
    'EmailManager',
    'TaskScheduler',
    'LibraryWatcher',
    'LibraryScanner',
    'StatsManager',
]
