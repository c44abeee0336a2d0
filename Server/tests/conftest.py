"""
Shared fixtures for Folio Server tests

Builds a ServerContext over a temporary SQLite database and data directory.
The scheduler, watcher and email relay are replaced by recording fakes so
tests can assert which side effects fired.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from configuration import ServerConfiguration
from localization import LocalizationService
from managers import DatabaseManager, DirectoryManager, EmailManager
from models.api import EmailTestResult
from models.infrastructure import ServerContext
import seed


class FakeTaskScheduler:
    """Records scheduling calls instead of running jobs"""

    def __init__(self):
        self.calls = []

    def ScheduleTasks(self):
        self.calls.append("ScheduleTasks")

    def ScheduleStatsTasks(self):
        self.calls.append("ScheduleStatsTasks")

    def CancelStatsTasks(self):
        self.calls.append("CancelStatsTasks")

    def GetRecurringJobs(self):
        return []


class FakeLibraryWatcher:
    """Counts start/stop calls"""

    def __init__(self, watching: bool = False):
        self.watching = watching
        self.start_count = 0
        self.stop_count = 0

    def StartWatching(self):
        self.start_count += 1
        self.watching = True
        return True

    def StopWatching(self):
        self.stop_count += 1
        self.watching = False
        return True

    def IsWatching(self):
        return self.watching


class FakeEmailManager(EmailManager):
    """Real client configuration, recorded connectivity tests"""

    def __init__(self):
        super().__init__()
        self.tests = []

    def TestConnectivity(self, url, admin_email, send_email):
        self.tests.append((url, admin_email, send_email))
        return EmailTestResult(successful=True, email_address=admin_email)


@pytest.fixture
def configuration(tmp_path) -> ServerConfiguration:
    config = ServerConfiguration(tmp_path / "config" / "appsettings.json")
    config.Load()
    return config


@pytest.fixture
def db_manager(configuration):
    manager = DatabaseManager(str(configuration.data_directory / "folio.db"))
    manager.admin_password = manager.InitializeDatabase(seed.GetDefaultSettings(configuration.data_directory))
    yield manager
    manager.Dispose()


@pytest.fixture
def context(tmp_path, configuration, db_manager) -> ServerContext:
    data_directory = configuration.data_directory
    directory_manager = DirectoryManager(
        bookmark_directory=data_directory / "bookmarks",
        cache_directory=data_directory / "cache",
        backup_directory=data_directory / "backups",
        logs_directory=tmp_path / "logs"
    )
    return ServerContext(
        db_manager=db_manager,
        configuration=configuration,
        directory_manager=directory_manager,
        email_manager=FakeEmailManager(),
        task_scheduler=FakeTaskScheduler(),
        library_watcher=FakeLibraryWatcher(),
        localization=LocalizationService(db_manager),
        is_docker=False
    )
