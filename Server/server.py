"""
Folio Server - Main FastAPI Application

This module wires the collaborators of the Folio server together and
exposes the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from configuration import ServerConfiguration
from environment_info import IsDocker
from localization import LocalizationService
from logging_config import ConfigureLogging, SwitchLogLevel
from managers import (
    DatabaseManager, DirectoryManager, EmailManager, TaskScheduler,
    LibraryWatcher, LibraryScanner, StatsManager, UnitOfWork
)
from managers import maintenance_tasks
from managers.task_scheduler import SCAN_JOB_ID, BACKUP_JOB_ID, CLEANUP_JOB_ID, STATS_JOB_ID
from models.enums import ServerSettingKey
from models.infrastructure import ServerContext
import seed

logger = logging.getLogger(__name__)

CONFIG_FILE = Path("config/appsettings.json")
LOGS_DIR = Path("logs")


# ==================== Server Context ====================

def BuildServerContext(config_file: Path = CONFIG_FILE, logs_dir: Path = LOGS_DIR) -> ServerContext:
    """
    Create every collaborator and seed the database on first run

    Args:
        config_file: Location of appsettings.json
        logs_dir: Directory holding the rotating log files

    Returns:
        ServerContext ready to be placed on app.state
    """
    configuration = ServerConfiguration(config_file)
    configuration.Load()
    data_dir = configuration.data_directory

    db_manager = DatabaseManager(str(data_dir / "folio.db"))
    admin_password = db_manager.InitializeDatabase(seed.GetDefaultSettings(data_dir))
    if admin_password:
        logger.warning("=" * 60)
        logger.warning("NEW ADMIN USER CREATED")
        logger.warning("Username: admin")
        logger.warning(f"Password: {admin_password}")
        logger.warning("SAVE THIS PASSWORD - IT WILL NOT BE SHOWN AGAIN!")
        logger.warning("=" * 60)

    with UnitOfWork(db_manager) as uow:
        bookmark_directory = uow.settings.GetValue(ServerSettingKey.BookmarkDirectory, str(data_dir / "bookmarks"))
        cache_directory = uow.settings.GetValue(ServerSettingKey.CacheDirectory, str(data_dir / "cache"))
        email_service_url = uow.settings.GetValue(ServerSettingKey.EmailServiceUrl)

    directory_manager = DirectoryManager(
        bookmark_directory=bookmark_directory,
        cache_directory=cache_directory,
        backup_directory=data_dir / "backups",
        logs_directory=logs_dir
    )
    for directory in (bookmark_directory, cache_directory):
        directory_manager.ExistOrCreate(directory)

    is_docker = IsDocker()
    email_manager = EmailManager()
    if email_service_url and email_service_url != EmailManager.DEFAULT_API_URL:
        email_manager.ConfigureClient(email_service_url)

    scanner = LibraryScanner(db_manager)
    stats_manager = StatsManager(db_manager, is_docker=is_docker)

    task_scheduler = TaskScheduler(db_manager, handlers={
        SCAN_JOB_ID: scanner.ScanLibraries,
        BACKUP_JOB_ID: lambda: maintenance_tasks.BackupDatabase(db_manager, directory_manager),
        CLEANUP_JOB_ID: lambda: maintenance_tasks.CleanupLogs(db_manager, directory_manager),
        STATS_JOB_ID: stats_manager.ReportStats,
    })

    library_watcher = LibraryWatcher(
        folder_provider=scanner.GetLibraryFolders,
        on_change=scanner.ScanLibrary
    )

    return ServerContext(
        db_manager=db_manager,
        configuration=configuration,
        directory_manager=directory_manager,
        email_manager=email_manager,
        task_scheduler=task_scheduler,
        library_watcher=library_watcher,
        localization=LocalizationService(db_manager),
        is_docker=is_docker
    )


def StartBackgroundServices(context: ServerContext) -> None:
    """Apply the stored log level, schedule tasks and start the watcher if enabled"""
    with UnitOfWork(context.db_manager) as uow:
        logging_level = uow.settings.GetValue(ServerSettingKey.LoggingLevel)
        folder_watching = uow.settings.GetValue(ServerSettingKey.EnableFolderWatching) == "True"

    if logging_level:
        SwitchLogLevel(logging_level)

    context.task_scheduler.ScheduleTasks()
    context.task_scheduler.Start()

    if folder_watching:
        context.library_watcher.StartWatching()


def StopBackgroundServices(context: ServerContext) -> None:
    context.library_watcher.StopWatching()
    context.task_scheduler.Stop()
    context.email_manager.close()
    context.db_manager.Dispose()


# ==================== Lifespan Events ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler for startup and shutdown
    Builds the server context unless one was injected via CreateApp()
    """
    logger.info("Folio Server starting up...")

    if getattr(app.state, "context", None) is None:
        ConfigureLogging(LOGS_DIR)
        app.state.context = BuildServerContext()
    context: ServerContext = app.state.context

    StartBackgroundServices(context)
    logger.info("Server startup complete")

    yield

    logger.info("Folio Server shutting down...")
    StopBackgroundServices(context)
    logger.info("Shutdown complete")


# ==================== FastAPI Application ====================

def CreateApp(context: Optional[ServerContext] = None) -> FastAPI:
    """
    Create the FastAPI application

    Args:
        context: Pre-built collaborators (tests); built at startup when omitted
    """
    app = FastAPI(
        title="Folio Server",
        description="Self-hosted e-book and comic reader server",
        version=seed.INSTALL_VERSION,
        lifespan=lifespan
    )
    app.state.context = context

    # The web UI may be served from another origin during development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from routes import status, auth, settings

    app.include_router(status.router)
    app.include_router(auth.router)
    app.include_router(settings.router)

    return app


app = CreateApp()


# ==================== Main Entry Point ====================

if __name__ == "__main__":
    configuration = ServerConfiguration(CONFIG_FILE)
    configuration.Load()

    # In Docker the container maps the port, bind to every interface
    host = "0.0.0.0" if IsDocker() else configuration.ip_addresses.split(",")[0].strip() or "0.0.0.0"

    logger.info("Starting Folio Server...")
    uvicorn.run(
        "server:app",
        host=host,
        port=configuration.port,
        reload=False,
        log_level="info"
    )
