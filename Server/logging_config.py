"""
Folio Server - Logging Configuration

Configures console and rotating file logging for the server and switches
the live log level when the LoggingLevel setting changes.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from models.enums import LogLevel

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILENAME = "folio-server.log"

# Below DEBUG, used for very chatty diagnostics
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LEVEL_MAP = {
    LogLevel.Trace: TRACE,
    LogLevel.Debug: logging.DEBUG,
    LogLevel.Information: logging.INFO,
    LogLevel.Warning: logging.WARNING,
    LogLevel.Critical: logging.CRITICAL,
}

logger = logging.getLogger(__name__)


def ConfigureLogging(logs_dir: Path = Path("logs"), level: Optional[str] = None) -> Path:
    """
    Configure logging to write to both console and file

    Args:
        logs_dir: Directory for the rotating log files (created if missing)
        level: Initial LogLevel name, defaults to Information

    Returns:
        Path of the active log file
    """
    logs_dir = Path(logs_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_filename = logs_dir / LOG_FILENAME

    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
            # Max 10MB per file, keep 10 backup files
            RotatingFileHandler(
                log_filename,
                maxBytes=10 * 1024 * 1024,
                backupCount=10,
                encoding='utf-8'
            )
        ],
        force=True
    )

    if level:
        SwitchLogLevel(level)

    return log_filename


def ToLoggingLevel(level) -> int:
    """
    Map a LogLevel (member or name) to a stdlib logging level

    Raises:
        ValueError: If the name is not a LogLevel
    """
    return LEVEL_MAP[LogLevel(level)]


def SwitchLogLevel(level) -> int:
    """
    Switch the root logger verbosity immediately

    Args:
        level: LogLevel member or its name ('Trace', 'Debug', ...)

    Returns:
        The stdlib logging level now in effect
    """
    numeric_level = ToLoggingLevel(level)
    logging.getLogger().setLevel(numeric_level)
    logger.info(f"Log level switched to {LogLevel(level).value}")
    return numeric_level
