"""
Folio Server - Configuration Store

Handles loading and saving the process-wide configuration mirror from/to
config/appsettings.json. Several values here are also settings rows; the
settings reconciler keeps both in sync after each commit.
"""

import json
import logging
import secrets
import threading
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


DEFAULT_PORT = 5000
DEFAULT_IP_ADDRESSES = "0.0.0.0,::"
DEFAULT_BASE_URL = "/"
DEFAULT_CACHE_SIZE = 75

# Default configuration values
DEFAULT_CONFIG = {
    "port": DEFAULT_PORT,
    "ip_addresses": DEFAULT_IP_ADDRESSES,
    "base_url": DEFAULT_BASE_URL,
    "cache_size": DEFAULT_CACHE_SIZE,
    "token_key": None,  # Generated on first load
    "data_directory": "data",
}


class ServerConfiguration:
    """
    Manages the server's appsettings.json

    Responsibilities:
    - Load appsettings.json, creating it with defaults when missing
    - Persist every update immediately
    - Provide typed access to the values other modules consult
    """

    def __init__(self, config_file: Path = Path("config/appsettings.json")):
        """
        Initialize configuration store

        Args:
            config_file: Path of the JSON file backing the store
        """
        self.config_file = Path(config_file)
        self.config: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def Load(self) -> Dict[str, Any]:
        """
        Load configuration from appsettings.json
        Missing keys are filled from DEFAULT_CONFIG and written back.

        Returns:
            Configuration dictionary
        """
        with self._lock:
            if self.config_file.exists():
                logger.debug(f"Loading configuration from {self.config_file}")
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    self.config = json.load(f)
            else:
                logger.info(f"Configuration file not found, creating default at {self.config_file}")
                self.config = {}

            changed = False
            for key, value in DEFAULT_CONFIG.items():
                if key not in self.config:
                    self.config[key] = value
                    changed = True

            if not self.config.get("token_key"):
                self.config["token_key"] = secrets.token_urlsafe(32)
                changed = True

            if changed:
                self._Save()

        return self.config

    def _Save(self) -> None:
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self.config, f, indent=2)
        logger.debug(f"Configuration saved to {self.config_file}")

    def Get(self, key: str, default: Optional[Any] = None) -> Any:
        return self.config.get(key, default)

    def Update(self, **values) -> None:
        """
        Set one or more configuration values and save to file

        Raises:
            KeyError: If a key is not a known configuration value
        """
        unknown = [key for key in values if key not in DEFAULT_CONFIG]
        if unknown:
            raise KeyError(f"Unknown configuration keys: {', '.join(unknown)}")

        with self._lock:
            self.config.update(values)
            self._Save()
        logger.info(f"Configuration updated: {', '.join(sorted(values))}")

    @property
    def port(self) -> int:
        return int(self.config.get("port", DEFAULT_PORT))

    @property
    def ip_addresses(self) -> str:
        return self.config.get("ip_addresses", DEFAULT_IP_ADDRESSES)

    @property
    def base_url(self) -> str:
        return self.config.get("base_url", DEFAULT_BASE_URL)

    @property
    def cache_size(self) -> int:
        return int(self.config.get("cache_size", DEFAULT_CACHE_SIZE))

    @property
    def token_key(self) -> str:
        return self.config.get("token_key") or ""

    @property
    def data_directory(self) -> Path:
        """Root for the database, cache, bookmarks and backups (relative to the config file)"""
        data_dir = Path(self.config.get("data_directory", "data"))
        if not data_dir.is_absolute():
            data_dir = self.config_file.parent.parent / data_dir
        return data_dir
