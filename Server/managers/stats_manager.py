"""
Folio Server - Stats Manager

Collects anonymous usage statistics and reports them to the stats endpoint.
Only scheduled while the AllowStatCollection setting is on.
"""

import logging
import platform
from typing import Any, Dict

import requests

from models.database import Library, Series, Volume, User
from models.enums import ServerSettingKey
from managers.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

STATS_API_URL = "https://stats.folioserver.net/api/v1/stats"


class StatsManager:
    """Builds and sends the anonymous stats payload"""

    def __init__(self, db_manager, is_docker: bool = False, api_url: str = STATS_API_URL,
                 timeout_seconds: float = 10.0):
        self.db_manager = db_manager
        self.is_docker = is_docker
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds

    def CollectStats(self) -> Dict[str, Any]:
        """Counts only; no names, paths or user data leave the server"""
        with UnitOfWork(self.db_manager) as uow:
            return {
                "install_version": uow.settings.GetValue(ServerSettingKey.InstallVersion),
                "is_docker": self.is_docker,
                "os": platform.system(),
                "python_version": platform.python_version(),
                "library_count": uow.session.query(Library).count(),
                "series_count": uow.session.query(Series).count(),
                "volume_count": uow.session.query(Volume).count(),
                "user_count": uow.session.query(User).count(),
            }

    def ReportStats(self) -> bool:
        """
        Send the stats payload

        Returns:
            bool: True if the endpoint accepted the payload
        """
        payload = self.CollectStats()
        try:
            response = requests.post(self.api_url, json=payload, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning(f"Could not report stats: {e}")
            return False

        logger.debug("Reported anonymous stats")
        return True
