"""
Folio Server - Email Manager

Outbound HTTP communication with the email relay service used for
password resets, invites and send-to-device.
"""

import logging
import threading
from typing import Optional, Set

import requests

from models.api.email import EmailTestResult
import seed

logger = logging.getLogger(__name__)


class EmailManager:
    """
    Client for the email relay

    Responsibilities:
    - Keep one requests session for all relay calls
    - Track relay endpoints whose certificates are accepted without verification
    - Test connectivity against a candidate relay
    """

    DEFAULT_API_URL = seed.DEFAULT_EMAIL_SERVICE_URL

    def __init__(self, timeout_seconds: float = 10.0):
        """
        Initialize email manager

        Args:
            timeout_seconds: Timeout applied to every relay request
        """
        self.timeout_seconds = timeout_seconds
        self.session = requests.Session()
        self._untrusted_endpoints: Set[str] = set()
        self._lock = threading.Lock()

    def close(self):
        """Close the session and release resources"""
        if self.session:
            self.session.close()

    @staticmethod
    def NormalizeUrl(url: str) -> str:
        return (url or "").strip().rstrip("/")

    def ConfigureClient(self, url: str) -> None:
        """
        Accept otherwise untrusted certificates for one relay endpoint
        Self-hosted relays commonly run behind self-signed certificates.

        Args:
            url: Base URL of the relay
        """
        endpoint = self.NormalizeUrl(url)
        if not endpoint:
            return
        with self._lock:
            self._untrusted_endpoints.add(endpoint)
        logger.info(f"Email relay client configured for {endpoint} (untrusted certificates accepted)")

    def IsUntrusted(self, url: str) -> bool:
        endpoint = self.NormalizeUrl(url)
        with self._lock:
            return any(endpoint == known or endpoint.startswith(known + "/") for known in self._untrusted_endpoints)

    def _Verify(self, url: str) -> bool:
        return not self.IsUntrusted(url)

    def TestConnectivity(self, url: str, admin_email: Optional[str], send_email: bool) -> EmailTestResult:
        """
        Check that a relay is reachable and answering

        Args:
            url: Base URL of the candidate relay
            admin_email: Address of the administrator running the test
            send_email: Whether the relay should also send a test email;
                        false for the built-in provider

        Returns:
            EmailTestResult: Never raises on network errors
        """
        endpoint = self.NormalizeUrl(url) or self.DEFAULT_API_URL
        payload = {"adminEmail": admin_email or "", "sendEmail": bool(send_email)}

        try:
            response = self.session.post(
                f"{endpoint}/api/test",
                json=payload,
                timeout=self.timeout_seconds,
                verify=self._Verify(endpoint)
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"Email relay {endpoint} is not reachable: {e}")
            return EmailTestResult(successful=False, error_message=str(e), email_address=admin_email)

        if response.status_code >= 400:
            message = response.text.strip() or f"HTTP {response.status_code}"
            logger.warning(f"Email relay {endpoint} answered {response.status_code}: {message}")
            return EmailTestResult(successful=False, error_message=message, email_address=admin_email)

        logger.info(f"Email relay {endpoint} connectivity test succeeded")
        return EmailTestResult(successful=True, email_address=admin_email)
