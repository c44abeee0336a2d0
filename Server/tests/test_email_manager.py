"""
Tests for the email relay client
Network calls are replaced on the requests session.
"""

import requests

from managers import EmailManager


class FakeResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text


def test_successful_connectivity(monkeypatch):
    manager = EmailManager()
    calls = []

    def FakePost(url, json=None, timeout=None, verify=True):
        calls.append((url, json, verify))
        return FakeResponse(200)

    monkeypatch.setattr(manager.session, "post", FakePost)

    result = manager.TestConnectivity("https://mail.example.com/", "admin@example.com", True)

    assert result.successful
    assert result.email_address == "admin@example.com"
    assert calls == [(
        "https://mail.example.com/api/test",
        {"adminEmail": "admin@example.com", "sendEmail": True},
        True
    )]


def test_configured_endpoint_skips_certificate_verification(monkeypatch):
    manager = EmailManager()
    manager.ConfigureClient("https://relay.local/")
    verify_flags = []

    def FakePost(url, json=None, timeout=None, verify=True):
        verify_flags.append(verify)
        return FakeResponse(200)

    monkeypatch.setattr(manager.session, "post", FakePost)
    manager.TestConnectivity("https://relay.local", None, False)

    assert manager.IsUntrusted("https://relay.local")
    assert verify_flags == [False]


def test_error_status_is_reported(monkeypatch):
    manager = EmailManager()
    monkeypatch.setattr(manager.session, "post", lambda *args, **kwargs: FakeResponse(500, "relay down"))

    result = manager.TestConnectivity("https://mail.example.com", "admin@example.com", True)

    assert not result.successful
    assert result.error_message == "relay down"


def test_network_error_is_reported(monkeypatch):
    manager = EmailManager()

    def FakePost(*args, **kwargs):
        raise requests.exceptions.ConnectionError("connection refused")

    monkeypatch.setattr(manager.session, "post", FakePost)

    result = manager.TestConnectivity("https://mail.example.com", None, False)

    assert not result.successful
    assert "connection refused" in result.error_message


def test_empty_url_uses_default_relay(monkeypatch):
    manager = EmailManager()
    urls = []

    def FakePost(url, **kwargs):
        urls.append(url)
        return FakeResponse(200)

    monkeypatch.setattr(manager.session, "post", FakePost)
    manager.TestConnectivity("", None, False)

    assert urls == [f"{EmailManager.DEFAULT_API_URL}/api/test"]
