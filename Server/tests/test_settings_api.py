"""
Tests for the settings endpoints

Runs the FastAPI app against the temporary context through TestClient.
The client is not used as a context manager so the startup lifespan
(scheduler thread, logging setup) does not run.
"""

import inspect

import pytest
from fastapi.testclient import TestClient

from managers import DatabaseManager
from managers.unit_of_work import UnitOfWork
from models.database import User, Role
import routes.settings as settings_routes
from server import CreateApp


@pytest.fixture
def client(context):
    return TestClient(CreateApp(context))


def _Login(client, username, password):
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def admin_headers(client, db_manager):
    return _Login(client, "admin", db_manager.admin_password)


@pytest.fixture
def reader_headers(client, db_manager):
    with UnitOfWork(db_manager) as uow:
        role = uow.session.query(Role).filter(Role.role_name == "Reader").first()
        uow.session.add(User(
            username="reader",
            password_hash=DatabaseManager.HashPassword("reader-password"),
            role_id=role.role_id,
            locale="es"
        ))
        uow.Commit()
    return _Login(client, "reader", "reader-password")


def _SetAdminLocale(db_manager, locale):
    with UnitOfWork(db_manager) as uow:
        admin = uow.session.query(User).filter(User.username == "admin").first()
        admin.locale = locale
        uow.Commit()


# ==================== Public Endpoints ====================

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["folder_watching"] is False


def test_base_url_is_public(client):
    response = client.get("/api/settings/base-url")
    assert response.status_code == 200
    assert response.json() == "/"


def test_opds_enabled_is_public(client):
    response = client.get("/api/settings/opds-enabled")
    assert response.status_code == 200
    assert response.json() is True


# ==================== Authorization ====================

def test_login_with_wrong_password(client):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})
    assert response.status_code == 401


def test_settings_require_authentication(client):
    assert client.get("/api/settings").status_code == 401
    assert client.post("/api/settings/reset").status_code == 401


def test_settings_require_admin(client, reader_headers):
    response = client.get("/api/settings", headers=reader_headers)
    assert response.status_code == 403


def test_invalid_token_rejected(client):
    response = client.get("/api/settings", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


# ==================== Settings ====================

def test_get_settings(client, admin_headers):
    response = client.get("/api/settings", headers=admin_headers)
    assert response.status_code == 200

    body = response.json()
    assert body["port"] == 5000
    assert body["base_url"] == "/"
    assert body["total_backups"] == 30
    assert body["logging_level"] == "Debug"
    assert body["install_version"] == "1.0.0"


def test_update_settings(client, admin_headers):
    settings = client.get("/api/settings", headers=admin_headers).json()
    settings["base_url"] = "comics"
    settings["enable_opds"] = False

    response = client.post("/api/settings", json=settings, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["base_url"] == "/comics/"
    assert client.get("/api/settings/base-url").json() == "/comics/"
    assert client.get("/api/settings/opds-enabled").json() is False


def test_update_with_invalid_ip_returns_localized_400(client, admin_headers):
    settings = client.get("/api/settings", headers=admin_headers).json()
    settings["ip_addresses"] = "0.0.0.0,nope"

    response = client.post("/api/settings", json=settings, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "IP Address 'nope' is invalid"


def test_error_message_uses_user_locale(client, admin_headers, db_manager):
    _SetAdminLocale(db_manager, "es")
    settings = client.get("/api/settings", headers=admin_headers).json()
    settings["total_logs"] = 45

    response = client.post("/api/settings", json=settings, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "El total de registros debe estar entre 1 y 30"


def test_update_rejects_unknown_task_frequency(client, admin_headers):
    settings = client.get("/api/settings", headers=admin_headers).json()
    settings["task_scan"] = "hourly"

    response = client.post("/api/settings", json=settings, headers=admin_headers)
    assert response.status_code == 422


def test_reset_settings(client, admin_headers):
    settings = client.get("/api/settings", headers=admin_headers).json()
    settings["total_backups"] = 3
    client.post("/api/settings", json=settings, headers=admin_headers)

    response = client.post("/api/settings/reset", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["total_backups"] == 30


def test_reset_ip_addresses(client, admin_headers):
    settings = client.get("/api/settings", headers=admin_headers).json()
    settings["ip_addresses"] = "127.0.0.1"
    client.post("/api/settings", json=settings, headers=admin_headers)

    response = client.post("/api/settings/reset-ip-addresses", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["ip_addresses"] == "0.0.0.0,::"


def test_reset_base_url(client, admin_headers):
    settings = client.get("/api/settings", headers=admin_headers).json()
    settings["base_url"] = "/reader/"
    client.post("/api/settings", json=settings, headers=admin_headers)

    response = client.post("/api/settings/reset-base-url", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["base_url"] == "/"


def test_reset_email_url(client, admin_headers, context):
    response = client.post("/api/settings/reset-email-url", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["email_service_url"] == context.email_manager.DEFAULT_API_URL


# ==================== Email ====================

def test_email_test_with_default_provider_does_not_send(client, admin_headers, context):
    response = client.post(
        "/api/settings/test-email-url",
        json={"url": "https://mail.example.com"},
        headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["successful"] is True
    assert context.email_manager.tests == [("https://mail.example.com", None, False)]


def test_email_test_with_custom_provider_sends(client, admin_headers, context):
    settings = client.get("/api/settings", headers=admin_headers).json()
    settings["email_service_url"] = "https://mail.example.com"
    client.post("/api/settings", json=settings, headers=admin_headers)

    client.post("/api/settings/test-email-url", json={"url": "https://mail.example.com"}, headers=admin_headers)

    assert context.email_manager.tests[-1][2] is True


def test_email_relay_check_runs_in_threadpool():
    """The relay call blocks, so the handler must not be a coroutine"""
    assert not inspect.iscoroutinefunction(settings_routes.test_email_url)


# ==================== Static Options ====================

def test_task_frequencies(client, admin_headers):
    response = client.get("/api/settings/task-frequencies", headers=admin_headers)
    assert response.json() == ["disabled", "daily", "weekly"]


def test_library_types(client, admin_headers):
    response = client.get("/api/settings/library-types", headers=admin_headers)
    assert response.status_code == 200
    assert "Manga" in response.json()
    assert len(response.json()) == 5


def test_log_levels(client, admin_headers):
    response = client.get("/api/settings/log-levels", headers=admin_headers)
    assert response.json() == ["Trace", "Debug", "Information", "Warning", "Critical"]
