"""
Tests for the appsettings.json configuration store and environment detection
"""

import json

import pytest

from configuration import ServerConfiguration, DEFAULT_PORT, DEFAULT_IP_ADDRESSES
from environment_info import IsDocker


def test_load_creates_file_with_defaults(tmp_path):
    config_file = tmp_path / "config" / "appsettings.json"
    config = ServerConfiguration(config_file)

    config.Load()

    assert config_file.exists()
    assert config.port == DEFAULT_PORT
    assert config.ip_addresses == DEFAULT_IP_ADDRESSES
    assert config.base_url == "/"
    assert config.token_key


def test_load_keeps_existing_values_and_token(tmp_path):
    config_file = tmp_path / "appsettings.json"
    config_file.write_text(json.dumps({"port": 8080, "token_key": "secret"}))

    config = ServerConfiguration(config_file)
    config.Load()

    assert config.port == 8080
    assert config.token_key == "secret"
    # Missing keys were filled in and saved
    assert json.loads(config_file.read_text())["cache_size"] == 75


def test_update_persists(tmp_path):
    config_file = tmp_path / "appsettings.json"
    config = ServerConfiguration(config_file)
    config.Load()

    config.Update(base_url="/comics/", port=9000)

    reloaded = ServerConfiguration(config_file)
    reloaded.Load()
    assert reloaded.base_url == "/comics/"
    assert reloaded.port == 9000


def test_update_rejects_unknown_keys(tmp_path):
    config = ServerConfiguration(tmp_path / "appsettings.json")
    config.Load()

    with pytest.raises(KeyError):
        config.Update(colour="blue")


def test_data_directory_relative_to_config(tmp_path):
    config = ServerConfiguration(tmp_path / "config" / "appsettings.json")
    config.Load()

    assert config.data_directory == tmp_path / "data"


def test_is_docker_from_environment(monkeypatch):
    monkeypatch.setenv("FOLIO_DOCKER", "true")
    assert IsDocker()
