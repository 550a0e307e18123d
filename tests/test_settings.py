"""Tests for the application settings helper."""
from __future__ import annotations

from pathlib import Path

import pytest

from footballstats.config.settings import get_settings


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Ensure environment variables are cleared between tests."""
    monkeypatch.delenv("UPLOAD_DIR", raising=False)
    monkeypatch.delenv("WEBSITE_INSTANCE_ID", raising=False)
    monkeypatch.delenv("APP_DATA_DIR", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    yield


def test_get_settings_defaults_to_local_data_directory():
    """Without overrides the feed is stored under the local data directory."""
    settings = get_settings()

    assert settings.data_dir == Path("data")
    assert settings.results_path == Path("data") / "results.txt"
    assert settings.api_prefix == "/api/v1"
    assert settings.log_level == "INFO"


def test_get_settings_uses_upload_dir_overrides(monkeypatch):
    """When UPLOAD_DIR is defined it must take precedence over hosted defaults."""
    monkeypatch.setenv("UPLOAD_DIR", "/tmp/custom-data")
    monkeypatch.setenv("WEBSITE_INSTANCE_ID", "azure-instance")

    settings = get_settings()

    assert settings.data_dir == Path("/tmp/custom-data")
    assert settings.results_path == Path("/tmp/custom-data/results.txt")


def test_get_settings_defaults_to_persistent_storage_when_hosted(monkeypatch):
    """Hosted environments should persist the feed under /home/site/data by default."""
    monkeypatch.setenv("WEBSITE_INSTANCE_ID", "azure-instance")

    settings = get_settings()

    assert settings.data_dir == Path("/home/site/data")


def test_get_settings_allows_custom_hosted_storage_path(monkeypatch):
    """A custom APP_DATA_DIR environment variable should override the hosted path."""
    monkeypatch.setenv("WEBSITE_INSTANCE_ID", "azure-instance")
    monkeypatch.setenv("APP_DATA_DIR", "/home/site/custom-path")

    settings = get_settings()

    assert settings.data_dir == Path("/home/site/custom-path")


def test_get_settings_reads_log_level(monkeypatch):
    """LOG_LEVEL should set the log level independently of storage overrides."""
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("UPLOAD_DIR", "/tmp/custom-data")

    settings = get_settings()

    assert settings.log_level == "DEBUG"
    assert settings.data_dir == Path("/tmp/custom-data")
