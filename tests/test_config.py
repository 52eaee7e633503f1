# tests/test_config.py
import pytest

from src.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("ADMIN_DATABASE_URL", "ADMIN_HOST", "ADMIN_PORT", "ADMIN_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.database_url == "sqlite:///admin_metadata.db"
    assert settings.host == ""
    assert settings.port == 8000
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ADMIN_DATABASE_URL", "sqlite:///tmp.db")
    monkeypatch.setenv("ADMIN_PORT", "9090")
    monkeypatch.setenv("ADMIN_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.database_url == "sqlite:///tmp.db"
    assert settings.port == 9090
    assert settings.log_level == "DEBUG"


def test_malformed_port_falls_back(monkeypatch):
    monkeypatch.setenv("ADMIN_PORT", "not-a-port")
    assert get_settings().port == 8000
