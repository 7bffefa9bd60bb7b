from __future__ import annotations

import pytest

from core import config

ENV_VARS = (
    "APP_ENV",
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "CORS_ORIGINS",
    "DATABASE_URL",
    "DB_HOST",
    "DB_PORT",
    "DB_USER",
    "DB_PASSWORD",
    "DB_NAME",
    "DB_SSL",
    "DB_COMMAND_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = config.get_settings()

    assert settings.app_env == "development"
    assert settings.port == 3000
    assert settings.cors_origins == ["*"]
    assert settings.database.host == "localhost"
    assert settings.database.port == 5432
    assert settings.database.ssl is False
    assert settings.database.command_timeout == 30.0


def test_database_parts_from_env(monkeypatch):
    monkeypatch.setenv("DB_HOST", "db.internal")
    monkeypatch.setenv("DB_PORT", "6543")
    monkeypatch.setenv("DB_USER", "registry")
    monkeypatch.setenv("DB_PASSWORD", "s3cret")
    monkeypatch.setenv("DB_NAME", "names")
    monkeypatch.setenv("PORT", "8080")

    settings = config.get_settings()
    kwargs = settings.database.connect_kwargs()

    assert settings.port == 8080
    assert kwargs["host"] == "db.internal"
    assert kwargs["port"] == 6543
    assert kwargs["user"] == "registry"
    assert kwargs["password"] == "s3cret"
    assert kwargs["database"] == "names"
    assert kwargs["ssl"] is False
    assert "dsn" not in kwargs


def test_invalid_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("DB_PORT", "not-a-port")
    monkeypatch.setenv("DB_COMMAND_TIMEOUT", "soon")

    database = config.get_settings().database
    assert database.port == 5432
    assert database.command_timeout == 30.0


def test_ssl_defaults_on_in_production(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    settings = config.get_settings()

    assert settings.is_production
    assert settings.database.ssl is True
    assert settings.database.connect_kwargs()["ssl"] == "require"


def test_ssl_toggle_overrides_environment(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("DB_SSL", "false")
    assert config.get_settings().database.ssl is False


def test_database_url_drops_sslmode(monkeypatch):
    monkeypatch.setenv(
        "DATABASE_URL",
        "postgresql://u:p@db:5432/names?sslmode=require&application_name=registry",
    )
    database = config.get_settings().database
    kwargs = database.connect_kwargs()

    assert kwargs["dsn"] == "postgresql://u:p@db:5432/names?application_name=registry"
    assert kwargs["ssl"] == "require"
    assert "host" not in kwargs


def test_cors_origins_list(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, https://names.example ,")
    assert config.get_settings().cors_origins == ["http://localhost:5173", "https://names.example"]
