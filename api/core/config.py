"""
Environment-driven settings.

Values come from the process environment (a `.env` file is loaded by
`main.py` on startup). Invalid numeric values fall back to their defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_DB_PORT = 5432
DEFAULT_HTTP_PORT = 3000
DEFAULT_COMMAND_TIMEOUT = 30.0

_TRUTHY = {"1", "true", "yes", "on"}
_SSL_MODES = {"require", "verify-ca", "verify-full"}


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def _split_database_url(url: str) -> tuple[str, bool | None]:
    """
    Drop `sslmode` from the query string and report what it asked for.

    The TLS toggle is passed to asyncpg separately, so the DSN must not carry it.
    """
    parts = urlsplit(url)
    if not parts.query:
        return url, None

    ssl: bool | None = None
    params = []
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        if key == "sslmode":
            ssl = value.strip().lower() in _SSL_MODES
            continue
        params.append((key, value))
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment)), ssl


@dataclass(frozen=True)
class DatabaseSettings:
    host: str = "localhost"
    port: int = DEFAULT_DB_PORT
    user: str = "postgres"
    password: str = ""
    database: str = "postgres"
    ssl: bool = False
    command_timeout: float = DEFAULT_COMMAND_TIMEOUT
    dsn: str = ""

    def connect_kwargs(self) -> dict[str, Any]:
        """
        Keyword arguments for `asyncpg.create_pool`.

        TLS on means "encrypt, don't verify the certificate".
        """
        kwargs: dict[str, Any] = {
            "ssl": "require" if self.ssl else False,
            "command_timeout": self.command_timeout,
        }
        if self.dsn:
            kwargs["dsn"] = self.dsn
            return kwargs

        kwargs.update(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            database=self.database,
        )
        return kwargs


@dataclass(frozen=True)
class Settings:
    app_env: str
    host: str
    port: int
    log_level: str
    log_format: str
    cors_origins: list[str]
    database: DatabaseSettings

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


def database_settings(*, app_env: str) -> DatabaseSettings:
    ssl = _env_bool("DB_SSL", app_env == "production")
    dsn = ""
    url = _env_str("DATABASE_URL")
    if url:
        dsn, url_ssl = _split_database_url(url)
        if url_ssl is not None and os.environ.get("DB_SSL") is None:
            ssl = url_ssl

    return DatabaseSettings(
        host=_env_str("DB_HOST", "localhost"),
        port=_env_int("DB_PORT", DEFAULT_DB_PORT),
        user=_env_str("DB_USER", "postgres"),
        password=os.environ.get("DB_PASSWORD", ""),
        database=_env_str("DB_NAME", "postgres"),
        ssl=ssl,
        command_timeout=_env_float("DB_COMMAND_TIMEOUT", DEFAULT_COMMAND_TIMEOUT),
        dsn=dsn,
    )


def cors_origins() -> list[str]:
    raw = _env_str("CORS_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",")]
    return [origin for origin in origins if origin] or ["*"]


def get_settings() -> Settings:
    """
    Read the current environment and build a Settings instance.

    Not cached, so every call sees the environment as it is now.
    """
    app_env = _env_str("APP_ENV", "development").lower()
    return Settings(
        app_env=app_env,
        host=_env_str("HOST", "0.0.0.0"),
        port=_env_int("PORT", DEFAULT_HTTP_PORT),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        log_format=_env_str("LOG_FORMAT", "text").lower(),
        cors_origins=cors_origins(),
        database=database_settings(app_env=app_env),
    )
