# storefront_api/config.py

"""
Configuration for the storefront HTTP API.

All tunables are read from environment variables (and an optional ``.env``
file) through a pydantic-settings ``Settings`` object.

Required values
===============

- JWT_SECRET
    Secret used to sign session tokens.

- DATABASE_URL
    Full SQLAlchemy URL, e.g. ``mysql+pymysql://user:pw@db:3306/shop``.
    When unset, the URL is assembled from DATABASE_HOST, DATABASE_PORT,
    DATABASE_USER, DATABASE_PASSWORD and DATABASE_NAME, in which case
    host, user and name are required.

Startup fails closed: ``get_settings()`` raises ``ConfigurationError``
listing every missing or malformed field.

Typical usage
=============

    from storefront_api.config import get_settings

    settings = get_settings()
    engine = create_engine(settings.database_url)

Tests build a ``Settings`` instance directly and hand it to
``create_app(settings=...)`` or ``set_settings``.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class ConfigurationError(RuntimeError):
    """Raised when required settings are missing or malformed."""


_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str) -> int:
    """
    Convert a duration such as ``"7d"``, ``"12h"``, ``"30m"`` or ``"3600"``
    into seconds.
    """
    match = _DURATION_RE.match(value or "")
    if not match:
        raise ValueError(f"invalid duration {value!r}; expected e.g. '7d', '12h', '3600'")
    amount, unit = match.groups()
    seconds = int(amount) * _DURATION_UNITS[unit]
    if seconds <= 0:
        raise ValueError("duration must be positive")
    return seconds


class Settings(BaseSettings):
    """
    Central configuration registry for the storefront service.
    """

    # --- Application Meta ---
    APP_NAME: str = "storefront-api"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    HOST: str = "0.0.0.0"
    PORT: int = Field(3001, ge=1, le=65535)
    API_PREFIX: str = "/api"

    # --- Database ---
    DATABASE_URL: Optional[str] = None
    DATABASE_HOST: Optional[str] = None
    DATABASE_PORT: int = Field(3306, ge=1, le=65535)
    DATABASE_USER: Optional[str] = None
    DATABASE_PASSWORD: str = ""
    DATABASE_NAME: Optional[str] = None
    DATABASE_POOL_SIZE: int = Field(10, ge=1)
    DATABASE_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = False

    # --- Security ---
    JWT_SECRET: str = Field(..., min_length=1)
    JWT_EXPIRES_IN: str = "7d"
    SESSION_COOKIE_NAME: str = "at_token"
    SESSION_COOKIE_MAX_AGE: int = Field(86400, ge=0)
    BCRYPT_ROUNDS: int = Field(12, ge=4, le=31)

    # --- CORS ---
    CORS_ORIGIN: str = "*"

    # --- Notification collaborator (Emmisor) ---
    EMMISOR_API_KEY: Optional[str] = None
    EMMISOR_URL: Optional[str] = None
    EMMISOR_SERVICE_SLUG: Optional[str] = None
    EMMISOR_TIMEOUT: float = Field(10.0, gt=0)

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: LogFormat = LogFormat.CONSOLE

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("API_PREFIX")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = (value or "").strip().rstrip("/")
        if value and not value.startswith("/"):
            value = "/" + value
        return value

    @field_validator("JWT_EXPIRES_IN")
    @classmethod
    def _check_expiry(cls, value: str) -> str:
        parse_duration(value)
        return value.strip()

    @field_validator("LOG_LEVEL")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unknown log level {value!r}")
        return value

    @model_validator(mode="after")
    def _check_database(self) -> "Settings":
        if self.DATABASE_URL:
            return self
        missing = [
            name
            for name in ("DATABASE_HOST", "DATABASE_USER", "DATABASE_NAME")
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(
                "DATABASE_URL is not set and these are missing: " + ", ".join(missing)
            )
        return self

    # --- Derived values ---

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == AppEnv.PRODUCTION

    @property
    def database_url(self) -> str | URL:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "mysql+pymysql",
            username=self.DATABASE_USER,
            password=self.DATABASE_PASSWORD,
            host=self.DATABASE_HOST,
            port=self.DATABASE_PORT,
            database=self.DATABASE_NAME,
        )

    @property
    def token_ttl_seconds(self) -> int:
        return parse_duration(self.JWT_EXPIRES_IN)

    @property
    def cors_origins(self) -> List[str]:
        raw = (self.CORS_ORIGIN or "").strip()
        if not raw or raw == "*":
            return ["*"]
        return [p.strip() for p in raw.split(",") if p.strip()]

    @property
    def notifier_enabled(self) -> bool:
        return bool(self.EMMISOR_API_KEY and self.EMMISOR_URL)


# Singleton configuration instance
_SETTINGS: Optional[Settings] = None


def load_settings(**overrides) -> Settings:
    """
    Build a ``Settings`` object, converting pydantic validation failures into
    a ``ConfigurationError`` that names every offending field.
    """
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        problems = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err.get("loc", ())) or "settings"
            problems.append(f"{field}: {err.get('msg')}")
        raise ConfigurationError(
            "Invalid environment configuration:\n  " + "\n  ".join(problems)
        ) from exc


def get_settings() -> Settings:
    """
    Return the global Settings instance, creating it from environment
    variables on first use.
    """
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def set_settings(settings: Optional[Settings]) -> None:
    """
    Replace the global Settings instance.

    Mainly useful for tests and the CLI, where configuration is built
    explicitly instead of read from the environment.
    """
    global _SETTINGS
    _SETTINGS = settings


__all__ = [
    "AppEnv",
    "LogFormat",
    "ConfigurationError",
    "Settings",
    "parse_duration",
    "load_settings",
    "get_settings",
    "set_settings",
]
