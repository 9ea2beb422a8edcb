# -*- coding: utf-8 -*-
"""
Configuration for the catalog service.

Everything comes from environment variables (optionally loaded from a `.env`
file). `build_connection_descriptor` is a pure function of a mapping so it can
be tested without touching `os.environ` or a live database.

Fails fast: a missing DB_HOST / DB_NAME (without DATABASE_URL) or an
unparseable number raises `ConfigurationError` and the app never starts.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from dotenv import find_dotenv, load_dotenv
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError

from catalog.errors import ConfigurationError

DEFAULT_DRIVER = "postgresql+psycopg2"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Everything needed to reach the relational store.

    Either `url` (an explicit connection string) is set, or the discrete
    fields are. Passwords are kept out of `repr`.
    """
    driver: str = DEFAULT_DRIVER
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    trust_server_certificate: bool = False
    url: Optional[str] = field(default=None, repr=False)

    def sqlalchemy_url(self) -> URL:
        if self.url:
            return make_url(self.url)
        return URL.create(
            drivername=self.driver,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
            query=_trust_query(self.driver, self.trust_server_certificate),
        )

    def render(self) -> str:
        """Full URL string, password included. Only hand this to create_engine."""
        return self.sqlalchemy_url().render_as_string(hide_password=False)

    def safe_url(self) -> str:
        """URL with the password masked, for logs."""
        return self.sqlalchemy_url().render_as_string(hide_password=True)

    @property
    def backend(self) -> str:
        return self.sqlalchemy_url().get_backend_name()


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, built once at startup."""
    database: ConnectionDescriptor
    environment: str = "development"
    log_level: str = "INFO"
    log_file: Optional[str] = None
    cors_origins: Tuple[str, ...] = ()
    pool_size: int = 5
    pool_timeout: int = 30
    connect_timeout: int = 10
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


def _trust_query(driver: str, trust: bool) -> dict:
    # TrustServerCertificate is the SQL Server / ODBC spelling;
    # sslmode=require is libpq's "encrypt but don't verify".
    backend = driver.split("+", 1)[0]
    if backend == "mssql":
        return {"TrustServerCertificate": "yes" if trust else "no"}
    if backend == "postgresql" and trust:
        return {"sslmode": "require"}
    return {}


def _get(config: Mapping[str, str], key: str) -> Optional[str]:
    """Return the stripped value for `key`, or None when unset/blank."""
    value = config.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _get_required(config: Mapping[str, str], key: str) -> str:
    value = _get(config, key)
    if value is None:
        raise ConfigurationError(
            f"Required environment variable '{key}' is not set "
            f"(or set DATABASE_URL with a full connection string)."
        )
    return value


def _parse_bool(config: Mapping[str, str], key: str, default: bool = False) -> bool:
    value = _get(config, key)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"'{key}' must be a boolean flag, got {value!r}.")


def _parse_int(config: Mapping[str, str], key: str, default: Optional[int] = None,
               minimum: int = 1, maximum: Optional[int] = None) -> Optional[int]:
    value = _get(config, key)
    if value is None:
        return default
    try:
        number = int(value)
    except ValueError:
        raise ConfigurationError(f"'{key}' must be an integer, got {value!r}.") from None
    if number < minimum or (maximum is not None and number > maximum):
        raise ConfigurationError(f"'{key}' is out of range: {number}.")
    return number


def build_connection_descriptor(config: Mapping[str, str]) -> ConnectionDescriptor:
    """Assemble the connection descriptor from configuration values.

    An explicit DATABASE_URL wins over the discrete DB_* fields. Otherwise
    DB_HOST and DB_NAME are required; DB_PORT, DB_USER, DB_PASSWORD,
    DB_DRIVER and DB_TRUST_SERVER_CERTIFICATE are optional.

    Raises:
        ConfigurationError: if the result would not identify a database.
    """
    explicit = _get(config, "DATABASE_URL")
    if explicit:
        # Heroku/Render style prefix, not accepted by SQLAlchemy 1.4+
        if explicit.startswith("postgres://"):
            explicit = explicit.replace("postgres://", "postgresql://", 1)
        try:
            make_url(explicit)
        except ArgumentError as e:
            raise ConfigurationError(f"DATABASE_URL is not a valid connection string: {e}") from None
        return ConnectionDescriptor(url=explicit)

    return ConnectionDescriptor(
        driver=_get(config, "DB_DRIVER") or DEFAULT_DRIVER,
        host=_get_required(config, "DB_HOST"),
        port=_parse_int(config, "DB_PORT", maximum=65535),
        database=_get_required(config, "DB_NAME"),
        user=_get(config, "DB_USER"),
        password=config.get("DB_PASSWORD") or None,
        trust_server_certificate=_parse_bool(config, "DB_TRUST_SERVER_CERTIFICATE"),
    )


def build_settings(config: Mapping[str, str]) -> Settings:
    """Build the full `Settings` from a configuration mapping."""
    origins = _get(config, "CORS_ORIGINS") or ""
    log_level = (_get(config, "LOG_LEVEL") or "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"'LOG_LEVEL' is not a logging level: {log_level!r}.")
    return Settings(
        database=build_connection_descriptor(config),
        environment=_get(config, "ENVIRONMENT") or "development",
        log_level=log_level,
        log_file=_get(config, "LOG_FILE"),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        pool_size=_parse_int(config, "DB_POOL_SIZE", default=5),
        pool_timeout=_parse_int(config, "DB_POOL_TIMEOUT", default=30),
        connect_timeout=_parse_int(config, "DB_CONNECT_TIMEOUT", default=10),
        host=_get(config, "HOST") or "0.0.0.0",
        port=_parse_int(config, "PORT", default=8000, maximum=65535),
    )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Load settings from the process environment.

    A `.env` file found from the working directory upwards is read first; variables already
    present in the environment are not overridden by it. Pass `environ` to
    bypass both (tests).
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ
    return build_settings(environ)
