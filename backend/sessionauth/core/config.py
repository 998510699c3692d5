"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Load .env in development (no-op when the file is absent)
load_dotenv()

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS: Final[dict[str, str]] = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_duration(value: str | int | float | timedelta) -> timedelta:
    """Parse a token lifetime such as ``"15m"`` or ``"7d"``.

    Accepted forms are a bare number of seconds, or a number followed by one
    of ``s``, ``m``, ``h`` or ``d``. Existing :class:`~datetime.timedelta`
    values pass through unchanged.

    :param value: Raw duration.
    :returns: Parsed duration.
    :rtype: timedelta
    :raises ValueError: If the value cannot be parsed or is not positive.
    """
    if isinstance(value, timedelta):
        duration = value
    elif isinstance(value, int | float):
        duration = timedelta(seconds=value)
    else:
        match = _DURATION_RE.match(str(value))
        if match is None:
            raise ValueError(f"Invalid duration: {value!r}")
        amount, unit = match.groups()
        duration = timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})
    if duration <= timedelta(0):
        raise ValueError(f"Duration must be positive: {value!r}")
    return duration


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    ACCESS_TOKEN_SECRET: str | None
        Symmetric key signing access credentials. Required.
    SESSION_TOKEN_SECRET: str | None
        Symmetric key signing session credentials. Required and distinct from
        the access secret.
    ACCESS_TOKEN_EXPIRES: str
        Access credential lifetime (``"15m"`` by default).
    SESSION_TOKEN_EXPIRES: str
        Session credential lifetime (``"7d"`` by default).
    SESSION_HASH_ROUNDS: int
        bcrypt cost factor used when hashing session secrets.
    SESSION_STORE_BACKEND: str
        ``"sql"`` (default) or ``"redis"``.
    SESSION_STORE_TIMEOUT: float
        Socket timeout (seconds) for the Redis session store.
    REDIS_URL: str | None
        Redis connection string, required for the ``redis`` backend.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables. Secrets have no
    defaults: building the app without them fails at startup.
    """

    API_BASE_PREFIX = "/api"

    # Signing secrets
    ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET")
    SESSION_TOKEN_SECRET = os.getenv("SESSION_TOKEN_SECRET")

    # Lifetimes
    ACCESS_TOKEN_EXPIRES = os.getenv("ACCESS_TOKEN_EXPIRES", "15m")
    SESSION_TOKEN_EXPIRES = os.getenv("SESSION_TOKEN_EXPIRES", "7d")

    # Session store
    SESSION_HASH_ROUNDS = int(os.getenv("SESSION_HASH_ROUNDS", "10"))
    SESSION_STORE_BACKEND = os.getenv("SESSION_STORE_BACKEND", "sql")
    SESSION_STORE_TIMEOUT = float(os.getenv("SESSION_STORE_TIMEOUT", "5"))
    REDIS_URL = os.getenv("REDIS_URL")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Ships fixed, distinct signing secrets and the minimum bcrypt cost so
      the suite stays fast.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    ACCESS_TOKEN_SECRET = "test-access-secret-0123456789abcdef"
    SESSION_TOKEN_SECRET = "test-session-secret-fedcba9876543210"
    SESSION_HASH_ROUNDS = 4
    SESSION_STORE_BACKEND = "sql"
    PROPAGATE_EXCEPTIONS = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments."""

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
