"""Configuration loaded from environment variables / .env file.

Variables:
    DATABASE_URL          Application store (PostgreSQL); also the migration source.
    MYSQL_DATABASE_URL    Migration target (MySQL).
    MIGRATION_LOG_FILE    Plain-text audit log written by the migrator.
    MIGRATION_BATCH_SIZE  Rows per multi-row INSERT.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.engine import URL, make_url

from orbit.errors import ConfigError

DEFAULT_MIGRATION_LOG = "migration_log.txt"
DEFAULT_BATCH_SIZE = 100

# Bare URL schemes (as written by Node/Neon tooling) -> installed SQLAlchemy driver
_DRIVER_ALIASES = {
    "postgres": "postgresql+psycopg2",
    "postgresql": "postgresql+psycopg2",
    "mysql": "mysql+pymysql",
}


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    database_url: str | None
    mysql_database_url: str | None
    migration_log_path: Path
    migration_batch_size: int


_config_instance: AppConfig | None = None


def get_config(reload: bool = False) -> AppConfig:
    """Load configuration from the environment.

    The project-root .env file is read once; real environment variables win.
    Returns the same instance on repeated calls unless reload is set.

    Args:
        reload: Discard the cached instance and re-read the environment.

    Returns:
        AppConfig instance.

    Raises:
        ConfigError: If MIGRATION_BATCH_SIZE is not a positive integer.
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    raw_batch = os.getenv("MIGRATION_BATCH_SIZE", str(DEFAULT_BATCH_SIZE))
    try:
        batch_size = int(raw_batch)
    except ValueError:
        raise ConfigError(f"MIGRATION_BATCH_SIZE must be an integer, got {raw_batch!r}") from None
    if batch_size < 1:
        raise ConfigError(f"MIGRATION_BATCH_SIZE must be positive, got {batch_size}")

    _config_instance = AppConfig(
        database_url=os.getenv("DATABASE_URL") or None,
        mysql_database_url=os.getenv("MYSQL_DATABASE_URL") or None,
        migration_log_path=Path(os.getenv("MIGRATION_LOG_FILE", DEFAULT_MIGRATION_LOG)),
        migration_batch_size=batch_size,
    )
    return _config_instance


def require_source_url(config: AppConfig | None = None) -> str:
    """Return DATABASE_URL or fail.

    Raises:
        ConfigError: If DATABASE_URL is not set.
    """
    config = config or get_config()
    if not config.database_url:
        raise ConfigError("DATABASE_URL is not set")
    return config.database_url


def require_target_url(config: AppConfig | None = None) -> str:
    """Return MYSQL_DATABASE_URL or fail.

    Raises:
        ConfigError: If MYSQL_DATABASE_URL is not set.
    """
    config = config or get_config()
    if not config.mysql_database_url:
        raise ConfigError("MYSQL_DATABASE_URL is not set")
    return config.mysql_database_url


def normalize_url(raw_url: str) -> URL:
    """Map a bare connection string onto an installed SQLAlchemy driver.

    Query options such as sslmode=require are left in place; the drivers
    accept them as connect arguments.

    Args:
        raw_url: Connection string such as postgresql://u:p@host/db.

    Returns:
        SQLAlchemy URL with an explicit driver.
    """
    url = make_url(raw_url)
    driver = _DRIVER_ALIASES.get(url.drivername)
    if driver is not None:
        url = url.set(drivername=driver)
    return url
