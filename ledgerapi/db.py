"""Database engine construction."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from ledgerapi.config import Config


def build_dsn(config: Config) -> str:
    """Return the PostgreSQL connection URL for the given settings."""
    return (
        f"postgresql://{config.db_user}:{config.db_password}"
        f"@{config.db_host}:{config.db_port}/{config.db_name}?sslmode=disable"
    )


def new_db(config: Config) -> Engine:
    """Create a lazily connecting engine for the configured database."""
    return create_engine(build_dsn(config))