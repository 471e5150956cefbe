"""Database infrastructure for the datasheet record store.

This module exposes helpers to create and reuse the SQLAlchemy engine that
holds the datasheet fields and records.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from datasheet_finance.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        Engine: Engine with health checks enabled; server databases also get
        a small connection pool.
    """
    if db_url.startswith("sqlite"):
        return create_engine(db_url, future=True)
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_datasheet_engine: Optional[Engine] = None


def get_datasheet_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the datasheet database.

    Returns:
        Engine: Lazily initialized engine from ``DATASHEET_DB_URL``.
    """
    global _datasheet_engine
    if _datasheet_engine is None:
        db_url = _get_env_var("DATASHEET_DB_URL")
        _datasheet_engine = _create_engine(db_url)
    return _datasheet_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by SQLAlchemy engines."""

    def __init__(self, engine: Engine | None = None) -> None:
        """Initialize the adapter.

        Args:
            engine: Optional engine to use instead of the environment one.
        """
        self._engine = engine

    def get_datasheet_engine(self) -> Engine:
        """Get the engine for the datasheet database.

        Returns:
            Engine: Injected engine, or the environment singleton.
        """
        if self._engine is not None:
            return self._engine
        return get_datasheet_engine()


__all__ = [
    "get_datasheet_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
