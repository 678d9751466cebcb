"""Database infrastructure for the reports service.

This module exposes helpers to create and reuse the SQLAlchemy engine
connected to the reports database. It belongs to the infrastructure layer
because it deals with external systems (PostgreSQL, SQLite).
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Values from a local ``.env`` file are loaded first.

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
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine with health checks enabled. Server
        databases get a small connection pool; SQLite files are shared
        across consumer threads.
    """
    if db_url.startswith("sqlite"):
        return create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            pool_pre_ping=True,
            future=True,
        )
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_reports_engine: Optional[Engine] = None


def get_reports_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the reports database.

    Returns:
        Engine: Lazily initialized engine connected to REPORTS_DB_URL.
    """
    global _reports_engine
    if _reports_engine is None:
        db_url = _get_env_var("REPORTS_DB_URL")
        _reports_engine = _create_engine(db_url)
    return _reports_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port. An explicit engine can be injected, which the tests
    and one-off scripts use to point at a scratch database.
    """

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine

    def get_reports_engine(self) -> Engine:
        """Get the engine for the reports database.

        Returns:
            Engine: SQLAlchemy engine connected to the reports database.
        """
        if self._engine is not None:
            return self._engine
        return get_reports_engine()


__all__ = [
    "get_reports_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
