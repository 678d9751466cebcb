"""Database ports for the reports service.

This module defines the application-layer protocol for accessing the
database engine. Infrastructure implementations provide concrete adapters
that satisfy it.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the reports database engine.

    Application code can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_reports_engine(self) -> Engine:
        """Get the engine for the reports database.

        Returns:
            Engine: SQLAlchemy engine connected to the reports database.
        """


__all__ = ["DatabaseEnginePort"]
