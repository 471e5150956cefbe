"""Database ports for the datasheet record store.

Infrastructure implementations provide concrete adapters that satisfy these
ports, so use cases and stores never read connection settings themselves.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine backing the datasheet tables."""

    def get_datasheet_engine(self) -> Engine:
        """Get the engine for the datasheet database.

        Returns:
            Engine: SQLAlchemy engine connected to the datasheet tables.
        """


__all__ = ["DatabaseEnginePort"]
