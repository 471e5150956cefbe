"""Application port for the host datasheet record store."""

from typing import Any, Protocol

from datasheet_finance.domain.models import (
    FieldMeta,
    PermissionCheck,
    RawRecord,
)


class RecordStorePort(Protocol):
    """Port exposing a datasheet view's fields, records and record writes."""

    def fetch_fields(self) -> list[FieldMeta]:
        """Return the fields of the active view, in view order."""

    def fetch_records(self) -> list[RawRecord]:
        """Return a snapshot of the records of the active view."""

    def can_add_record(self, values: dict[str, Any]) -> PermissionCheck:
        """Return whether a record with ``values`` may be created."""

    async def add_records(self, records: list[dict[str, Any]]) -> list[str]:
        """Create records and return their ids.

        Raises:
            Exception: Host-specific failure; records written before the
            failure are not rolled back.
        """


__all__ = ["RecordStorePort", "FieldMeta", "PermissionCheck", "RawRecord"]
