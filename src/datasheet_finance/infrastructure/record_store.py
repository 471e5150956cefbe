"""Datasheet record store backed by SQLAlchemy tables."""

import asyncio
import json
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import text

from datasheet_finance.application.ports.database import DatabaseEnginePort
from datasheet_finance.application.ports.record_store import RecordStorePort
from datasheet_finance.domain.models import (
    FieldMeta,
    PermissionCheck,
    RawRecord,
)
from datasheet_finance.domain.services.normalization import cell_to_text
from datasheet_finance.infrastructure.logging.logger import get_app_logger


CREATE_FIELDS_SQL = """
CREATE TABLE IF NOT EXISTS datasheet_fields (
    view_id TEXT NOT NULL,
    field_id TEXT NOT NULL,
    name TEXT NOT NULL,
    field_type TEXT NOT NULL,
    position INTEGER NOT NULL,
    PRIMARY KEY (view_id, field_id)
)
"""

CREATE_RECORDS_SQL = """
CREATE TABLE IF NOT EXISTS datasheet_records (
    record_id TEXT PRIMARY KEY,
    view_id TEXT NOT NULL,
    seq INTEGER NOT NULL,
    title TEXT,
    cell_values TEXT NOT NULL,
    created_at TEXT NOT NULL
)
"""

SELECT_FIELDS_SQL = text(
    """
    SELECT field_id, name, field_type
    FROM datasheet_fields
    WHERE view_id = :view_id
    ORDER BY position
    """
)

SELECT_RECORDS_SQL = text(
    """
    SELECT record_id, title, cell_values
    FROM datasheet_records
    WHERE view_id = :view_id
    ORDER BY seq
    """
)

INSERT_FIELD_SQL = text(
    """
    INSERT INTO datasheet_fields (view_id, field_id, name, field_type, position)
    VALUES (:view_id, :field_id, :name, :field_type, :position)
    """
)

DELETE_FIELDS_SQL = text(
    "DELETE FROM datasheet_fields WHERE view_id = :view_id"
)

MAX_SEQ_SQL = text("SELECT COALESCE(MAX(seq), 0) FROM datasheet_records")

INSERT_RECORD_SQL = text(
    """
    INSERT INTO datasheet_records (
        record_id,
        view_id,
        seq,
        title,
        cell_values,
        created_at
    )
    VALUES (
        :record_id,
        :view_id,
        :seq,
        :title,
        :cell_values,
        :created_at
    )
    """
)


class SqlAlchemyRecordStore(RecordStorePort):
    """Record store persisting a datasheet view in two SQL tables.

    Cell values are stored as JSON keyed by field id. The record title is the
    display string of the first field of the view.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        view_id: str = "default",
        read_only: bool = False,
        logger=None,
    ) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the datasheet engine.
            view_id: View whose fields and records are read and written.
            read_only: Refuse every record creation when True.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._view_id = view_id
        self._read_only = read_only
        self._logger = logger or get_app_logger()

    def prepare(self) -> None:
        """Create the datasheet tables if they do not exist."""
        engine = self._db_port.get_datasheet_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_FIELDS_SQL)
            conn.exec_driver_sql(CREATE_RECORDS_SQL)

    def replace_fields(self, fields: list[FieldMeta]) -> int:
        """Replace the view's fields, keeping the given order.

        Returns:
            int: Number of fields written.
        """
        payload = [
            {
                "view_id": self._view_id,
                "field_id": field.field_id,
                "name": field.name,
                "field_type": field.field_type,
                "position": position,
            }
            for position, field in enumerate(fields)
        ]
        engine = self._db_port.get_datasheet_engine()
        with engine.begin() as conn:
            conn.execute(DELETE_FIELDS_SQL, {"view_id": self._view_id})
            if payload:
                conn.execute(INSERT_FIELD_SQL, payload)
        return len(payload)

    def fetch_fields(self) -> list[FieldMeta]:
        """Return the fields of the view, in view order."""
        engine = self._db_port.get_datasheet_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                SELECT_FIELDS_SQL,
                {"view_id": self._view_id},
            ).all()
        return [
            FieldMeta(
                field_id=row.field_id,
                name=row.name,
                field_type=row.field_type,
            )
            for row in rows
        ]

    def fetch_records(self) -> list[RawRecord]:
        """Return the records of the view, oldest first."""
        engine = self._db_port.get_datasheet_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                SELECT_RECORDS_SQL,
                {"view_id": self._view_id},
            ).all()
        records = [
            RawRecord(
                record_id=row.record_id,
                values=self._decode_values(row.record_id, row.cell_values),
                title=row.title or "",
            )
            for row in rows
        ]
        self._logger.debug(
            f"Fetched {len(records)} records for view {self._view_id}"
        )
        return records

    def can_add_record(self, values: dict[str, Any]) -> PermissionCheck:
        """Refuse writes to read-only views or to unknown fields."""
        if self._read_only:
            return PermissionCheck(
                acceptable=False,
                message=f"View {self._view_id} is read-only",
            )
        known = {field.field_id for field in self.fetch_fields()}
        unknown = sorted(
            field_id for field_id in values if field_id not in known
        )
        if unknown:
            return PermissionCheck(
                acceptable=False,
                message=f"Unknown fields: {', '.join(unknown)}",
            )
        return PermissionCheck(acceptable=True)

    async def add_records(self, records: list[dict[str, Any]]) -> list[str]:
        """Insert records in one database transaction.

        Returns:
            list[str]: Generated record ids, in input order.
        """
        return await asyncio.to_thread(self._insert_records, records)

    def _insert_records(self, records: list[dict[str, Any]]) -> list[str]:
        if not records:
            return []
        fields = self.fetch_fields()
        primary_id = fields[0].field_id if fields else None
        created_at = datetime.now(timezone.utc).isoformat()
        payload = []
        for values in records:
            payload.append(
                {
                    "record_id": f"rec{uuid.uuid4().hex[:12]}",
                    "view_id": self._view_id,
                    "title": cell_to_text(values.get(primary_id))
                    if primary_id
                    else "",
                    "cell_values": json.dumps(values, default=str),
                    "created_at": created_at,
                }
            )
        engine = self._db_port.get_datasheet_engine()
        with engine.begin() as conn:
            last_seq = conn.execute(MAX_SEQ_SQL).scalar() or 0
            for offset, row in enumerate(payload, start=1):
                row["seq"] = last_seq + offset
            conn.execute(INSERT_RECORD_SQL, payload)
        self._logger.info(
            f"Inserted {len(payload)} records into view {self._view_id}"
        )
        return [row["record_id"] for row in payload]

    def _decode_values(self, record_id: str, raw: str | None) -> dict:
        if not raw:
            return {}
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError:
            self._logger.warning(
                f"Record {record_id} has malformed cell values; ignoring them"
            )
            return {}
        return decoded if isinstance(decoded, dict) else {}


__all__ = [
    "SqlAlchemyRecordStore",
    "CREATE_FIELDS_SQL",
    "CREATE_RECORDS_SQL",
    "SELECT_FIELDS_SQL",
    "SELECT_RECORDS_SQL",
    "INSERT_FIELD_SQL",
    "INSERT_RECORD_SQL",
]
