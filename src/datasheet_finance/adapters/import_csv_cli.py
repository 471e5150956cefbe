"""CLI adapter loading a CSV file into the configured datasheet view.

The header row becomes the view's fields, in column order; field types are
inferred from column names. Cells are imported as text except checkbox
columns, so amounts and product lists go through the usual normalization.
"""

import asyncio
import csv
import os
from pathlib import Path

from datasheet_finance.domain.models import FieldMeta
from datasheet_finance.infrastructure.container import build_database_adapter
from datasheet_finance.infrastructure.logging.logger import get_app_logger
from datasheet_finance.infrastructure.record_store import SqlAlchemyRecordStore
from datasheet_finance.infrastructure.settings import DashboardSettings


_TYPE_HINTS = (
    ("amount", "Currency"),
    ("date", "DateTime"),
    ("reconciled", "Checkbox"),
)


def infer_field_type(name: str) -> str:
    """Return the field type implied by a column name."""
    lowered = name.lower()
    for keyword, field_type in _TYPE_HINTS:
        if keyword in lowered:
            return field_type
    return "SingleText"


def build_fields(header: list[str]) -> list[FieldMeta]:
    """Build field metadata with ids ``fld1``, ``fld2``... from a header."""
    return [
        FieldMeta(
            field_id=f"fld{index}",
            name=name.strip(),
            field_type=infer_field_type(name),
        )
        for index, name in enumerate(header, start=1)
    ]


def build_record_values(
    row: dict[str, str],
    fields: list[FieldMeta],
) -> dict[str, object]:
    """Map one CSV row onto cell values keyed by field id."""
    values: dict[str, object] = {}
    for field in fields:
        raw = (row.get(field.name) or "").strip()
        if field.field_type == "Checkbox":
            values[field.field_id] = raw.lower() in {"1", "true", "yes", "x"}
        elif raw:
            values[field.field_id] = raw
    return values


def main() -> None:
    """Replace the view's fields and append the CSV rows as records."""
    logger = get_app_logger()
    raw_path = os.getenv("IMPORT_CSV_FILE")
    if not raw_path:
        logger.warning("IMPORT_CSV_FILE is required to import records.")
        return
    path = Path(raw_path).expanduser()
    if not path.exists():
        logger.error(f"CSV file does not exist at {path}")
        return

    settings = DashboardSettings.from_env()
    with path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        header = [name for name in reader.fieldnames or [] if name]
        rows = list(reader)

    fields = build_fields(header)
    store = SqlAlchemyRecordStore(
        build_database_adapter(),
        view_id=settings.view_id,
        logger=logger,
    )
    store.prepare()
    store.replace_fields(fields)
    created = asyncio.run(
        store.add_records([build_record_values(row, fields) for row in rows])
    )

    print(
        f"Imported {len(created)} records with {len(fields)} fields "
        f"into view {settings.view_id}."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
