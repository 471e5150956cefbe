"""Normalization of host records into canonical transactions."""

from collections.abc import Iterable, Mapping
from typing import Any

from datasheet_finance.domain.constants import (
    DEFAULT_CATEGORY,
    DEFAULT_DATE,
    DEFAULT_MERCHANT,
    DEFAULT_TITLE,
    EXPENSE,
    LINK_NAME_KEYS,
    REVENUE,
)
from datasheet_finance.domain.models import (
    FieldRoleMap,
    RawRecord,
    SetupIncomplete,
    Transaction,
)
from datasheet_finance.domain.services.products import resolve_products
from datasheet_finance.utils.number_utils import coerce_amount


def check_setup(
    roles: FieldRoleMap,
    required: Iterable[str],
) -> SetupIncomplete | None:
    """Return the blocking precondition when mandatory roles are missing.

    Args:
        roles: Field-role mapping resolved for the current view.
        required: Roles that must be mapped for the calling path.

    Returns:
        SetupIncomplete | None: Missing roles, or None when ready.
    """
    missing = roles.missing(required)
    if missing:
        return SetupIncomplete(missing_roles=missing)
    return None


def cell_to_text(value: Any) -> str:
    """Return the display string of a raw cell value."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Mapping):
        for key in LINK_NAME_KEYS:
            candidate = value.get(key)
            if candidate:
                return str(candidate).strip()
        return ""
    if isinstance(value, (list, tuple)):
        parts = [cell_to_text(item) for item in value]
        return ", ".join(part for part in parts if part)
    return str(value).strip()


def classify_kind(raw_type: Any) -> str:
    """Classify a raw type value as revenue or expense.

    Any value whose text contains ``revenue`` (case-insensitive) is revenue;
    everything else, including typos and unrelated labels, is an expense.
    """
    if REVENUE.casefold() in cell_to_text(raw_type).casefold():
        return REVENUE
    return EXPENSE


def normalize_record(record: RawRecord, roles: FieldRoleMap) -> Transaction:
    """Project a host record onto the canonical transaction model.

    Every field has a deterministic default, so this never fails for a role
    map in which ``title``, ``type`` and ``amount`` are resolved.

    Args:
        record: Host record snapshot.
        roles: Field-role mapping for the record's view.

    Returns:
        Transaction: Normalized transaction.
    """
    products = (
        resolve_products(record.cell(roles.product)) if roles.product else ()
    )
    return Transaction(
        id=record.record_id,
        title=_text_or_default(record, roles.title, DEFAULT_TITLE),
        kind=classify_kind(record.cell(roles.type)),
        amount=abs(coerce_amount(record.cell(roles.amount))),
        category=_text_or_default(record, roles.category, DEFAULT_CATEGORY),
        merchant=_text_or_default(record, roles.merchant, DEFAULT_MERCHANT),
        date=_text_or_default(record, roles.date, DEFAULT_DATE),
        products=products,
        reconciled=bool(record.cell(roles.reconciled)),
    )


def normalize_records(
    records: Iterable[RawRecord],
    roles: FieldRoleMap,
) -> list[Transaction]:
    """Normalize records, preserving their order."""
    return [normalize_record(record, roles) for record in records]


def _text_or_default(
    record: RawRecord,
    field_id: str | None,
    default: str,
) -> str:
    if field_id is None:
        return default
    return cell_to_text(record.cell(field_id)) or default


__all__ = [
    "check_setup",
    "cell_to_text",
    "classify_kind",
    "normalize_record",
    "normalize_records",
]
