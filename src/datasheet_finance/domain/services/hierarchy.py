"""Parent/child matching between split records and their children."""

from collections.abc import Iterable, Mapping
from typing import Protocol

from datasheet_finance.domain.constants import CHILD_TITLE_SEPARATOR
from datasheet_finance.domain.models import RawRecord


class ChildMatcher(Protocol):
    """Decides whether a record was derived from a parent record."""

    def is_child(self, parent: RawRecord, candidate: RawRecord) -> bool:
        """Return True when ``candidate`` is a child of ``parent``."""


class TitlePrefixChildMatcher:
    """Matches children titled ``"<parent title> - ..."``.

    This is a naming convention, not a reference: any record whose title
    happens to share the prefix is treated as a child.
    """

    def is_child(self, parent: RawRecord, candidate: RawRecord) -> bool:
        if not parent.title:
            return False
        prefix = f"{parent.title}{CHILD_TITLE_SEPARATOR}"
        return candidate.title.startswith(prefix)


class ParentLinkChildMatcher:
    """Matches children through an explicit parent reference field."""

    def __init__(self, parent_field_id: str) -> None:
        self._parent_field_id = parent_field_id

    def is_child(self, parent: RawRecord, candidate: RawRecord) -> bool:
        value = candidate.cell(self._parent_field_id)
        entries = value if isinstance(value, (list, tuple)) else [value]
        return any(_references(entry, parent.record_id) for entry in entries)


def children_of(
    parent: RawRecord,
    records: Iterable[RawRecord],
    matcher: ChildMatcher | None = None,
) -> list[RawRecord]:
    """Return the records derived from ``parent``, in record order."""
    resolved = matcher or TitlePrefixChildMatcher()
    return [
        record
        for record in records
        if record.record_id != parent.record_id
        and resolved.is_child(parent, record)
    ]


def child_title(parent_title: str, index: int) -> str:
    """Return the title of the ``index``-th (1-based) line-item child."""
    return f"{parent_title}{CHILD_TITLE_SEPARATOR}Item {index}"


def line_items(record: RawRecord, line_item_field_id: str) -> list:
    """Return the line-item entries of a record, empty unless a list."""
    value = record.cell(line_item_field_id)
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def is_splittable_parent(record: RawRecord, line_item_field_id: str) -> bool:
    """Return True when the record links more than one line item."""
    return len(line_items(record, line_item_field_id)) > 1


def _references(entry, record_id: str) -> bool:
    if isinstance(entry, Mapping):
        return any(
            entry.get(key) == record_id for key in ("id", "recordId")
        )
    return entry == record_id


__all__ = [
    "ChildMatcher",
    "TitlePrefixChildMatcher",
    "ParentLinkChildMatcher",
    "children_of",
    "child_title",
    "line_items",
    "is_splittable_parent",
]
