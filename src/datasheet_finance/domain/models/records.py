"""Host-shaped record rows and the field-role mapping."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any


@dataclass(frozen=True)
class FieldMeta:
    """Field metadata exposed by the host datasheet."""

    field_id: str
    name: str
    field_type: str


@dataclass(frozen=True)
class RawRecord:
    """Snapshot of a host record.

    Attributes:
        record_id: Identifier stable across refreshes.
        values: Cell values keyed by field id, in host shape.
        title: Display string of the primary field.
    """

    record_id: str
    values: Mapping[str, Any] = field(default_factory=dict)
    title: str = ""

    def cell(self, field_id: str | None) -> Any:
        """Return the raw cell value for a field, or None when unmapped."""
        if field_id is None:
            return None
        return self.values.get(field_id)


@dataclass(frozen=True)
class FieldRoleMap:
    """Mapping from semantic role to the field id that carries it."""

    title: str | None = None
    type: str | None = None
    amount: str | None = None
    category: str | None = None
    merchant: str | None = None
    date: str | None = None
    product: str | None = None
    reconciled: str | None = None

    def get(self, role: str) -> str | None:
        """Return the field id bound to ``role``, or None."""
        if role not in self.roles():
            return None
        return getattr(self, role)

    def missing(self, required: Iterable[str]) -> tuple[str, ...]:
        """Return the required roles that are not resolved, in order."""
        return tuple(role for role in required if not self.get(role))

    @classmethod
    def roles(cls) -> tuple[str, ...]:
        return tuple(item.name for item in fields(cls))


@dataclass(frozen=True)
class RecordWrite:
    """New-record request, values keyed by field id."""

    values: dict[str, Any]


@dataclass(frozen=True)
class PermissionCheck:
    """Outcome of the host permission pre-check for a record creation."""

    acceptable: bool
    message: str | None = None


@dataclass(frozen=True)
class SetupIncomplete:
    """Blocking precondition: mandatory roles are not mapped to fields."""

    missing_roles: tuple[str, ...]


__all__ = [
    "FieldMeta",
    "RawRecord",
    "FieldRoleMap",
    "RecordWrite",
    "PermissionCheck",
    "SetupIncomplete",
]
