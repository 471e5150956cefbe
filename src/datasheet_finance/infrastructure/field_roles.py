"""Field-role discovery from datasheet field names and types."""

from collections.abc import Callable

from datasheet_finance.application.ports.field_roles import (
    FieldRoleResolverPort,
)
from datasheet_finance.domain.models import FieldMeta, FieldRoleMap
from datasheet_finance.infrastructure.logging.logger import get_app_logger


TEXT_TYPES = ("SingleText", "Text")
NUMBER_TYPES = ("Number", "Currency")
DATE_TYPES = ("DateTime", "CreatedTime")
CHECKBOX_TYPES = ("Checkbox",)


def _name_contains(*keywords: str) -> Callable[[FieldMeta], bool]:
    def predicate(field: FieldMeta) -> bool:
        lowered = field.name.lower()
        return any(keyword in lowered for keyword in keywords)

    return predicate


def _name_or_type(
    keyword: str,
    types: tuple[str, ...],
) -> Callable[[FieldMeta], bool]:
    def predicate(field: FieldMeta) -> bool:
        return keyword in field.name.lower() or field.field_type in types

    return predicate


# The first field satisfying a role's predicate carries that role.
ROLE_PREDICATES: dict[str, Callable[[FieldMeta], bool]] = {
    "title": _name_or_type("title", TEXT_TYPES),
    "type": _name_contains("type"),
    "amount": _name_or_type("amount", NUMBER_TYPES),
    "category": _name_contains("category"),
    "merchant": _name_contains("merchant"),
    "date": _name_or_type("date", DATE_TYPES),
    "product": _name_contains("product"),
    "reconciled": _name_or_type("reconciled", CHECKBOX_TYPES),
}


class NameHeuristicFieldRoleResolver(FieldRoleResolverPort):
    """Resolve roles by field name keywords with field-type fallbacks."""

    def __init__(
        self,
        overrides: dict[str, str] | None = None,
        logger=None,
    ) -> None:
        """Initialize the resolver.

        Args:
            overrides: Explicit role to field id bindings that win over the
                heuristics when the field exists.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._overrides = dict(overrides or {})
        self._logger = logger or get_app_logger()

    def resolve(self, fields: list[FieldMeta]) -> FieldRoleMap:
        """Return the role map for the given fields.

        Args:
            fields: Fields of the view, in view order.

        Returns:
            FieldRoleMap: Resolved roles; unmatched roles stay None.
        """
        known_ids = {field.field_id for field in fields}
        resolved: dict[str, str | None] = {}
        for role, predicate in ROLE_PREDICATES.items():
            override = self._overrides.get(role)
            if override is not None:
                if override in known_ids:
                    resolved[role] = override
                    continue
                self._logger.warning(
                    f"Role override {role}={override} does not match any "
                    "field; using name heuristics"
                )
            resolved[role] = next(
                (field.field_id for field in fields if predicate(field)),
                None,
            )
        return FieldRoleMap(**resolved)


__all__ = ["NameHeuristicFieldRoleResolver", "ROLE_PREDICATES"]
