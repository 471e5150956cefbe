"""Application port for mapping datasheet fields to semantic roles."""

from typing import Protocol

from datasheet_finance.domain.models import FieldMeta, FieldRoleMap


class FieldRoleResolverPort(Protocol):
    """Port resolving which field carries each semantic role."""

    def resolve(self, fields: list[FieldMeta]) -> FieldRoleMap:
        """Return the role map for the given fields."""


__all__ = ["FieldRoleResolverPort", "FieldRoleMap"]
