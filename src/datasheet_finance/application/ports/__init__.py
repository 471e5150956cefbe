"""Application ports package."""

from .database import DatabaseEnginePort
from .field_roles import FieldRoleResolverPort
from .record_store import RecordStorePort

__all__ = [
    "DatabaseEnginePort",
    "FieldRoleResolverPort",
    "RecordStorePort",
]
