"""Domain models package."""

from .finance import ChartBucket, FinancialSummary
from .records import (
    FieldMeta,
    FieldRoleMap,
    PermissionCheck,
    RawRecord,
    RecordWrite,
    SetupIncomplete,
)
from .split import SplitAllocation, SplitCommitResult
from .transactions import Product, Transaction

__all__ = [
    "ChartBucket",
    "FinancialSummary",
    "FieldMeta",
    "FieldRoleMap",
    "PermissionCheck",
    "RawRecord",
    "RecordWrite",
    "SetupIncomplete",
    "SplitAllocation",
    "SplitCommitResult",
    "Product",
    "Transaction",
]
