"""Domain package for business rules and core models."""

from .constants import (
    DEFAULT_GROUP_BY,
    GROUP_BY_OPTIONS,
    SPLIT_REQUIRED_ROLES,
    SUMMARY_REQUIRED_ROLES,
)
from .errors import (
    CommitInProgressError,
    CountMismatchError,
    DatasheetFinanceError,
    NoActiveSplitError,
    NotSplittableError,
    PermissionDeniedError,
    SplitCommitError,
)
from .models import (
    ChartBucket,
    FieldMeta,
    FieldRoleMap,
    FinancialSummary,
    PermissionCheck,
    Product,
    RawRecord,
    RecordWrite,
    SetupIncomplete,
    SplitAllocation,
    SplitCommitResult,
    Transaction,
)
from .services import (
    ReprocessingGuard,
    group_for_chart,
    normalize_record,
    resolve_products,
    select_for_split,
    summarize,
)

__all__ = [
    "DEFAULT_GROUP_BY",
    "GROUP_BY_OPTIONS",
    "SPLIT_REQUIRED_ROLES",
    "SUMMARY_REQUIRED_ROLES",
    "CommitInProgressError",
    "CountMismatchError",
    "DatasheetFinanceError",
    "NoActiveSplitError",
    "NotSplittableError",
    "PermissionDeniedError",
    "SplitCommitError",
    "ChartBucket",
    "FieldMeta",
    "FieldRoleMap",
    "FinancialSummary",
    "PermissionCheck",
    "Product",
    "RawRecord",
    "RecordWrite",
    "SetupIncomplete",
    "SplitAllocation",
    "SplitCommitResult",
    "Transaction",
    "ReprocessingGuard",
    "group_for_chart",
    "normalize_record",
    "resolve_products",
    "select_for_split",
    "summarize",
]
