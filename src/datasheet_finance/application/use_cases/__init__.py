"""Application use cases package."""

from .get_financial_summary import DashboardView, GetFinancialSummaryUseCase
from .line_items import (
    AddRecordUseCase,
    GetRecordTreeUseCase,
    RecordTree,
    SplitLineItemsUseCase,
)
from .split_transaction import (
    CommitGate,
    ListSplitCandidatesUseCase,
    SplitSession,
)

__all__ = [
    "DashboardView",
    "GetFinancialSummaryUseCase",
    "AddRecordUseCase",
    "GetRecordTreeUseCase",
    "RecordTree",
    "SplitLineItemsUseCase",
    "CommitGate",
    "ListSplitCandidatesUseCase",
    "SplitSession",
]
