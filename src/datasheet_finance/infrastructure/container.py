"""Composition root for wiring infrastructure adapters."""

from datasheet_finance.application.ports.database import DatabaseEnginePort
from datasheet_finance.application.ports.field_roles import (
    FieldRoleResolverPort,
)
from datasheet_finance.application.ports.record_store import RecordStorePort
from datasheet_finance.application.use_cases.get_financial_summary import (
    GetFinancialSummaryUseCase,
)
from datasheet_finance.application.use_cases.line_items import (
    AddRecordUseCase,
    GetRecordTreeUseCase,
    SplitLineItemsUseCase,
)
from datasheet_finance.application.use_cases.split_transaction import (
    CommitGate,
    ListSplitCandidatesUseCase,
    SplitSession,
)
from datasheet_finance.domain.models import FieldRoleMap
from datasheet_finance.domain.services.reprocessing import ReprocessingGuard
from datasheet_finance.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from datasheet_finance.infrastructure.field_roles import (
    NameHeuristicFieldRoleResolver,
)
from datasheet_finance.infrastructure.logging.logger import get_app_logger
from datasheet_finance.infrastructure.record_store import SqlAlchemyRecordStore
from datasheet_finance.infrastructure.settings import DashboardSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_record_store(
    settings: DashboardSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> RecordStorePort:
    """Return the configured record store, creating its tables if needed."""
    resolved_settings = settings or DashboardSettings.from_env()
    store = SqlAlchemyRecordStore(
        db_port or build_database_adapter(),
        view_id=resolved_settings.view_id,
        read_only=resolved_settings.read_only,
        logger=get_app_logger(),
    )
    store.prepare()
    return store


def build_field_role_resolver(
    settings: DashboardSettings | None = None,
) -> FieldRoleResolverPort:
    """Return the field-role resolver honouring configured overrides."""
    resolved_settings = settings or DashboardSettings.from_env()
    return NameHeuristicFieldRoleResolver(
        overrides=resolved_settings.role_overrides,
        logger=get_app_logger(),
    )


def build_financial_summary_use_case(
    record_store: RecordStorePort,
    role_resolver: FieldRoleResolverPort,
) -> GetFinancialSummaryUseCase:
    """Return the financial summary use case."""
    return GetFinancialSummaryUseCase(
        record_store,
        role_resolver,
        logger=get_app_logger(),
    )


def build_split_candidates_use_case(
    record_store: RecordStorePort,
    role_resolver: FieldRoleResolverPort,
    guard: ReprocessingGuard,
) -> ListSplitCandidatesUseCase:
    """Return the split candidate listing bound to a session guard."""
    return ListSplitCandidatesUseCase(
        record_store,
        role_resolver,
        guard,
        logger=get_app_logger(),
    )


def build_split_session(
    record_store: RecordStorePort,
    roles: FieldRoleMap,
    guard: ReprocessingGuard,
    gate: CommitGate,
) -> SplitSession:
    """Return a split session sharing the guard and commit gate."""
    return SplitSession(
        record_store,
        roles,
        guard=guard,
        gate=gate,
        logger=get_app_logger(),
    )


def build_record_tree_use_case(
    record_store: RecordStorePort,
    role_resolver: FieldRoleResolverPort,
) -> GetRecordTreeUseCase:
    """Return the line-item record tree use case."""
    return GetRecordTreeUseCase(
        record_store,
        role_resolver,
        logger=get_app_logger(),
    )


def build_split_line_items_use_case(
    record_store: RecordStorePort,
    gate: CommitGate,
) -> SplitLineItemsUseCase:
    """Return the line-item split use case sharing the commit gate."""
    return SplitLineItemsUseCase(
        record_store,
        gate=gate,
        logger=get_app_logger(),
    )


def build_add_record_use_case(
    record_store: RecordStorePort,
) -> AddRecordUseCase:
    """Return the add-record use case."""
    return AddRecordUseCase(record_store, logger=get_app_logger())


__all__ = [
    "build_database_adapter",
    "build_record_store",
    "build_field_role_resolver",
    "build_financial_summary_use_case",
    "build_split_candidates_use_case",
    "build_split_session",
    "build_record_tree_use_case",
    "build_split_line_items_use_case",
    "build_add_record_use_case",
]
