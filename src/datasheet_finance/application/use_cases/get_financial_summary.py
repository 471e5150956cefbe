"""Use case to compute the financial summary and chart of a datasheet view."""

from dataclasses import dataclass, field

from datasheet_finance.application.ports.field_roles import (
    FieldRoleResolverPort,
)
from datasheet_finance.application.ports.record_store import RecordStorePort
from datasheet_finance.domain.constants import (
    DEFAULT_GROUP_BY,
    SUMMARY_REQUIRED_ROLES,
)
from datasheet_finance.domain.models import ChartBucket, FinancialSummary
from datasheet_finance.domain.services.finance import (
    group_for_chart,
    summarize,
)
from datasheet_finance.domain.services.normalization import (
    check_setup,
    normalize_records,
)
from datasheet_finance.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class DashboardView:
    """Summary and chart data for the dashboard.

    Attributes:
        summary: Totals over every record of the view.
        chart: Buckets for the selected grouping.
        group_by: Grouping dimension used for ``chart``.
        missing_roles: Mandatory roles that could not be mapped; when
            non-empty the summary is empty and nothing was computed.
    """

    summary: FinancialSummary
    chart: list[ChartBucket] = field(default_factory=list)
    group_by: str = DEFAULT_GROUP_BY
    missing_roles: tuple[str, ...] = ()

    @property
    def setup_complete(self) -> bool:
        return not self.missing_roles


class GetFinancialSummaryUseCase:
    """Compute revenue/expense totals and grouped chart buckets."""

    def __init__(
        self,
        record_store: RecordStorePort,
        role_resolver: FieldRoleResolverPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            record_store: Port providing fields and records of the view.
            role_resolver: Port mapping fields to semantic roles.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._record_store = record_store
        self._role_resolver = role_resolver
        self._logger = logger or get_app_logger()

    def execute(self, group_by: str = DEFAULT_GROUP_BY) -> DashboardView:
        """Return the dashboard view for the current records.

        Args:
            group_by: Chart grouping (type, merchant, category or date).

        Returns:
            DashboardView: Summary and chart, or the missing roles when the
            datasheet is not set up for the dashboard.
        """
        roles = self._role_resolver.resolve(self._record_store.fetch_fields())
        setup = check_setup(roles, SUMMARY_REQUIRED_ROLES)
        if setup is not None:
            self._logger.warning(
                "Financial summary setup incomplete; missing roles: "
                f"{', '.join(setup.missing_roles)}"
            )
            return DashboardView(
                summary=FinancialSummary.empty(),
                group_by=group_by,
                missing_roles=setup.missing_roles,
            )

        records = self._record_store.fetch_records()
        transactions = normalize_records(records, roles)
        summary = summarize(transactions)
        chart = group_for_chart(transactions, group_by, logger=self._logger)
        self._logger.info(
            f"Financial summary computed over {len(transactions)} records: "
            f"revenue={summary.total_revenue}, "
            f"expenses={summary.total_expenses}, buckets={len(chart)}"
        )
        return DashboardView(summary=summary, chart=chart, group_by=group_by)


__all__ = ["GetFinancialSummaryUseCase", "DashboardView"]
