"""CLI adapter printing the financial summary of the configured view."""

from datasheet_finance.application.use_cases.get_financial_summary import (
    GetFinancialSummaryUseCase,
)
from datasheet_finance.domain.services.finance import (
    chart_title,
    format_currency,
)
from datasheet_finance.infrastructure.container import (
    build_field_role_resolver,
    build_record_store,
)
from datasheet_finance.infrastructure.logging.logger import get_app_logger
from datasheet_finance.infrastructure.settings import DashboardSettings


def main() -> None:
    """Print totals and chart buckets for the configured datasheet view."""
    logger = get_app_logger()
    settings = DashboardSettings.from_env()
    use_case = GetFinancialSummaryUseCase(
        build_record_store(settings),
        build_field_role_resolver(settings),
        logger=logger,
    )
    view = use_case.execute(group_by=settings.group_by)
    if not view.setup_complete:
        print(
            "Setup required: map fields for "
            f"{', '.join(view.missing_roles)}"
        )
        return

    summary = view.summary
    currency = settings.currency
    print(
        f"Revenue: {format_currency(summary.total_revenue, currency)} | "
        f"Expenses: {format_currency(summary.total_expenses, currency)} | "
        f"Net: {format_currency(summary.net_profit, currency)} | "
        f"Margin: {summary.profit_margin:.1f}%"
    )
    print(chart_title(view.group_by))
    for bucket in view.chart:
        print(
            f"  {bucket.label}: "
            f"revenue={format_currency(bucket.revenue, currency)}, "
            f"expenses={format_currency(bucket.expenses, currency)}, "
            f"net={format_currency(bucket.net, currency)}, "
            f"count={bucket.count}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
