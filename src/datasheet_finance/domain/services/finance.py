"""Domain services for financial aggregates."""

import re
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from logging import Logger

from datasheet_finance.domain.constants import (
    DEFAULT_GROUP_BY,
    GROUP_BY_OPTIONS,
    UNKNOWN_DATE_LABEL,
)
from datasheet_finance.domain.models import (
    ChartBucket,
    FinancialSummary,
    Transaction,
)


_MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_DATE_FORMATS = (
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %Y",
    "%B %Y",
    "%Y-%m",
    "%Y",
)

_EPOCH_MILLIS = re.compile(r"-?\d{10,}")

_CHART_TITLES = {
    "merchant": "Revenue vs Expenses by Merchant",
    "category": "Revenue vs Expenses by Category",
    "date": "Revenue vs Expenses by Month",
}

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}


def summarize(transactions: Iterable[Transaction]) -> FinancialSummary:
    """Compute revenue, expense and profit totals.

    Args:
        transactions: Normalized transactions.

    Returns:
        FinancialSummary: Totals plus the transactions partitioned by kind.
        The margin is 0 when there is no revenue.
    """
    items = list(transactions)
    revenue = [tx for tx in items if tx.is_revenue]
    expenses = [tx for tx in items if not tx.is_revenue]

    total_revenue = sum((tx.amount for tx in revenue), 0.0)
    total_expenses = sum((tx.amount for tx in expenses), 0.0)
    net_profit = total_revenue - total_expenses
    profit_margin = (
        net_profit / total_revenue * 100 if total_revenue > 0 else 0.0
    )

    return FinancialSummary(
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_profit=net_profit,
        profit_margin=profit_margin,
        transactions=items,
        revenue_transactions=revenue,
        expense_transactions=expenses,
    )


def group_for_chart(
    transactions: Iterable[Transaction],
    group_by: str,
    logger: Logger | None = None,
) -> list[ChartBucket]:
    """Bucket transactions by a grouping dimension for charting.

    Args:
        transactions: Normalized transactions.
        group_by: One of ``type``, ``merchant``, ``category`` or ``date``.
        logger: Optional logger warned about unknown groupings.

    Returns:
        list[ChartBucket]: Buckets sorted by net descending; buckets with the
        same net keep their first-seen order.
    """
    key_for = _group_key(group_by, logger)
    groups: dict[str, list[Transaction]] = {}
    for tx in transactions:
        groups.setdefault(key_for(tx), []).append(tx)

    buckets = []
    for label, members in groups.items():
        revenue = sum((tx.amount for tx in members if tx.is_revenue), 0.0)
        expenses = sum(
            (tx.amount for tx in members if not tx.is_revenue),
            0.0,
        )
        buckets.append(
            ChartBucket(
                label=label,
                revenue=revenue,
                expenses=expenses,
                net=revenue - expenses,
                count=len(members),
            )
        )
    return sorted(buckets, key=lambda bucket: bucket.net, reverse=True)


def month_label(date_text: str) -> str:
    """Return a ``Mon YYYY`` label, or ``Unknown Date`` when unparsable."""
    parsed = parse_date_text(date_text)
    if parsed is None:
        return UNKNOWN_DATE_LABEL
    return f"{_MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.year}"


def parse_date_text(date_text: str) -> datetime | None:
    """Parse the date formats hosts commonly render.

    Accepts ISO-8601 dates and datetimes, a handful of written formats and
    epoch milliseconds. Returns None for anything else.
    """
    text = (date_text or "").strip()
    if not text:
        return None
    if _EPOCH_MILLIS.fullmatch(text):
        try:
            return datetime.fromtimestamp(int(text) / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def chart_title(group_by: str) -> str:
    """Return the chart heading for a grouping dimension."""
    return _CHART_TITLES.get(group_by, "Revenue vs Expenses Overview")


def format_currency(amount: float, currency_code: str) -> str:
    """Format an amount for display; no conversion is performed."""
    code = currency_code.upper()
    sign = "-" if amount < 0 else ""
    symbol = _CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{abs(amount):,.2f} {code}"
    return f"{sign}{symbol}{abs(amount):,.2f}"


def _group_key(
    group_by: str,
    logger: Logger | None,
) -> Callable[[Transaction], str]:
    if group_by not in GROUP_BY_OPTIONS:
        if logger is not None:
            logger.warning(
                f"Unknown chart grouping {group_by!r}; "
                f"falling back to {DEFAULT_GROUP_BY!r}"
            )
        group_by = DEFAULT_GROUP_BY
    if group_by == "merchant":
        return lambda tx: tx.merchant
    if group_by == "category":
        return lambda tx: tx.category
    if group_by == "date":
        return lambda tx: month_label(tx.date)
    return lambda tx: tx.kind


__all__ = [
    "summarize",
    "group_for_chart",
    "month_label",
    "parse_date_text",
    "chart_title",
    "format_currency",
]
