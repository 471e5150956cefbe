"""Tests for summary and chart aggregation."""

from unittest.mock import MagicMock

import pytest

from datasheet_finance.domain.constants import EXPENSE, REVENUE
from datasheet_finance.domain.models import Transaction
from datasheet_finance.domain.services.finance import (
    chart_title,
    format_currency,
    group_for_chart,
    month_label,
    parse_date_text,
    summarize,
)


def _tx(
    tx_id: str,
    kind: str,
    amount: float,
    merchant: str = "Unknown",
    category: str = "Other",
    date: str = "",
) -> Transaction:
    return Transaction(
        id=tx_id,
        title=f"Transaction {tx_id}",
        kind=kind,
        amount=amount,
        category=category,
        merchant=merchant,
        date=date,
    )


def test_summarize_computes_totals_and_margin() -> None:
    """Totals, net profit and margin should derive from the amounts."""
    transactions = [
        _tx("1", REVENUE, 1000.0),
        _tx("2", EXPENSE, 250.0),
        _tx("3", EXPENSE, 150.0),
    ]

    summary = summarize(transactions)

    assert summary.total_revenue == 1000.0
    assert summary.total_expenses == 400.0
    assert summary.net_profit == 600.0
    assert summary.profit_margin == pytest.approx(60.0)
    assert [tx.id for tx in summary.revenue_transactions] == ["1"]
    assert [tx.id for tx in summary.expense_transactions] == ["2", "3"]


def test_summarize_margin_is_zero_without_revenue() -> None:
    """Without revenue the margin should be 0 rather than dividing by 0."""
    summary = summarize([_tx("1", EXPENSE, 80.0)])

    assert summary.net_profit == -80.0
    assert summary.profit_margin == 0.0


def test_summarize_empty_set() -> None:
    """An empty set of transactions gives an all-zero summary."""
    summary = summarize([])

    assert summary.total_revenue == 0.0
    assert summary.total_expenses == 0.0
    assert summary.profit_margin == 0.0
    assert summary.transactions == []


def test_group_for_chart_by_type_sorts_by_net() -> None:
    """Buckets should be sorted by net descending."""
    transactions = [
        _tx("1", EXPENSE, 30.0),
        _tx("2", REVENUE, 100.0),
        _tx("3", EXPENSE, 20.0),
    ]

    buckets = group_for_chart(transactions, "type")

    assert [bucket.label for bucket in buckets] == [REVENUE, EXPENSE]
    assert buckets[0].revenue == 100.0
    assert buckets[0].net == 100.0
    assert buckets[1].expenses == 50.0
    assert buckets[1].net == -50.0
    assert buckets[1].count == 2


def test_group_for_chart_ties_keep_first_seen_order() -> None:
    """Buckets with equal net should keep their insertion order."""
    transactions = [
        _tx("1", EXPENSE, 10.0, merchant="Zeta"),
        _tx("2", EXPENSE, 10.0, merchant="Alpha"),
        _tx("3", EXPENSE, 10.0, merchant="Mid"),
    ]

    buckets = group_for_chart(transactions, "merchant")

    assert [bucket.label for bucket in buckets] == ["Zeta", "Alpha", "Mid"]


def test_group_for_chart_by_category_mixes_kinds() -> None:
    """A category bucket should carry both revenue and expenses."""
    transactions = [
        _tx("1", REVENUE, 100.0, category="Shop"),
        _tx("2", EXPENSE, 40.0, category="Shop"),
        _tx("3", EXPENSE, 5.0, category="Fees"),
    ]

    buckets = group_for_chart(transactions, "category")

    shop = buckets[0]
    assert shop.label == "Shop"
    assert (shop.revenue, shop.expenses, shop.net, shop.count) == (
        100.0,
        40.0,
        60.0,
        2,
    )
    assert buckets[1].label == "Fees"


def test_group_for_chart_by_date_uses_month_labels() -> None:
    """Date grouping should bucket by month and collect unparsable dates."""
    transactions = [
        _tx("1", REVENUE, 50.0, date="2024-01-15"),
        _tx("2", REVENUE, 25.0, date="2024-01-31T10:00:00Z"),
        _tx("3", EXPENSE, 10.0, date="not a date"),
        _tx("4", EXPENSE, 5.0, date=""),
    ]

    buckets = group_for_chart(transactions, "date")

    assert [bucket.label for bucket in buckets] == ["Jan 2024", "Unknown Date"]
    assert buckets[0].revenue == 75.0
    assert buckets[1].count == 2


def test_group_for_chart_by_date_on_empty_set() -> None:
    """An empty transaction set yields no buckets."""
    assert group_for_chart([], "date") == []


def test_group_for_chart_unknown_grouping_falls_back_to_type() -> None:
    """Unknown groupings should warn and group by type."""
    logger = MagicMock()

    buckets = group_for_chart([_tx("1", REVENUE, 1.0)], "weekday", logger)

    assert [bucket.label for bucket in buckets] == [REVENUE]
    logger.warning.assert_called_once()


def test_month_label_formats() -> None:
    """Common host date renderings should map onto month labels."""
    assert month_label("2024-03-05") == "Mar 2024"
    assert month_label("03/05/2024") == "Mar 2024"
    assert month_label("March 5, 2024") == "Mar 2024"
    assert month_label("1709596800000") == "Mar 2024"
    assert month_label("garbage") == "Unknown Date"


def test_parse_date_text_rejects_blank() -> None:
    """Blank strings are not dates."""
    assert parse_date_text("") is None
    assert parse_date_text("   ") is None


def test_chart_title_per_grouping() -> None:
    """Each grouping should have its chart heading."""
    assert chart_title("merchant") == "Revenue vs Expenses by Merchant"
    assert chart_title("category") == "Revenue vs Expenses by Category"
    assert chart_title("date") == "Revenue vs Expenses by Month"
    assert chart_title("type") == "Revenue vs Expenses Overview"


def test_format_currency_uses_symbols_and_codes() -> None:
    """Known currencies get a symbol, others a trailing code."""
    assert format_currency(1234.5, "USD") == "$1,234.50"
    assert format_currency(-80, "eur") == "-€80.00"
    assert format_currency(12, "CHF") == "12.00 CHF"
