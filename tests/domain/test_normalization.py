"""Tests for record normalization."""

from datasheet_finance.domain.constants import EXPENSE, REVENUE
from datasheet_finance.domain.models import (
    FieldRoleMap,
    Product,
    RawRecord,
    SetupIncomplete,
)
from datasheet_finance.domain.services.normalization import (
    cell_to_text,
    check_setup,
    classify_kind,
    normalize_record,
    normalize_records,
)
from datasheet_finance.domain.services.finance import summarize


ROLES = FieldRoleMap(
    title="fldTitle",
    type="fldType",
    amount="fldAmount",
    category="fldCategory",
    merchant="fldMerchant",
    date="fldDate",
    product="fldProducts",
    reconciled="fldReconciled",
)


def test_check_setup_reports_missing_roles_in_order() -> None:
    """Missing mandatory roles should be listed in the requested order."""
    roles = FieldRoleMap(title="fldTitle")

    result = check_setup(roles, ("title", "type", "amount"))

    assert result == SetupIncomplete(missing_roles=("type", "amount"))


def test_check_setup_returns_none_when_ready() -> None:
    """A role map covering every required role passes."""
    assert check_setup(ROLES, ("title", "type", "amount", "product")) is None


def test_classify_kind_matches_revenue_substring() -> None:
    """Any text containing 'revenue' is revenue; everything else expense."""
    assert classify_kind("Revenue") == REVENUE
    assert classify_kind("other REVENUE stream") == REVENUE
    assert classify_kind({"name": "Revenue"}) == REVENUE
    assert classify_kind("Expense") == EXPENSE
    assert classify_kind("Revenu") == EXPENSE
    assert classify_kind(None) == EXPENSE


def test_cell_to_text_renders_host_shapes() -> None:
    """Cells render to display strings regardless of their shape."""
    assert cell_to_text(None) == ""
    assert cell_to_text("  Shop  ") == "Shop"
    assert cell_to_text(12.5) == "12.5"
    assert cell_to_text(True) == "true"
    assert cell_to_text({"name": "Groceries", "id": "opt1"}) == "Groceries"
    assert cell_to_text([{"name": "A"}, "B", None]) == "A, B"


def test_normalize_record_fills_defaults() -> None:
    """Empty cells should fall back to deterministic defaults."""
    record = RawRecord(record_id="rec1", values={"fldAmount": "-12.5"})

    tx = normalize_record(record, ROLES)

    assert tx.id == "rec1"
    assert tx.title == "Untitled"
    assert tx.kind == EXPENSE
    assert tx.amount == 12.5
    assert tx.category == "Other"
    assert tx.merchant == "Unknown"
    assert tx.date == ""
    assert tx.products == ()
    assert tx.reconciled is False


def test_normalize_record_coerces_invalid_amount_to_zero() -> None:
    """Non-numeric amounts should normalize to 0."""
    record = RawRecord(
        record_id="rec1",
        values={"fldTitle": "Fee", "fldAmount": "abc"},
    )

    assert normalize_record(record, ROLES).amount == 0.0


def test_normalize_record_reads_every_role() -> None:
    """Mapped cells should populate the transaction."""
    record = RawRecord(
        record_id="rec9",
        values={
            "fldTitle": "Grocery Run",
            "fldType": {"name": "Expense"},
            "fldAmount": 90,
            "fldCategory": "Food",
            "fldMerchant": "Corner Shop",
            "fldDate": "2024-01-15",
            "fldProducts": ["Milk", "Milk", "Bread"],
            "fldReconciled": True,
        },
    )

    tx = normalize_record(record, ROLES)

    assert tx.title == "Grocery Run"
    assert tx.kind == EXPENSE
    assert tx.amount == 90.0
    assert tx.category == "Food"
    assert tx.merchant == "Corner Shop"
    assert tx.date == "2024-01-15"
    assert tx.products == (Product(name="Milk"), Product(name="Bread"))
    assert tx.product_count == 2
    assert tx.reconciled is True


def test_normalize_record_ignores_products_without_role() -> None:
    """Products are only read when the product role is mapped."""
    roles = FieldRoleMap(title="fldTitle", type="fldType", amount="fldAmount")
    record = RawRecord(
        record_id="rec1",
        values={"fldProducts": "Milk, Bread", "fldAmount": 3},
    )

    assert normalize_record(record, roles).products == ()


def test_normalize_records_preserves_order() -> None:
    """Records should be normalized in input order."""
    records = [
        RawRecord(record_id=f"rec{index}", values={"fldAmount": index})
        for index in range(3)
    ]

    result = normalize_records(records, ROLES)

    assert [tx.id for tx in result] == ["rec0", "rec1", "rec2"]


def test_non_finite_amounts_keep_summary_finite() -> None:
    """Infinity text in an amount cell must not turn net or margin into NaN."""
    records = [
        RawRecord(
            "rec1",
            {"fldType": "Revenue", "fldAmount": "Infinity"},
        ),
        RawRecord("rec2", {"fldType": "Expense", "fldAmount": "-inf"}),
        RawRecord("rec3", {"fldType": "Revenue", "fldAmount": "1_000"}),
        RawRecord("rec4", {"fldType": "Revenue", "fldAmount": "200"}),
    ]

    summary = summarize(normalize_records(records, ROLES))

    assert summary.total_revenue == 200.0
    assert summary.total_expenses == 0.0
    assert summary.net_profit == 200.0
    assert summary.profit_margin == 100.0
