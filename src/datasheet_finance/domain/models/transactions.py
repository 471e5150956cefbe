"""Canonical transaction model."""

from dataclasses import dataclass

from datasheet_finance.domain.constants import EXPENSE, REVENUE


@dataclass(frozen=True)
class Product:
    """Product referenced by a transaction, optionally linked by id."""

    name: str
    id: str | None = None

    @property
    def key(self) -> str:
        """Deduplication key, preferring the id over the name."""
        if self.id:
            return f"id:{self.id}"
        return f"name:{self.name}"


@dataclass(frozen=True)
class Transaction:
    """Normalized projection of one host record.

    Attributes:
        id: Host record id.
        title: Display title, never empty.
        kind: ``"Revenue"`` or ``"Expense"``.
        amount: Non-negative magnitude.
        category: Free text, ``"Other"`` when missing.
        merchant: Free text, ``"Unknown"`` when missing.
        date: Raw date text, possibly empty or unparsable.
        products: Deduplicated products in original order.
        reconciled: Host reconciliation flag.
    """

    id: str
    title: str
    kind: str
    amount: float
    category: str
    merchant: str
    date: str
    products: tuple[Product, ...] = ()
    reconciled: bool = False

    @property
    def product_count(self) -> int:
        return len(self.products)

    @property
    def is_revenue(self) -> bool:
        return self.kind == REVENUE

    @property
    def is_expense(self) -> bool:
        return self.kind == EXPENSE


__all__ = ["Product", "Transaction"]
