"""Domain models for financial aggregates."""

from dataclasses import dataclass, field

from .transactions import Transaction


@dataclass(frozen=True)
class FinancialSummary:
    """Revenue and expense totals over a set of transactions.

    Attributes:
        total_revenue: Sum of revenue magnitudes.
        total_expenses: Sum of expense magnitudes.
        net_profit: Revenue minus expenses.
        profit_margin: Net profit as a percentage of revenue, 0 without
            revenue.
    """

    total_revenue: float
    total_expenses: float
    net_profit: float
    profit_margin: float
    transactions: list[Transaction] = field(default_factory=list)
    revenue_transactions: list[Transaction] = field(default_factory=list)
    expense_transactions: list[Transaction] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "FinancialSummary":
        """Return the all-zero summary."""
        return cls(
            total_revenue=0.0,
            total_expenses=0.0,
            net_profit=0.0,
            profit_margin=0.0,
        )


@dataclass(frozen=True)
class ChartBucket:
    """Revenue and expenses for one group of the chart."""

    label: str
    revenue: float
    expenses: float
    net: float
    count: int


__all__ = ["FinancialSummary", "ChartBucket"]
