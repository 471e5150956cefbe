"""Domain errors raised by the split workflow."""


class DatasheetFinanceError(RuntimeError):
    """Base class for datasheet finance errors."""


class NotSplittableError(DatasheetFinanceError):
    """Raised when a transaction has fewer than two distinct products."""

    def __init__(self, transaction_id: str, product_count: int) -> None:
        super().__init__(
            f"Transaction {transaction_id} has {product_count} product(s); "
            "at least 2 are required to split"
        )
        self.transaction_id = transaction_id
        self.product_count = product_count


class CountMismatchError(DatasheetFinanceError):
    """Raised when allocations and products disagree at commit time."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Mismatch: Expected {expected} splits but got {actual}"
        )
        self.expected = expected
        self.actual = actual


class CommitInProgressError(DatasheetFinanceError):
    """Raised when a commit starts while another one is still running."""


class NoActiveSplitError(DatasheetFinanceError):
    """Raised when a split operation needs a selected transaction."""


class PermissionDeniedError(DatasheetFinanceError):
    """Raised when the host refuses one or more record creations."""

    def __init__(self, messages: list[str]) -> None:
        super().__init__("; ".join(messages) or "Permission denied")
        self.messages = messages


class SplitCommitError(DatasheetFinanceError):
    """Raised when the host record store rejects a write batch."""


__all__ = [
    "DatasheetFinanceError",
    "NotSplittableError",
    "CountMismatchError",
    "CommitInProgressError",
    "NoActiveSplitError",
    "PermissionDeniedError",
    "SplitCommitError",
]
