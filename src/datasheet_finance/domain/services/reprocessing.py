"""Session-scoped guard against splitting a transaction twice."""


class ReprocessingGuard:
    """Set of transaction ids already acted upon in the current session.

    Entries are only ever added. A new session starts with a new guard; the
    host's reconciled flag is the durable signal once the user sets it.
    """

    def __init__(self) -> None:
        self._suppressed: set[str] = set()

    def suppress(self, transaction_id: str) -> None:
        self._suppressed.add(transaction_id)

    def is_suppressed(self, transaction_id: str) -> bool:
        return transaction_id in self._suppressed

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self._suppressed

    def __len__(self) -> int:
        return len(self._suppressed)


__all__ = ["ReprocessingGuard"]
