"""Use cases for splitting multi-product transactions into child records.

A split session walks through ``idle -> editing -> committing`` and back to
``idle`` on success or ``editing`` on failure. Only one commit may be in
flight at a time across every session sharing a ``CommitGate``.
"""

from datasheet_finance.application.ports.field_roles import (
    FieldRoleResolverPort,
)
from datasheet_finance.application.ports.record_store import RecordStorePort
from datasheet_finance.domain.constants import SPLIT_REQUIRED_ROLES
from datasheet_finance.domain.errors import (
    CommitInProgressError,
    NoActiveSplitError,
    PermissionDeniedError,
    SplitCommitError,
)
from datasheet_finance.domain.models import (
    FieldRoleMap,
    RecordWrite,
    SetupIncomplete,
    SplitAllocation,
    SplitCommitResult,
    Transaction,
)
from datasheet_finance.domain.services.normalization import (
    check_setup,
    normalize_records,
)
from datasheet_finance.domain.services.reprocessing import ReprocessingGuard
from datasheet_finance.domain.services.splitting import (
    build_split_writes,
    edit_allocation_amount,
    select_for_split,
    split_candidates,
    validate_before_commit,
)
from datasheet_finance.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


IDLE = "idle"
EDITING = "editing"
COMMITTING = "committing"


class CommitGate:
    """Processing flag allowing a single in-flight commit."""

    def __init__(self) -> None:
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def acquire(self) -> bool:
        """Take the flag; return False if a commit is already running."""
        if self._busy:
            return False
        self._busy = True
        return True

    def release(self) -> None:
        self._busy = False


class ListSplitCandidatesUseCase:
    """List transactions that can still be split in this session."""

    def __init__(
        self,
        record_store: RecordStorePort,
        role_resolver: FieldRoleResolverPort,
        guard: ReprocessingGuard,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            record_store: Port providing fields and records of the view.
            role_resolver: Port mapping fields to semantic roles.
            guard: Session guard of already split transactions.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._record_store = record_store
        self._role_resolver = role_resolver
        self._guard = guard
        self._logger = logger or get_app_logger()

    def resolve_roles(self) -> FieldRoleMap:
        """Return the role map of the current view."""
        return self._role_resolver.resolve(self._record_store.fetch_fields())

    def execute(self) -> list[Transaction] | SetupIncomplete:
        """Return unreconciled, unsuppressed multi-product transactions.

        Returns:
            list[Transaction] | SetupIncomplete: Candidates in record order,
            or the missing roles when the view cannot be split.
        """
        roles = self.resolve_roles()
        setup = check_setup(roles, SPLIT_REQUIRED_ROLES)
        if setup is not None:
            self._logger.warning(
                "Split setup incomplete; missing roles: "
                f"{', '.join(setup.missing_roles)}"
            )
            return setup
        transactions = normalize_records(
            self._record_store.fetch_records(),
            roles,
        )
        candidates = split_candidates(transactions, self._guard)
        self._logger.info(
            f"Found {len(candidates)} split candidates "
            f"among {len(transactions)} records"
        )
        return candidates


class SplitSession:
    """Editing and commit state for splitting one transaction at a time."""

    def __init__(
        self,
        record_store: RecordStorePort,
        roles: FieldRoleMap,
        guard: ReprocessingGuard | None = None,
        gate: CommitGate | None = None,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the session.

        Args:
            record_store: Port receiving the child record writes.
            roles: Field-role map used to build the writes.
            guard: Guard updated after each successful commit.
            gate: Processing flag shared with other sessions.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording committed splits.
        """
        self._record_store = record_store
        self._roles = roles
        self._guard = guard if guard is not None else ReprocessingGuard()
        self._gate = gate if gate is not None else CommitGate()
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._state = IDLE
        self._transaction: Transaction | None = None
        self._allocations: list[SplitAllocation] = []

    @property
    def state(self) -> str:
        return self._state

    @property
    def roles(self) -> FieldRoleMap:
        return self._roles

    @property
    def guard(self) -> ReprocessingGuard:
        return self._guard

    @property
    def transaction(self) -> Transaction | None:
        return self._transaction

    @property
    def allocations(self) -> list[SplitAllocation]:
        return list(self._allocations)

    def select(self, transaction: Transaction) -> list[SplitAllocation]:
        """Start editing equal-share allocations for ``transaction``.

        Raises:
            CommitInProgressError: If this session is committing.
            NotSplittableError: If the transaction has fewer than 2 products.
        """
        self._ensure_not_committing()
        allocations = select_for_split(transaction)
        self._transaction = transaction
        self._allocations = allocations
        self._state = EDITING
        self._logger.debug(
            f"Selected transaction {transaction.id} for splitting into "
            f"{len(allocations)} products"
        )
        return self.allocations

    def edit_amount(self, product_key: str, amount) -> list[SplitAllocation]:
        """Replace the edited amount of one allocation.

        Raises:
            NoActiveSplitError: If no transaction is selected.
            CommitInProgressError: If this session is committing.
        """
        self._ensure_not_committing()
        transaction = self._require_transaction()
        self._allocations = edit_allocation_amount(
            self._allocations,
            transaction.id,
            product_key,
            amount,
        )
        return self.allocations

    def cancel(self) -> None:
        """Discard the current allocations and return to idle."""
        self._ensure_not_committing()
        self._reset()

    async def commit(self) -> SplitCommitResult:
        """Create one child record per allocation.

        On success the parent id is suppressed in the guard and the session
        returns to idle. On any failure the session stays editable.

        Returns:
            SplitCommitResult: Parent id and number of records created.

        Raises:
            NoActiveSplitError: If no transaction is selected.
            CommitInProgressError: If another commit is in flight.
            CountMismatchError: If allocations and products disagree.
            PermissionDeniedError: If the host refuses any child record.
            SplitCommitError: If the host write fails.
        """
        transaction = self._require_transaction()
        if not self._gate.acquire():
            raise CommitInProgressError(
                "Another split commit is already in progress"
            )
        self._state = COMMITTING
        try:
            result = await self._submit(transaction)
        finally:
            self._gate.release()
            if self._state == COMMITTING:
                self._state = EDITING
        return result

    async def _submit(self, transaction: Transaction) -> SplitCommitResult:
        validate_before_commit(transaction, self._allocations)
        writes = build_split_writes(
            transaction,
            self._allocations,
            self._roles,
        )
        self._check_permissions(writes)
        try:
            created_ids = await self._record_store.add_records(
                [write.values for write in writes]
            )
        except Exception as exc:
            self._logger.error(
                f"Error creating split transactions for {transaction.id}: "
                f"{exc}"
            )
            raise SplitCommitError(
                f"Error creating split transactions: {exc}"
            ) from exc

        self._guard.suppress(transaction.id)
        self._reset()
        self._usage_logger.info(
            f"Split transaction {transaction.id} into {len(writes)} records"
        )
        return SplitCommitResult(
            original_id=transaction.id,
            created_count=len(writes),
            created_ids=tuple(created_ids or ()),
        )

    def _check_permissions(self, writes: list[RecordWrite]) -> None:
        refused = []
        for index, write in enumerate(writes, start=1):
            check = self._record_store.can_add_record(write.values)
            if not check.acceptable:
                refused.append(
                    f"Split {index}: {check.message or 'permission denied'}"
                )
        if refused:
            self._logger.warning(
                f"Host refused {len(refused)} of {len(writes)} split records"
            )
            raise PermissionDeniedError(refused)

    def _require_transaction(self) -> Transaction:
        if self._transaction is None:
            raise NoActiveSplitError("No transaction selected for splitting")
        return self._transaction

    def _ensure_not_committing(self) -> None:
        if self._state == COMMITTING:
            raise CommitInProgressError(
                "Cannot change the split while it is being committed"
            )

    def _reset(self) -> None:
        self._transaction = None
        self._allocations = []
        self._state = IDLE


__all__ = [
    "CommitGate",
    "ListSplitCandidatesUseCase",
    "SplitSession",
    "IDLE",
    "EDITING",
    "COMMITTING",
]
