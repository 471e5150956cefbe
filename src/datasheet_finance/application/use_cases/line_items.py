"""Use cases for the line-item list: record tree, line-item split, add."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from datasheet_finance.application.ports.field_roles import (
    FieldRoleResolverPort,
)
from datasheet_finance.application.ports.record_store import RecordStorePort
from datasheet_finance.application.use_cases.split_transaction import (
    CommitGate,
)
from datasheet_finance.domain.constants import (
    LINK_ID_KEYS,
    ROLE_PRODUCT,
    ROLE_TITLE,
)
from datasheet_finance.domain.errors import (
    CommitInProgressError,
    PermissionDeniedError,
    SplitCommitError,
)
from datasheet_finance.domain.models import (
    FieldRoleMap,
    RawRecord,
    SetupIncomplete,
)
from datasheet_finance.domain.services.hierarchy import (
    ChildMatcher,
    TitlePrefixChildMatcher,
    child_title,
    children_of,
    is_splittable_parent,
    line_items,
)
from datasheet_finance.domain.services.normalization import check_setup
from datasheet_finance.infrastructure.logging.logger import get_app_logger


LINE_ITEM_REQUIRED_ROLES = (ROLE_TITLE, ROLE_PRODUCT)


@dataclass(frozen=True)
class RecordTree:
    """Splittable parent records and the children derived from each."""

    parents: list[RawRecord] = field(default_factory=list)
    children: dict[str, list[RawRecord]] = field(default_factory=dict)

    def children_for(self, parent_id: str) -> list[RawRecord]:
        return self.children.get(parent_id, [])


class GetRecordTreeUseCase:
    """Build the expand/collapse tree of line-item parents and children."""

    def __init__(
        self,
        record_store: RecordStorePort,
        role_resolver: FieldRoleResolverPort,
        matcher: ChildMatcher | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            record_store: Port providing fields and records of the view.
            role_resolver: Port mapping fields to semantic roles.
            matcher: Child matching strategy, title prefix by default.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._record_store = record_store
        self._role_resolver = role_resolver
        self._matcher = matcher or TitlePrefixChildMatcher()
        self._logger = logger or get_app_logger()

    def execute(self) -> RecordTree | SetupIncomplete:
        """Return parents with more than one line item and their children."""
        roles = self._role_resolver.resolve(self._record_store.fetch_fields())
        setup = check_setup(roles, LINE_ITEM_REQUIRED_ROLES)
        if setup is not None:
            return setup
        records = self._record_store.fetch_records()
        parents = [
            record
            for record in records
            if is_splittable_parent(record, roles.product)
        ]
        children = {
            parent.record_id: children_of(parent, records, self._matcher)
            for parent in parents
        }
        self._logger.debug(
            f"Record tree built: {len(parents)} parents, "
            f"{sum(len(items) for items in children.values())} children"
        )
        return RecordTree(parents=parents, children=children)


class SplitLineItemsUseCase:
    """Create one child record per line item of a parent record."""

    def __init__(
        self,
        record_store: RecordStorePort,
        gate: CommitGate | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            record_store: Port receiving the child record writes.
            gate: Processing flag shared with other commits.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._record_store = record_store
        self._gate = gate if gate is not None else CommitGate()
        self._logger = logger or get_app_logger()

    async def execute(self, parent: RawRecord, roles: FieldRoleMap) -> int:
        """Write ``"<title> - Item <n>"`` children linking one item each.

        Children refused by the permission pre-check are skipped with a
        warning. Parents with fewer than two line items are left untouched.

        Returns:
            int: Number of child records created.

        Raises:
            CommitInProgressError: If another commit is in flight.
            SplitCommitError: If the host write fails.
        """
        if not roles.title or not roles.product:
            return 0
        items = line_items(parent, roles.product)
        if len(items) <= 1:
            return 0
        if not self._gate.acquire():
            raise CommitInProgressError(
                "Another split commit is already in progress"
            )
        try:
            accepted = []
            for index, item in enumerate(items, start=1):
                values = {
                    roles.title: child_title(parent.title, index),
                    roles.product: [_link_id(item)],
                }
                check = self._record_store.can_add_record(values)
                if check.acceptable:
                    accepted.append(values)
                else:
                    self._logger.warning(
                        "Permission denied to create child record: "
                        f"{check.message}"
                    )
            if accepted:
                await self._write(accepted, parent.record_id)
        finally:
            self._gate.release()
        self._logger.info(
            f"Split record {parent.record_id} into {len(accepted)} line items"
        )
        return len(accepted)

    async def _write(self, values: list[dict], parent_id: str) -> None:
        try:
            await self._record_store.add_records(values)
        except Exception as exc:
            self._logger.error(
                f"Error creating line items for {parent_id}: {exc}"
            )
            raise SplitCommitError(
                f"Error creating line-item records: {exc}"
            ) from exc


class AddRecordUseCase:
    """Create a record with only its primary field set."""

    def __init__(self, record_store: RecordStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            record_store: Port receiving the record write.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._record_store = record_store
        self._logger = logger or get_app_logger()

    async def execute(self, title: str, roles: FieldRoleMap) -> str | None:
        """Create the record and return its id; blank titles are ignored.

        Raises:
            PermissionDeniedError: If the host refuses the record.
            SplitCommitError: If the host write fails.
        """
        cleaned = (title or "").strip()
        if not cleaned or not roles.title:
            return None
        values = {roles.title: cleaned}
        check = self._record_store.can_add_record(values)
        if not check.acceptable:
            raise PermissionDeniedError([check.message or "permission denied"])
        try:
            created = await self._record_store.add_records([values])
        except Exception as exc:
            self._logger.error(f"Error adding record {cleaned!r}: {exc}")
            raise SplitCommitError(f"Error adding record: {exc}") from exc
        self._logger.info(f"Added record {cleaned!r}")
        return created[0] if created else None


def _link_id(item):
    if isinstance(item, Mapping):
        for key in LINK_ID_KEYS:
            if item.get(key):
                return item[key]
    return item


__all__ = [
    "RecordTree",
    "GetRecordTreeUseCase",
    "SplitLineItemsUseCase",
    "AddRecordUseCase",
    "LINE_ITEM_REQUIRED_ROLES",
]
