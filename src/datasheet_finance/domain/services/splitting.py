"""Domain services for splitting a transaction by product."""

from collections.abc import Iterable

from datasheet_finance.domain.errors import (
    CountMismatchError,
    NotSplittableError,
)
from datasheet_finance.domain.models import (
    FieldRoleMap,
    RecordWrite,
    SplitAllocation,
    Transaction,
)
from datasheet_finance.domain.services.reprocessing import ReprocessingGuard
from datasheet_finance.utils.number_utils import coerce_amount


def is_split_candidate(
    transaction: Transaction,
    guard: ReprocessingGuard,
) -> bool:
    """Return True for unreconciled, unsuppressed multi-product transactions."""
    return (
        transaction.product_count > 1
        and not transaction.reconciled
        and not guard.is_suppressed(transaction.id)
    )


def split_candidates(
    transactions: Iterable[Transaction],
    guard: ReprocessingGuard,
) -> list[Transaction]:
    """Filter transactions down to split candidates, preserving order."""
    return [tx for tx in transactions if is_split_candidate(tx, guard)]


def select_for_split(transaction: Transaction) -> list[SplitAllocation]:
    """Derive one equal-share allocation per product.

    Args:
        transaction: Transaction with at least two products.

    Returns:
        list[SplitAllocation]: Allocations in product order, each with
        ``amount / product_count`` as base and edited amount.

    Raises:
        NotSplittableError: If the transaction has fewer than two products.
    """
    count = transaction.product_count
    if count <= 1:
        raise NotSplittableError(transaction.id, count)
    share = transaction.amount / count
    return [
        SplitAllocation(
            original_id=transaction.id,
            product=product,
            base_amount=share,
            edited_amount=share,
        )
        for product in transaction.products
    ]


def edit_allocation_amount(
    allocations: Iterable[SplitAllocation],
    original_id: str,
    product_key: str,
    new_amount,
) -> list[SplitAllocation]:
    """Return allocations with one entry's edited amount replaced.

    Non-numeric input becomes 0. Negative values are not clamped here; that
    is the input layer's job.
    """
    amount = coerce_amount(new_amount)
    updated = []
    for allocation in allocations:
        if (
            allocation.original_id == original_id
            and allocation.product_key == product_key
        ):
            allocation = SplitAllocation(
                original_id=allocation.original_id,
                product=allocation.product,
                base_amount=allocation.base_amount,
                edited_amount=amount,
            )
        updated.append(allocation)
    return updated


def validate_before_commit(
    transaction: Transaction,
    allocations: list[SplitAllocation],
) -> None:
    """Check the allocation count against the product count.

    The sum of edited amounts is deliberately not compared with the
    original amount.

    Raises:
        CountMismatchError: If the counts differ.
    """
    if len(allocations) != transaction.product_count:
        raise CountMismatchError(
            expected=transaction.product_count,
            actual=len(allocations),
        )


def build_split_writes(
    transaction: Transaction,
    allocations: Iterable[SplitAllocation],
    roles: FieldRoleMap,
) -> list[RecordWrite]:
    """Build one new-record request per allocation.

    Parent title, kind, category, merchant and date are copied into every
    mapped field. The product link is only set when the product has an id,
    and children always start unreconciled.
    """
    writes = []
    for allocation in allocations:
        values: dict = {}
        _put(values, roles.title, transaction.title)
        _put(values, roles.type, transaction.kind)
        _put(values, roles.amount, allocation.edited_amount)
        _put(values, roles.category, transaction.category)
        _put(values, roles.merchant, transaction.merchant)
        _put(values, roles.date, transaction.date)
        if roles.product and allocation.product.id:
            values[roles.product] = [allocation.product.id]
        _put(values, roles.reconciled, False)
        writes.append(RecordWrite(values=values))
    return writes


def _put(values: dict, field_id: str | None, value) -> None:
    if field_id:
        values[field_id] = value


__all__ = [
    "is_split_candidate",
    "split_candidates",
    "select_for_split",
    "edit_allocation_amount",
    "validate_before_commit",
    "build_split_writes",
]
