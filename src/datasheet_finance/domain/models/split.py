"""Domain models for the product split workflow."""

from dataclasses import dataclass

from .transactions import Product


@dataclass(frozen=True)
class SplitAllocation:
    """Amount assigned to one product of a transaction being split."""

    original_id: str
    product: Product
    base_amount: float
    edited_amount: float

    @property
    def product_key(self) -> str:
        return self.product.key


@dataclass(frozen=True)
class SplitCommitResult:
    """Outcome of a successful split commit."""

    original_id: str
    created_count: int
    created_ids: tuple[str, ...] = ()


__all__ = ["SplitAllocation", "SplitCommitResult"]
