"""Resolution of raw product cells into deduplicated product lists."""

from collections.abc import Iterable, Mapping
from typing import Any

from datasheet_finance.domain.constants import LINK_ID_KEYS, LINK_NAME_KEYS
from datasheet_finance.domain.models import Product


def resolve_products(raw: Any) -> tuple[Product, ...]:
    """Parse a products cell into an ordered, deduplicated product tuple.

    Text cells are comma-separated names. List cells hold either plain
    values or link objects carrying a display name and a record id. Any
    other shape resolves to an empty tuple.

    Args:
        raw: Raw cell value from the host record.

    Returns:
        tuple[Product, ...]: Products in first-seen order without duplicates.
    """
    if isinstance(raw, str):
        candidates = [Product(name=piece.strip()) for piece in raw.split(",")]
    elif isinstance(raw, (list, tuple)):
        candidates = [_product_from_entry(entry) for entry in raw]
    else:
        return ()
    return dedupe_products(product for product in candidates if product.name)


def dedupe_products(products: Iterable[Product]) -> tuple[Product, ...]:
    """Drop products whose key was already seen, keeping the first one."""
    seen: set[str] = set()
    unique: list[Product] = []
    for product in products:
        if product.key in seen:
            continue
        seen.add(product.key)
        unique.append(product)
    return tuple(unique)


def to_raw_products(products: Iterable[Product]) -> list[dict[str, str]]:
    """Render products back to the link-object cell shape."""
    raw: list[dict[str, str]] = []
    for product in products:
        entry = {"name": product.name}
        if product.id:
            entry["id"] = product.id
        raw.append(entry)
    return raw


def _product_from_entry(entry: Any) -> Product:
    if entry is None:
        return Product(name="")
    if isinstance(entry, Mapping):
        name = _first_present(entry, LINK_NAME_KEYS)
        if name is None:
            name = str(entry)
        product_id = _first_present(entry, LINK_ID_KEYS)
        return Product(
            name=str(name).strip(),
            id=str(product_id) if product_id is not None else None,
        )
    return Product(name=str(entry).strip())


def _first_present(entry: Mapping, keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = entry.get(key)
        if value:
            return value
    return None


__all__ = ["resolve_products", "dedupe_products", "to_raw_products"]
