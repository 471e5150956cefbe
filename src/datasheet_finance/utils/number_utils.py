"""Helpers for numeric normalization of host cell values."""

import math


def coerce_amount(value) -> float:
    """Normalize a raw cell value to a float.

    Numbers pass through, plain decimal strings are parsed, and anything
    else (None, booleans, lists, malformed text, digit separators such as
    ``"1_000"``, NaN or infinity) becomes ``0.0``.

    Args:
        value: Raw cell value from the host record store or an input widget.

    Returns:
        float: Parsed finite numeric value.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip()
        if not cleaned or "_" in cleaned:
            return 0.0
        try:
            number = float(cleaned)
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


__all__ = ["coerce_amount"]
