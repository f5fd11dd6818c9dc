"""
Numeric coercion helpers for loosely typed webhook and metadata values
"""

from decimal import Decimal, InvalidOperation
from typing import Any


def to_decimal(value: Any, default: str = "0") -> Decimal:
    """Coerce a price-like value ("12.50", 12.5, None) to Decimal"""
    if value is None or value == "":
        return Decimal(default)
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal(default)
    return result if result.is_finite() else Decimal(default)


def to_int(value: Any, default: int = 0) -> int:
    """Coerce a quantity-like value to int, falling back to the default on bad input"""
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        try:
            return int(float(str(value).strip()))
        except (TypeError, ValueError, OverflowError):
            return default
