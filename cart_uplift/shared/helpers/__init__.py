"""
Helpers module for the Cart Uplift worker
"""

from .datetime_utils import (
    now_utc,
    ensure_aware,
    age_in_days,
)
from .number_utils import to_decimal, to_int


__all__ = [
    "now_utc",
    "ensure_aware",
    "age_in_days",
    "to_decimal",
    "to_int",
]
