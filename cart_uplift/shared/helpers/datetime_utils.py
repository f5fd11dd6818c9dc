"""
DateTime utility functions for the Cart Uplift worker
"""

from datetime import datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    """Get current UTC datetime"""
    return datetime.now(timezone.utc)


def ensure_aware(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def age_in_days(then: datetime, now: datetime) -> float:
    """Fractional days between two instants, never negative"""
    delta = ensure_aware(now) - ensure_aware(then)
    return max(0.0, delta.total_seconds() / 86400.0)
