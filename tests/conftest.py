"""
Shared fixtures for the Cart Uplift test suite
"""

import os

# Keep test runs from writing rotating log files
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from cart_uplift.core.database.models import TrackingEvent
from cart_uplift.domains.attribution.models import OrderPayload

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@asynccontextmanager
async def _savepoint():
    yield


def make_session() -> MagicMock:
    """An AsyncSession stand-in whose begin_nested() works as a savepoint"""
    session = MagicMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.begin_nested = MagicMock(side_effect=lambda: _savepoint())
    return session


def session_context_for(session):
    @asynccontextmanager
    async def _context():
        yield session

    return _context


def make_event(
    event_type,
    minutes_ago=0,
    product_id=None,
    variant_id=None,
    metadata=None,
    event_id=None,
    now=NOW,
) -> TrackingEvent:
    return TrackingEvent(
        id=event_id or f"{event_type}-{minutes_ago}",
        shop_id="shop.example.com",
        event=event_type,
        product_id=product_id,
        variant_id=variant_id,
        event_metadata=metadata,
        created_at=now - timedelta(minutes=minutes_ago),
    )


def make_line_item(product_id, price="10.00", quantity=1, variant_id=None, **properties):
    return {
        "id": f"line-{product_id}-{variant_id or 'default'}",
        "product_id": product_id,
        "variant_id": variant_id,
        "quantity": quantity,
        "price": price,
        "properties": [{"name": name, "value": value} for name, value in properties.items()],
    }


def make_order(*line_items, order_id="1001", total="100.00", customer_id="cust-1") -> OrderPayload:
    return OrderPayload.model_validate(
        {
            "id": order_id,
            "order_number": "1001",
            "total_price": total,
            "customer": {"id": customer_id},
            "line_items": list(line_items),
        }
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def session():
    return make_session()


@pytest.fixture
def session_context(session):
    return session_context_for(session)


@pytest.fixture
def zero():
    return Decimal("0")
