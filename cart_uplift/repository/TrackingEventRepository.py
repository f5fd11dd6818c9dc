"""
Tracking Event Repository

Repository for TrackingEvent table operations.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import AsyncSession

from cart_uplift.core.database.models import TrackingEvent
from cart_uplift.domains.affinity.models import OrderBasket, PurchaseEvent
from cart_uplift.shared.constants.tracking import TrackingEventType
from cart_uplift.shared.helpers import ensure_aware, now_utc, to_decimal

logger = logging.getLogger(__name__)


class TrackingEventRepository:
    """Repository for TrackingEvent operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, event: TrackingEvent) -> TrackingEvent:
        """Create a new tracking event."""
        self.session.add(event)
        await self.session.flush()
        return event

    async def exists_for_session_product(
        self, shop_id: str, event: str, session_id: str, product_id: str
    ) -> bool:
        """Check whether a session already logged this event for a product."""
        query = (
            select(TrackingEvent.id)
            .where(
                and_(
                    TrackingEvent.shop_id == shop_id,
                    TrackingEvent.event == event,
                    TrackingEvent.session_id == session_id,
                    TrackingEvent.product_id == product_id,
                )
            )
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none() is not None

    async def get_purchase_events(
        self, shop_id: str, since: datetime
    ) -> List[PurchaseEvent]:
        """Get the shop's purchase events created after `since`."""
        query = select(
            TrackingEvent.order_id,
            TrackingEvent.product_id,
            TrackingEvent.session_id,
            TrackingEvent.order_value,
            TrackingEvent.created_at,
        ).where(
            and_(
                TrackingEvent.shop_id == shop_id,
                TrackingEvent.event == TrackingEventType.PURCHASE,
                TrackingEvent.created_at >= since,
                TrackingEvent.order_id.is_not(None),
                TrackingEvent.product_id.is_not(None),
            )
        )
        result = await self.session.execute(query)

        return [
            PurchaseEvent(
                shop_id=shop_id,
                order_id=row.order_id,
                product_id=row.product_id,
                session_id=row.session_id,
                order_total=to_decimal(row.order_value),
                occurred_at=row.created_at,
            )
            for row in result
        ]

    async def get_recent_order_baskets(
        self, shop_id: str, limit: int
    ) -> List[OrderBasket]:
        """Get the `limit` most recent purchase orders as product baskets."""
        recent_orders = (
            select(
                TrackingEvent.order_id.label("order_id"),
                func.max(TrackingEvent.created_at).label("created_at"),
            )
            .where(
                and_(
                    TrackingEvent.shop_id == shop_id,
                    TrackingEvent.event == TrackingEventType.PURCHASE,
                    TrackingEvent.order_id.is_not(None),
                    TrackingEvent.product_id.is_not(None),
                )
            )
            .group_by(TrackingEvent.order_id)
            .order_by(func.max(TrackingEvent.created_at).desc())
            .limit(limit)
            .subquery()
        )

        query = (
            select(
                TrackingEvent.order_id,
                TrackingEvent.product_id,
                TrackingEvent.order_value,
                recent_orders.c.created_at,
            )
            .join(recent_orders, TrackingEvent.order_id == recent_orders.c.order_id)
            .where(
                and_(
                    TrackingEvent.shop_id == shop_id,
                    TrackingEvent.event == TrackingEventType.PURCHASE,
                    TrackingEvent.product_id.is_not(None),
                )
            )
            .order_by(recent_orders.c.created_at.desc())
        )
        result = await self.session.execute(query)

        baskets: Dict[str, OrderBasket] = {}
        for row in result:
            basket = baskets.get(row.order_id)
            if basket is None:
                basket = OrderBasket(
                    order_id=row.order_id,
                    order_value=to_decimal(row.order_value),
                    created_at=ensure_aware(row.created_at) or now_utc(),
                )
                baskets[row.order_id] = basket
            if row.product_id not in basket.product_ids:
                basket.product_ids.append(row.product_id)

        return list(baskets.values())

    async def get_attribution_events(
        self,
        shop_id: str,
        since: datetime,
        limit: int,
        event_types: Optional[Sequence[str]] = None,
    ) -> List[TrackingEvent]:
        """Get the newest impression, served and click events since `since`."""
        event_types = event_types or TrackingEventType.ATTRIBUTION_EVENTS
        query = (
            select(TrackingEvent)
            .where(
                and_(
                    TrackingEvent.shop_id == shop_id,
                    TrackingEvent.event.in_(event_types),
                    TrackingEvent.created_at >= since,
                )
            )
            .order_by(TrackingEvent.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
