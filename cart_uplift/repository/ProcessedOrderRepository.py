"""
Processed Order Repository

Repository for ProcessedOrder table operations.
"""

import logging

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from cart_uplift.core.database.models import ProcessedOrder
from cart_uplift.core.database.models.base import new_id

logger = logging.getLogger(__name__)


class ProcessedOrderRepository:
    """Repository for ProcessedOrder operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def mark_seen(self, shop_id: str, order_id: str) -> bool:
        """Record the order; False when an earlier delivery already did."""
        stmt = (
            pg_insert(ProcessedOrder)
            .values(id=new_id(), shop_id=shop_id, order_id=order_id)
            .on_conflict_do_nothing(index_elements=["shop_id", "order_id"])
        )
        result = await self.session.execute(stmt)
        first = result.rowcount == 1
        if not first:
            logger.info(f"Order {order_id} of {shop_id} was already processed")
        return first
