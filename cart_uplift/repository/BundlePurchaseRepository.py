"""
Bundle Purchase Repository

Repository for BundlePurchase table operations.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cart_uplift.core.database.models import BundlePurchase

logger = logging.getLogger(__name__)


class BundlePurchaseRepository:
    """Repository for BundlePurchase operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_order(self, shop_id: str, order_id: str) -> Optional[BundlePurchase]:
        """Get the bundle purchase row of an order."""
        query = select(BundlePurchase).where(
            BundlePurchase.shop_id == shop_id, BundlePurchase.order_id == order_id
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def create(self, purchase: BundlePurchase) -> BundlePurchase:
        """Create a bundle purchase row."""
        self.session.add(purchase)
        await self.session.flush()
        return purchase
