"""
Recommendation Attribution Repository

Repository for RecommendationAttribution table operations.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from cart_uplift.core.database.models import RecommendationAttribution

logger = logging.getLogger(__name__)


class RecommendationAttributionRepository:
    """Repository for RecommendationAttribution operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_order_revenue(self, shop_id: str, order_id: str) -> Optional[Decimal]:
        """
        Get the total attributed revenue stored for an order.

        Returns None when the order has never been attributed.
        """
        query = select(
            func.count(RecommendationAttribution.id),
            func.coalesce(func.sum(RecommendationAttribution.attributed_revenue), 0),
        ).where(
            RecommendationAttribution.shop_id == shop_id,
            RecommendationAttribution.order_id == order_id,
        )
        result = await self.session.execute(query)
        count, total = result.one()
        if not count:
            return None
        return Decimal(str(total))

    async def create_many(
        self, attributions: Sequence[RecommendationAttribution]
    ) -> List[RecommendationAttribution]:
        """Create attribution rows."""
        self.session.add_all(list(attributions))
        await self.session.flush()
        return list(attributions)
