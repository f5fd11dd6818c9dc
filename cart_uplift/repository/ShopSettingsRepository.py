"""
Shop Settings Repository

Repository for ShopSettings table operations.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cart_uplift.core.database.models import ShopSettings

logger = logging.getLogger(__name__)


class ShopSettingsRepository:
    """Repository for ShopSettings operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_enabled_shop_ids(self) -> List[str]:
        """Get the IDs of every enabled shop."""
        query = (
            select(ShopSettings.shop_id)
            .where(ShopSettings.enabled.is_(True))
            .order_by(ShopSettings.shop_id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
