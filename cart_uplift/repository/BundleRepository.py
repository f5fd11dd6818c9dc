"""
Bundle Repository

Repository for Bundle table operations.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cart_uplift.core.database.models import Bundle
from cart_uplift.core.database.models.enums import BundleStatus, BundleType

logger = logging.getLogger(__name__)


class BundleRepository:
    """Repository for Bundle operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, shop_id: str, bundle_id: str) -> Optional[Bundle]:
        """Get a bundle of a shop by ID."""
        query = select(Bundle).where(Bundle.shop_id == shop_id, Bundle.id == bundle_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_active_by_types(
        self, shop_id: str, bundle_types: Sequence[str]
    ) -> List[Bundle]:
        """Get active bundles of the given types."""
        query = (
            select(Bundle)
            .where(
                Bundle.shop_id == shop_id,
                Bundle.status == BundleStatus.ACTIVE.value,
                Bundle.type.in_(list(bundle_types)),
            )
            .order_by(Bundle.created_at.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_active_generated(self, shop_id: str) -> List[Bundle]:
        """Get active machine-generated bundles."""
        return await self.get_active_by_types(
            shop_id, [BundleType.ML.value, BundleType.AI_SUGGESTED.value]
        )

    async def record_purchase(self, bundle_id: str, revenue: Decimal) -> None:
        """Increment a bundle's purchase and revenue counters."""
        await self.session.execute(
            update(Bundle)
            .where(Bundle.id == bundle_id)
            .values(
                total_purchases=Bundle.total_purchases + 1,
                total_revenue=Bundle.total_revenue + revenue,
            )
        )

    async def create(self, bundle: Bundle) -> Bundle:
        """Create a new bundle."""
        self.session.add(bundle)
        await self.session.flush()
        return bundle
