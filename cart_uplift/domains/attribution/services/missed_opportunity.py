"""
Missed-opportunity signal

When recommendations were shown but nothing was attributed, what the
shopper bought instead is a weak hint that it pairs with the product the
recommendations were anchored on.
"""

from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from cart_uplift.core.config.settings import settings
from cart_uplift.core.logging import get_logger
from cart_uplift.repository.ProductSimilarityRepository import ProductSimilarityRepository
from ..models import RecommendationSignals

logger = get_logger(__name__)


class MissedOpportunityTracker:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = ProductSimilarityRepository(session)
        self.config = settings.attribution

    async def track(
        self, shop_id: str, signals: RecommendationSignals, purchased_ids: Iterable[str]
    ) -> int:
        """Upsert capped soft signals; returns how many were written"""
        if not signals.newest_anchors:
            logger.debug("Newest impression has no anchor, skipping missed opportunity")
            return 0

        anchor_id = signals.newest_anchors[0]
        written = 0
        for product_id in purchased_ids:
            if product_id == anchor_id:
                continue
            try:
                async with self.session.begin_nested():
                    await self.repository.upsert_soft_signal(
                        shop_id,
                        anchor_id,
                        product_id,
                        co_purchase_increment=self.config.MISSED_SIGNAL_CO_PURCHASE_INCREMENT,
                        overall_increment=self.config.MISSED_SIGNAL_OVERALL_INCREMENT,
                        score_cap=self.config.MISSED_SIGNAL_SCORE_CAP,
                    )
                written += 1
            except Exception as e:
                logger.warning(
                    "Failed to update similarity",
                    anchor_id=anchor_id,
                    product_id=product_id,
                    error=str(e),
                )

        return written
