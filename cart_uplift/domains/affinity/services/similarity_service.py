"""
Similarity computation job

Runs matrix builder, scorer and the replace protocol per shop, and
sequentially across every enabled shop.
"""

from datetime import timedelta
from typing import Callable, List, Optional

from cart_uplift.core.config.settings import settings
from cart_uplift.core.database.session import get_transaction_context
from cart_uplift.core.logging import get_logger
from cart_uplift.repository.ProductSimilarityRepository import ProductSimilarityRepository
from cart_uplift.repository.ShopSettingsRepository import ShopSettingsRepository
from cart_uplift.repository.TrackingEventRepository import TrackingEventRepository
from cart_uplift.shared.helpers import now_utc
from ..models import ShopSimilarityResult, ShopSimilarityStatus, SimilarityRunSummary
from .affinity_scorer import AffinityScorer
from .copurchase_matrix import CoPurchaseMatrixBuilder

logger = get_logger(__name__)


class SimilarityComputationService:
    """Computes and stores product similarities"""

    def __init__(
        self,
        session_context: Callable = get_transaction_context,
        builder: Optional[CoPurchaseMatrixBuilder] = None,
        scorer: Optional[AffinityScorer] = None,
    ):
        self._session_context = session_context
        self.builder = builder or CoPurchaseMatrixBuilder()
        self.scorer = scorer or AffinityScorer()
        self.config = settings.affinity

    async def compute_for_shop(self, shop_id: str) -> ShopSimilarityResult:
        """Recompute one shop's similarities. Never raises."""
        logger.info(f"🔄 Starting similarity computation for shop: {shop_id}")
        since = now_utc() - timedelta(days=self.config.SIMILARITY_LOOKBACK_DAYS)

        try:
            async with self._session_context() as session:
                events = await TrackingEventRepository(session).get_purchase_events(
                    shop_id, since
                )
                matrix = self.builder.build(shop_id, events)

                if matrix.is_empty:
                    logger.warning(f"⚠️ No order data for {shop_id}, skipping")
                    return ShopSimilarityResult(
                        shop=shop_id, status=ShopSimilarityStatus.NO_DATA
                    )

                logger.info(
                    f"📊 Found {len(matrix.pairs)} product pairs from "
                    f"{matrix.order_count} orders",
                    shop_id=shop_id,
                )

                records = self.scorer.score(matrix)
                deleted, created = await ProductSimilarityRepository(
                    session
                ).replace_for_shop(shop_id, records, self.config.SIMILARITY_BATCH_SIZE)

            logger.info(f"✅ {shop_id}: Created {created} similarity records")
            return ShopSimilarityResult(
                shop=shop_id,
                analyzed=len(matrix.pairs),
                similarities_created=created,
                deleted=deleted,
                status=ShopSimilarityStatus.COMPUTED,
            )

        except Exception as e:
            logger.error(
                f"❌ Similarity computation failed for {shop_id}: {e}",
                error_type=type(e).__name__,
            )
            return ShopSimilarityResult(
                shop=shop_id, status=ShopSimilarityStatus.FAILED, error=str(e)
            )

    async def compute_for_all_shops(self) -> SimilarityRunSummary:
        """Recompute every enabled shop one after another"""
        logger.info("🚀 Starting similarity computation for all shops")

        try:
            async with self._session_context() as session:
                shop_ids = await ShopSettingsRepository(session).get_enabled_shop_ids()
        except Exception as e:
            logger.error(f"❌ Batch similarity computation failed: {e}")
            return SimilarityRunSummary(success=False, error=str(e))

        logger.info(f"📋 Found {len(shop_ids)} shops to process")

        results: List[ShopSimilarityResult] = []
        for shop_id in shop_ids:
            results.append(await self.compute_for_shop(shop_id))

        summary = SimilarityRunSummary.from_results(results)
        logger.info(
            f"✅ Batch complete: {summary.successful_shops}/{summary.total_shops} shops, "
            f"{summary.total_similarities} similarities created",
            breakdown=summary.breakdown,
        )
        return summary
