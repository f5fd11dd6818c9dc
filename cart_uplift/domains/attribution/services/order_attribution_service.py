"""
Order attribution

Entry point for the order-created webhook: bundle sub-pass, then
recommendation matching, all in one transaction. Never raises.
"""

from datetime import timedelta
from decimal import Decimal
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cart_uplift.core.config.settings import settings
from cart_uplift.core.database.models import RecommendationAttribution
from cart_uplift.core.database.session import get_transaction_context
from cart_uplift.core.logging import get_logger
from cart_uplift.repository.BundlePurchaseRepository import BundlePurchaseRepository
from cart_uplift.repository.ProcessedOrderRepository import ProcessedOrderRepository
from cart_uplift.repository.RecommendationAttributionRepository import (
    RecommendationAttributionRepository,
)
from cart_uplift.repository.TrackingEventRepository import TrackingEventRepository
from cart_uplift.shared.helpers import now_utc
from ..models import AttributionOutcome, OrderPayload
from .attribution_matcher import AttributionMatcher
from .bundle_purchase_service import BundlePurchaseService
from .missed_opportunity import MissedOpportunityTracker
from .signals import build_signals
from .source_quantities import split_by_product

logger = get_logger(__name__)


class OrderAttributionService:
    def __init__(
        self,
        session_context: Callable = get_transaction_context,
        matcher: Optional[AttributionMatcher] = None,
    ):
        self._session_context = session_context
        self.matcher = matcher or AttributionMatcher()
        self.config = settings.attribution

    async def process_order(self, shop_id: str, order: OrderPayload) -> AttributionOutcome:
        """Attribute an order; any internal failure yields an empty outcome"""
        try:
            async with self._session_context() as session:
                return await self._process(session, shop_id, order)
        except Exception as e:
            logger.error(
                "❌ Attribution processing error",
                shop_id=shop_id,
                order_id=order.id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return AttributionOutcome(used_app=False, attributed_revenue=Decimal("0"))

    async def _previous_outcome(
        self, session: AsyncSession, shop_id: str, order_id: str
    ) -> Optional[AttributionOutcome]:
        stored = await RecommendationAttributionRepository(session).get_order_revenue(
            shop_id, order_id
        )
        if stored is None:
            return None

        bundle_purchase = await BundlePurchaseRepository(session).get_by_order(
            shop_id, order_id
        )
        bundle_revenue = (
            Decimal(str(bundle_purchase.total_value or 0)) if bundle_purchase else Decimal("0")
        )
        return AttributionOutcome(
            used_app=True,
            attributed_revenue=stored + bundle_revenue,
            bundle_revenue=bundle_revenue,
            duplicate=True,
        )

    async def _process(
        self, session: AsyncSession, shop_id: str, order: OrderPayload
    ) -> AttributionOutcome:
        now = now_utc()
        log = logger.bind(shop_id=shop_id, order_id=order.id)

        previous = await self._previous_outcome(session, shop_id, order.id)
        if previous is not None:
            log.info("Order already attributed, skipping duplicate")
            return previous

        first_delivery = await ProcessedOrderRepository(session).mark_seen(
            shop_id, order.id
        )

        bundle_used, bundle_revenue = await BundlePurchaseService(session).process(
            shop_id, order
        )
        outcome = AttributionOutcome(
            used_app=bundle_used,
            attributed_revenue=bundle_revenue,
            bundle_revenue=bundle_revenue,
        )

        product_ids = order.product_ids
        if not product_ids:
            log.debug("No products in order, skipping attribution")
            return outcome

        events = await TrackingEventRepository(session).get_attribution_events(
            shop_id,
            since=now - timedelta(days=self.config.ATTRIBUTION_LOOKBACK_DAYS),
            limit=self.config.ATTRIBUTION_EVENT_LIMIT,
        )
        if not events:
            log.debug("No recent tracking events found for attribution")
            return outcome

        signals = build_signals(
            events, now, timedelta(minutes=self.config.CLICK_WINDOW_MINUTES)
        )
        log.debug(
            "Event breakdown",
            impressions=signals.impression_count,
            clicks=signals.click_count,
            recent_clicks=signals.recent_click_count,
        )

        attributed = self.matcher.match(
            order, split_by_product(order.line_items), signals, now
        )

        if not attributed:
            log.info(
                "No attributed products (recommendations not clicked or different items purchased)"
            )
            if signals.impression_count and first_delivery:
                await MissedOpportunityTracker(session).track(shop_id, signals, product_ids)
            return outcome

        await RecommendationAttributionRepository(session).create_many(
            [
                RecommendationAttribution(
                    shop_id=shop_id,
                    product_id=product.product_id,
                    order_id=order.id,
                    order_number=order.order_number,
                    order_value=order.total_price,
                    customer_id=order.customer_id,
                    recommendation_event_ids=product.recommendation_event_ids,
                    attributed_revenue=product.attributed_revenue,
                    conversion_time_minutes=product.conversion_time_minutes,
                )
                for product in attributed
            ]
        )

        recommendation_revenue = sum(
            (product.attributed_revenue for product in attributed), Decimal("0")
        )
        outcome.used_app = True
        outcome.attributed_revenue = bundle_revenue + recommendation_revenue
        outcome.attributed_product_ids = [product.product_id for product in attributed]

        log.info(
            "✅ Attribution complete",
            attributed_products=len(attributed),
            order_value=order.total_price,
            attributed_revenue=outcome.attributed_revenue,
        )
        return outcome
