"""
Attribution matcher

A purchased product is credited to recommendations only when all three
hold: some of its units came through the recommendation path, it was in
a recent impression's recommendation list, and it (or one of its
purchased variants) was clicked within the click window.
"""

import math
from datetime import datetime
from decimal import Decimal
from typing import Dict, List

from cart_uplift.core.logging import get_logger
from .source_quantities import split_line_item
from ..models import AttributedProduct, OrderPayload, RecommendationSignals, SourceQuantities

logger = get_logger(__name__)


def product_revenue(order: OrderPayload, product_id: str) -> Decimal:
    """Sum of unit price times recommendation quantity over the product's lines"""
    return sum(
        (
            item.price * split_line_item(item).rec
            for item in order.line_items
            if item.product_id == product_id
        ),
        Decimal("0"),
    )


class AttributionMatcher:
    def match(
        self,
        order: OrderPayload,
        quantities: Dict[str, SourceQuantities],
        signals: RecommendationSignals,
        now: datetime,
    ) -> List[AttributedProduct]:
        attributed: List[AttributedProduct] = []

        for product_id in order.product_ids:
            rec_quantity = quantities.get(product_id, SourceQuantities()).rec
            if rec_quantity <= 0:
                continue
            if not signals.was_recommended(product_id):
                continue
            if not signals.was_clicked(product_id, order.variants_of(product_id)):
                continue

            impressions = signals.recommended[product_id]
            latest = max(ref.created_at for ref in impressions)
            minutes = max(0, math.floor((now - latest).total_seconds() / 60))

            attributed.append(
                AttributedProduct(
                    product_id=product_id,
                    rec_quantity=rec_quantity,
                    attributed_revenue=product_revenue(order, product_id),
                    recommendation_event_ids=[ref.event_id for ref in impressions],
                    conversion_time_minutes=minutes,
                )
            )
            logger.debug("Product attributed", product_id=product_id, rec_quantity=rec_quantity)

        return attributed
