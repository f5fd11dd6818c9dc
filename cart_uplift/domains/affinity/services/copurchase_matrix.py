"""
Co-purchase matrix builder

Groups purchase events by order and accumulates pairwise co-occurrence
statistics for one shop.
"""

from itertools import combinations
from typing import Dict, Iterable, Set

from cart_uplift.core.logging import get_logger
from cart_uplift.shared.helpers import to_decimal
from ..models import CoPurchaseMatrix, ProductMetadata, ProductPair, PurchaseEvent
from ..models.copurchase import canonical_pair

logger = get_logger(__name__)


class CoPurchaseMatrixBuilder:
    """Builds the pair map and product metadata from purchase events"""

    def build(self, shop_id: str, events: Iterable[PurchaseEvent]) -> CoPurchaseMatrix:
        matrix = CoPurchaseMatrix(shop_id=shop_id)
        orders: Dict[str, Set[str]] = {}
        order_totals = {}

        for event in events:
            matrix.event_count += 1
            if not event.order_id or not event.product_id:
                continue

            orders.setdefault(event.order_id, set()).add(event.product_id)
            # Rows of one order carry the same total; keep the first seen
            order_totals.setdefault(event.order_id, to_decimal(event.order_total))

            metadata = matrix.products.get(event.product_id)
            if metadata is None:
                metadata = ProductMetadata(product_id=event.product_id)
                matrix.products[event.product_id] = metadata
            metadata.order_ids.add(event.order_id)

        matrix.order_count = len(orders)

        for order_id, product_ids in orders.items():
            if len(product_ids) < 2:
                continue

            for product_a, product_b in combinations(sorted(product_ids), 2):
                key = canonical_pair(product_a, product_b)
                pair = matrix.pairs.get(key)
                if pair is None:
                    pair = ProductPair(product_id1=key[0], product_id2=key[1])
                    matrix.pairs[key] = pair
                pair.record_order(order_id, order_totals[order_id])

        logger.debug(
            "Built co-purchase matrix",
            shop_id=shop_id,
            events=matrix.event_count,
            orders=matrix.order_count,
            products=len(matrix.products),
            pairs=len(matrix.pairs),
        )
        return matrix
