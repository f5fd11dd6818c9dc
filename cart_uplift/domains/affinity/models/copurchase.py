"""
Co-purchase matrix and similarity record types
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional, Set, Tuple

PairKey = Tuple[str, str]


def canonical_pair(product_a: str, product_b: str) -> PairKey:
    """Order a product pair lexicographically so (A, B) and (B, A) share a key"""
    return (product_a, product_b) if product_a <= product_b else (product_b, product_a)


@dataclass(frozen=True)
class PurchaseEvent:
    """One (order, product) purchase read from the tracking log"""

    shop_id: str
    order_id: str
    product_id: str
    session_id: Optional[str] = None
    order_total: Decimal = Decimal("0")
    occurred_at: Optional[datetime] = None


@dataclass
class ProductPair:
    """Accumulated co-purchase statistics for an unordered product pair"""

    product_id1: str
    product_id2: str
    co_purchase_count: int = 0
    shared_order_ids: Set[str] = field(default_factory=set)
    revenue: Decimal = Decimal("0")

    @property
    def key(self) -> PairKey:
        return (self.product_id1, self.product_id2)

    def record_order(self, order_id: str, order_total: Decimal) -> None:
        self.co_purchase_count += 1
        self.shared_order_ids.add(order_id)
        self.revenue += order_total


@dataclass
class ProductMetadata:
    """Order appearances of a single product"""

    product_id: str
    order_ids: Set[str] = field(default_factory=set)

    @property
    def total_orders(self) -> int:
        return len(self.order_ids)


@dataclass
class CoPurchaseMatrix:
    """Output of the co-purchase matrix builder for one shop"""

    shop_id: str
    pairs: Dict[PairKey, ProductPair] = field(default_factory=dict)
    products: Dict[str, ProductMetadata] = field(default_factory=dict)
    order_count: int = 0
    event_count: int = 0

    @property
    def is_empty(self) -> bool:
        """True when the shop had no purchase events at all"""
        return self.event_count == 0

    def get_pair(self, product_a: str, product_b: str) -> Optional[ProductPair]:
        return self.pairs.get(canonical_pair(product_a, product_b))


@dataclass(frozen=True)
class SimilarityRecord:
    """Directional similarity row between two products of a shop"""

    shop_id: str
    product_id1: str
    product_id2: str
    co_purchase_score: float
    overall_score: float
    sample_size: int
    category_score: float = 0.0
    price_score: float = 0.0
    co_view_score: float = 0.0

    def to_row(self) -> dict:
        """Column values for the product_similarities table"""
        return {
            "shop_id": self.shop_id,
            "product_id1": self.product_id1,
            "product_id2": self.product_id2,
            "category_score": self.category_score,
            "price_score": self.price_score,
            "co_view_score": self.co_view_score,
            "co_purchase_score": self.co_purchase_score,
            "overall_score": self.overall_score,
            "sample_size": self.sample_size,
        }

    def to_dict(self) -> dict:
        """External JSON representation"""
        return {
            "shop": self.shop_id,
            "productId1": self.product_id1,
            "productId2": self.product_id2,
            "categoryScore": self.category_score,
            "priceScore": self.price_score,
            "coViewScore": self.co_view_score,
            "coPurchaseScore": self.co_purchase_score,
            "overallScore": self.overall_score,
            "sampleSize": self.sample_size,
        }
