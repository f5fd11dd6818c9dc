"""
Attribution working types and results
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field

from .order import OrderLineItem


@dataclass(frozen=True)
class SourceQuantities:
    """How many units of a line came from a bundle, a recommendation or a manual add"""

    bundle: int = 0
    rec: int = 0
    manual: int = 0

    def __add__(self, other: "SourceQuantities") -> "SourceQuantities":
        return SourceQuantities(
            bundle=self.bundle + other.bundle,
            rec=self.rec + other.rec,
            manual=self.manual + other.manual,
        )

    @property
    def total(self) -> int:
        return self.bundle + self.rec + self.manual


@dataclass(frozen=True)
class ImpressionRef:
    event_id: str
    created_at: datetime


@dataclass
class RecommendationSignals:
    """What the shop's recent tracking events say about recommendations"""

    # product id -> impressions that recommended it, newest first
    recommended: Dict[str, List[ImpressionRef]] = field(default_factory=dict)
    clicked_ids: Set[str] = field(default_factory=set)
    impression_count: int = 0
    click_count: int = 0
    recent_click_count: int = 0
    newest_anchors: List[str] = field(default_factory=list)

    def was_recommended(self, product_id: str) -> bool:
        return product_id in self.recommended

    def was_clicked(self, product_id: str, variant_ids: List[str]) -> bool:
        if product_id in self.clicked_ids:
            return True
        return any(variant_id in self.clicked_ids for variant_id in variant_ids)


@dataclass
class AttributedProduct:
    product_id: str
    rec_quantity: int
    attributed_revenue: Decimal
    recommendation_event_ids: List[str]
    conversion_time_minutes: int


@dataclass
class BundleGroup:
    """Line items of one order that share a bundle id"""

    bundle_id: str
    bundle_name: Optional[str] = None
    items: List[OrderLineItem] = field(default_factory=list)
    revenue: Decimal = Decimal("0")

    @property
    def product_ids(self) -> List[str]:
        return sorted({item.product_id for item in self.items if item.product_id})


class AttributionOutcome(BaseModel):
    """Result of processing one order"""

    used_app: bool = False
    attributed_revenue: Decimal = Decimal("0")
    attributed_product_ids: List[str] = Field(default_factory=list)
    bundle_revenue: Decimal = Decimal("0")
    duplicate: bool = False

    def to_response(self) -> dict:
        return {
            "usedApp": self.used_app,
            "attributedRevenue": float(self.attributed_revenue),
        }
