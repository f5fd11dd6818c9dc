"""
Models for the time-decayed product association analysis
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AssociationMode(str, Enum):
    """Scoring mode of the association analysis"""

    BASIC = "basic"
    ADVANCED = "advanced"


class OrderBasket(BaseModel):
    """Distinct products bought in one order"""

    order_id: str = Field(..., description="Order identifier")
    order_value: Decimal = Field(Decimal("0"), description="Order total")
    product_ids: List[str] = Field(default_factory=list, description="Distinct products")
    created_at: datetime = Field(..., description="Order time")


class BundleOpportunity(BaseModel):
    """A product pair worth offering as a bundle"""

    model_config = ConfigDict(populate_by_name=True)

    product_a: str = Field(..., alias="productA")
    product_b: str = Field(..., alias="productB")
    co_occurrence: int = Field(..., alias="coOccurrence")
    association_strength: int = Field(
        ..., alias="associationStrength", description="Strength as a percentage"
    )
    suggested_discount: int = Field(..., alias="suggestedDiscount")
    potential_revenue: float = Field(..., alias="potentialRevenue")
    avg_order_value: float = Field(..., alias="avgOrderValue")

    # Debug fields, advanced mode only
    weighted_co_occurrence: Optional[float] = Field(None, alias="weightedCoOccurrence")
    support_pct: Optional[float] = Field(None, alias="supportPct")
    confidence_pct: Optional[float] = Field(None, alias="confidencePct")
    lift: Optional[float] = Field(None, alias="lift")

    # Ranking inputs that never leave the service
    raw_strength: float = Field(0.0, exclude=True)
    raw_lift: Optional[float] = Field(None, exclude=True)


class AssociationReport(BaseModel):
    """Ranked bundle opportunities for a shop"""

    model_config = ConfigDict(populate_by_name=True)

    bundle_opportunities: List[BundleOpportunity] = Field(
        default_factory=list, alias="bundleOpportunities"
    )
    total_associations: int = Field(0, alias="totalAssociations")
    analyzed_orders: int = Field(0, alias="analyzedOrders")
    mode: AssociationMode = AssociationMode.ADVANCED
