"""
Tracking ingestion request and response models
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cart_uplift.shared.constants.tracking import TrackingEventType

PRODUCT_EVENTS = (
    TrackingEventType.IMPRESSION,
    TrackingEventType.CLICK,
    TrackingEventType.ADD_TO_CART,
)


class TrackEventRequest(BaseModel):
    """A storefront tracking event"""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    event_type: str = Field(..., alias="eventType", max_length=50)
    shop: str = Field(..., min_length=1, max_length=255)
    session_id: Optional[str] = Field(None, alias="sessionId", max_length=255)
    customer_id: Optional[str] = Field(None, alias="customerId", max_length=255)

    product_id: Optional[str] = Field(None, alias="productId", max_length=255)
    variant_id: Optional[str] = Field(None, alias="variantId", max_length=255)
    parent_product_id: Optional[str] = Field(None, alias="parentProductId", max_length=255)
    source: Optional[str] = Field(None, max_length=100)

    recommendation_ids: List[str] = Field(default_factory=list, alias="recommendationIds")
    anchors: List[str] = Field(default_factory=list)

    order_id: Optional[str] = Field(None, alias="orderId", max_length=255)
    order_value: Optional[Decimal] = Field(None, alias="orderValue", ge=0)
    product_ids: List[str] = Field(default_factory=list, alias="productIds")

    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator(
        "session_id",
        "customer_id",
        "product_id",
        "variant_id",
        "parent_product_id",
        "order_id",
        mode="before",
    )
    @classmethod
    def coerce_id(cls, v):
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("recommendation_ids", "anchors", "product_ids", mode="before")
    @classmethod
    def coerce_id_list(cls, v):
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            v = [v]
        return [str(item) for item in v if item is not None and str(item) != ""]

    @field_validator("event_type")
    @classmethod
    def validate_event_type(cls, v):
        if v not in TrackingEventType.ALL:
            raise ValueError(f"unsupported event type: {v}")
        return v

    @model_validator(mode="after")
    def validate_required_fields(self):
        if self.event_type in PRODUCT_EVENTS and not self.product_id:
            raise ValueError(f"productId is required for {self.event_type} events")
        if (
            self.event_type == TrackingEventType.ML_RECOMMENDATION_SERVED
            and not (self.recommendation_ids or self.metadata)
        ):
            raise ValueError("recommendationIds are required for served events")
        if self.event_type == TrackingEventType.PURCHASE:
            if not self.order_id:
                raise ValueError("orderId is required for purchase events")
            if not (self.product_id or self.product_ids):
                raise ValueError("productId or productIds is required for purchase events")
        return self

    @property
    def purchased_product_ids(self) -> List[str]:
        """Distinct purchased products in submission order"""
        ids = list(self.product_ids)
        if self.product_id:
            ids.append(self.product_id)
        return list(dict.fromkeys(ids))


class TrackEventResponse(BaseModel):
    success: bool = True
    deduplicated: bool = False
    stored: int = 0


class TrackingCounters(BaseModel):
    """Per-event counters of a shop"""

    shop: str
    counters: Dict[str, int] = Field(default_factory=dict)
