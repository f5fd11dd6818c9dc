"""
Tracking event metadata

Metadata arrives as loosely typed JSON. It is decoded once into one of
three shapes depending on the event type; anything unparseable becomes
EmptyMetadata so a single bad row never aborts attribution.
"""

import json
from typing import Any, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from cart_uplift.core.logging import get_logger
from cart_uplift.shared.constants.tracking import TrackingEventType

logger = get_logger(__name__)


def _stringify_ids(value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        value = [value]
    return [str(item) for item in value if item is not None and str(item) != ""]


class RecommendationMetadata(BaseModel):
    """Recommendations shown by an impression or served event"""

    model_config = ConfigDict(extra="ignore")

    kind: Literal["recommendation"] = "recommendation"
    recommendation_ids: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices(
            "recommendationIds", "recommendedIds", "recommendation_ids"
        ),
    )
    anchors: List[str] = Field(default_factory=list)

    @field_validator("recommendation_ids", "anchors", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        return _stringify_ids(v)

    def to_storage(self) -> dict:
        return {"recommendationIds": self.recommendation_ids, "anchors": self.anchors}


class ClickMetadata(BaseModel):
    """Product and variant a shopper clicked"""

    model_config = ConfigDict(extra="ignore")

    kind: Literal["click"] = "click"
    product_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("productId", "parentProductId", "product_id")
    )
    variant_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("variantId", "variant_id")
    )

    @field_validator("product_id", "variant_id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        if v is None or v == "":
            return None
        return str(v)

    def to_storage(self) -> dict:
        data = {}
        if self.product_id:
            data["productId"] = self.product_id
        if self.variant_id:
            data["variantId"] = self.variant_id
        return data


class EmptyMetadata(BaseModel):
    """No structured data"""

    kind: Literal["empty"] = "empty"

    def to_storage(self) -> dict:
        return {}


TrackingMetadata = Union[RecommendationMetadata, ClickMetadata, EmptyMetadata]


def decode_metadata(event_type: str, raw: Any) -> TrackingMetadata:
    """Decode a raw metadata payload for the given event type"""
    if raw is None or raw == "":
        return EmptyMetadata()

    try:
        if isinstance(raw, (str, bytes)):
            raw = json.loads(raw)
        if not isinstance(raw, dict):
            return EmptyMetadata()

        if event_type in TrackingEventType.RECOMMENDATION_EVENTS:
            return RecommendationMetadata.model_validate(raw)
        if event_type == TrackingEventType.CLICK:
            return ClickMetadata.model_validate(raw)
        return EmptyMetadata()

    except (ValueError, TypeError, ValidationError) as e:
        # json.JSONDecodeError and pydantic errors both land here
        logger.debug("Ignoring unparseable tracking metadata", event=event_type, error=str(e))
        return EmptyMetadata()
