"""
Attribution domain models
"""

from .order import LineItemProperty, OrderCustomer, OrderLineItem, OrderPayload
from .attribution import (
    SourceQuantities,
    ImpressionRef,
    RecommendationSignals,
    AttributedProduct,
    AttributionOutcome,
    BundleGroup,
)

__all__ = [
    "LineItemProperty",
    "OrderCustomer",
    "OrderLineItem",
    "OrderPayload",
    "SourceQuantities",
    "ImpressionRef",
    "RecommendationSignals",
    "AttributedProduct",
    "AttributionOutcome",
    "BundleGroup",
]
