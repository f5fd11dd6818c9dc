"""
SQLAlchemy models for the Cart Uplift worker
"""

from .base import Base
from .enums import (
    BundleType,
    BundleStatus,
    BundleAssignmentType,
    CustomerBundleAction,
)
from .tracking_event import TrackingEvent
from .product_similarity import ProductSimilarity
from .recommendation_attribution import RecommendationAttribution
from .bundle import Bundle
from .bundle_purchase import BundlePurchase
from .customer_bundle import CustomerBundle
from .shop_settings import ShopSettings
from .processed_order import ProcessedOrder

__all__ = [
    "Base",
    "BundleType",
    "BundleStatus",
    "BundleAssignmentType",
    "CustomerBundleAction",
    "TrackingEvent",
    "ProductSimilarity",
    "RecommendationAttribution",
    "Bundle",
    "BundlePurchase",
    "CustomerBundle",
    "ShopSettings",
    "ProcessedOrder",
]
