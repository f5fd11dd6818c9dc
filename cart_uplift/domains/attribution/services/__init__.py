"""
Attribution domain services
"""

from .source_quantities import split_line_item, split_by_product, bundle_quantity
from .signals import build_signals
from .attribution_matcher import AttributionMatcher, product_revenue
from .bundle_resolution import (
    BundleResolver,
    BundleResolverStrategy,
    DirectIdStrategy,
    DynamicProductStrategy,
    OriginalIdStrategy,
)
from .bundle_purchase_service import BundlePurchaseService, group_bundle_items
from .missed_opportunity import MissedOpportunityTracker
from .order_attribution_service import OrderAttributionService

__all__ = [
    "split_line_item",
    "split_by_product",
    "bundle_quantity",
    "build_signals",
    "AttributionMatcher",
    "product_revenue",
    "BundleResolver",
    "BundleResolverStrategy",
    "DirectIdStrategy",
    "DynamicProductStrategy",
    "OriginalIdStrategy",
    "BundlePurchaseService",
    "group_bundle_items",
    "MissedOpportunityTracker",
    "OrderAttributionService",
]
