"""
Affinity domain models
"""

from .copurchase import (
    PurchaseEvent,
    ProductPair,
    ProductMetadata,
    CoPurchaseMatrix,
    SimilarityRecord,
)
from .associations import (
    AssociationMode,
    OrderBasket,
    BundleOpportunity,
    AssociationReport,
)
from .jobs import ShopSimilarityStatus, ShopSimilarityResult, SimilarityRunSummary

__all__ = [
    "PurchaseEvent",
    "ProductPair",
    "ProductMetadata",
    "CoPurchaseMatrix",
    "SimilarityRecord",
    "AssociationMode",
    "OrderBasket",
    "BundleOpportunity",
    "AssociationReport",
    "ShopSimilarityStatus",
    "ShopSimilarityResult",
    "SimilarityRunSummary",
]
