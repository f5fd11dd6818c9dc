"""
Affinity domain services
"""

from .copurchase_matrix import CoPurchaseMatrixBuilder
from .affinity_scorer import AffinityScorer
from .decayed_associations import DecayedAssociationAnalyzer, decay_weight
from .similarity_service import SimilarityComputationService
from .association_service import ProductAssociationService

__all__ = [
    "CoPurchaseMatrixBuilder",
    "AffinityScorer",
    "DecayedAssociationAnalyzer",
    "decay_weight",
    "SimilarityComputationService",
    "ProductAssociationService",
]
