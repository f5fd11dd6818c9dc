"""
Affinity scorer

Turns a co-purchase matrix into directional similarity records.
"""

from typing import List, Optional

from cart_uplift.core.config.settings import settings
from ..models import CoPurchaseMatrix, ProductPair, SimilarityRecord


class AffinityScorer:
    """Jaccard and frequency blend with an inclusion gate"""

    def __init__(
        self,
        jaccard_weight: Optional[float] = None,
        frequency_weight: Optional[float] = None,
        min_overall_score: Optional[float] = None,
        min_co_purchase_count: Optional[int] = None,
    ):
        affinity = settings.affinity
        self.jaccard_weight = (
            affinity.JACCARD_WEIGHT if jaccard_weight is None else jaccard_weight
        )
        self.frequency_weight = (
            affinity.FREQUENCY_WEIGHT if frequency_weight is None else frequency_weight
        )
        self.min_overall_score = (
            affinity.MIN_OVERALL_SCORE if min_overall_score is None else min_overall_score
        )
        self.min_co_purchase_count = (
            affinity.MIN_CO_PURCHASE_COUNT
            if min_co_purchase_count is None
            else min_co_purchase_count
        )

    @staticmethod
    def jaccard(pair: ProductPair, matrix: CoPurchaseMatrix) -> float:
        intersection = len(pair.shared_order_ids)
        union = (
            matrix.products[pair.product_id1].total_orders
            + matrix.products[pair.product_id2].total_orders
            - intersection
        )
        return intersection / union if union > 0 else 0.0

    @staticmethod
    def frequency(pair: ProductPair, matrix: CoPurchaseMatrix) -> float:
        max_orders = max(
            matrix.products[pair.product_id1].total_orders,
            matrix.products[pair.product_id2].total_orders,
        )
        return pair.co_purchase_count / max_orders if max_orders > 0 else 0.0

    def score_pair(self, pair: ProductPair, matrix: CoPurchaseMatrix):
        """Return (frequency, overall) for a pair"""
        frequency = self.frequency(pair, matrix)
        overall = (
            self.jaccard_weight * self.jaccard(pair, matrix)
            + self.frequency_weight * frequency
        )
        return frequency, overall

    def passes_gate(self, pair: ProductPair, overall: float) -> bool:
        return (
            overall > self.min_overall_score
            and pair.co_purchase_count >= self.min_co_purchase_count
        )

    def score(self, matrix: CoPurchaseMatrix) -> List[SimilarityRecord]:
        """
        Score every pair and emit both directions for those passing the gate.

        Records come out sorted by pair key so repeated runs over the same
        matrix produce identical lists.
        """
        records: List[SimilarityRecord] = []

        for key in sorted(matrix.pairs):
            pair = matrix.pairs[key]
            frequency, overall = self.score_pair(pair, matrix)
            if not self.passes_gate(pair, overall):
                continue

            for source, target in (
                (pair.product_id1, pair.product_id2),
                (pair.product_id2, pair.product_id1),
            ):
                records.append(
                    SimilarityRecord(
                        shop_id=matrix.shop_id,
                        product_id1=source,
                        product_id2=target,
                        co_purchase_score=frequency,
                        overall_score=overall,
                        sample_size=pair.co_purchase_count,
                    )
                )

        return records
