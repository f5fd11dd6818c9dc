"""
Time-decayed product association analysis

Recent orders weigh more than old ones: each order contributes
exp(-ln2 / half_life * age_days) to the pair and product totals it touches.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

from cart_uplift.core.config.settings import settings
from cart_uplift.shared.helpers import age_in_days, now_utc
from ..models import AssociationMode, BundleOpportunity, OrderBasket


def decay_weight(age_days: float, half_life_days: float) -> float:
    """Exponential recency weight; 1.0 today, 0.5 after one half-life"""
    return math.exp(-math.log(2) / half_life_days * max(0.0, age_days))


@dataclass
class _PairStats:
    co_occurrence: int = 0
    weighted_co_occurrence: float = 0.0
    total_revenue: float = 0.0
    weighted_revenue: float = 0.0

    @property
    def avg_order_value(self) -> float:
        return self.total_revenue / self.co_occurrence if self.co_occurrence else 0.0


@dataclass
class _ProductStats:
    orders: int = 0
    weighted_appearances: float = 0.0


class DecayedAssociationAnalyzer:
    """Finds bundle opportunities from recent multi-product orders"""

    def __init__(self, half_life_days: Optional[float] = None):
        self.config = settings.affinity
        self.half_life_days = half_life_days or self.config.DECAY_HALF_LIFE_DAYS

    def _accumulate(
        self, baskets: Sequence[OrderBasket], now: datetime
    ) -> Tuple[Dict[str, _ProductStats], Dict[Tuple[str, str], _PairStats]]:
        products: Dict[str, _ProductStats] = {}
        pairs: Dict[Tuple[str, str], _PairStats] = {}

        for basket in baskets:
            product_ids = sorted(set(basket.product_ids))
            if len(product_ids) < 2:
                continue

            weight = decay_weight(age_in_days(basket.created_at, now), self.half_life_days)
            order_value = float(basket.order_value)

            for product_id in product_ids:
                stats = products.setdefault(product_id, _ProductStats())
                stats.orders += 1
                stats.weighted_appearances += weight

            for pair_key in combinations(product_ids, 2):
                stats = pairs.setdefault(pair_key, _PairStats())
                stats.co_occurrence += 1
                stats.weighted_co_occurrence += weight
                stats.total_revenue += order_value
                stats.weighted_revenue += order_value * weight

        return products, pairs

    def _suggested_discount(self, strength: float) -> int:
        return min(math.floor(min(1.0, strength) * 20), self.config.MAX_SUGGESTED_DISCOUNT)

    def _basic(
        self, anchor: str, other: str, products: Dict[str, _ProductStats], stats: _PairStats
    ) -> Optional[BundleOpportunity]:
        strength = stats.co_occurrence / products[anchor].orders
        if (
            strength < self.config.BASIC_MIN_STRENGTH
            or stats.co_occurrence < self.config.BASIC_MIN_CO_OCCURRENCE
        ):
            return None

        return BundleOpportunity(
            product_a=anchor,
            product_b=other,
            co_occurrence=stats.co_occurrence,
            association_strength=round(min(1.0, strength) * 100),
            suggested_discount=self._suggested_discount(strength),
            potential_revenue=stats.total_revenue,
            avg_order_value=stats.avg_order_value,
            raw_strength=min(1.0, strength),
        )

    def _advanced(
        self,
        anchor: str,
        other: str,
        products: Dict[str, _ProductStats],
        stats: _PairStats,
        total_weighted: float,
        debug: bool,
    ) -> Optional[BundleOpportunity]:
        weighted_a = products[anchor].weighted_appearances
        weighted_b = products[other].weighted_appearances
        weighted_co = stats.weighted_co_occurrence

        confidence = weighted_co / weighted_a if weighted_a > 0 else 0.0
        prob_b = weighted_b / total_weighted if total_weighted > 0 else 0.0
        lift = confidence / prob_b if prob_b > 0 else 0.0
        support = weighted_co / total_weighted if total_weighted > 0 else 0.0

        passes = (
            confidence >= self.config.MIN_CONFIDENCE
            and weighted_co >= self.config.MIN_CONFIDENCE_WEIGHTED_CO
        ) or (
            lift >= self.config.MIN_LIFT
            and weighted_co >= self.config.MIN_LIFT_WEIGHTED_CO
        )
        if not passes:
            return None

        strength = min(1.0, confidence)
        opportunity = BundleOpportunity(
            product_a=anchor,
            product_b=other,
            co_occurrence=stats.co_occurrence,
            association_strength=round(strength * 100),
            suggested_discount=self._suggested_discount(strength),
            potential_revenue=stats.weighted_revenue or stats.total_revenue,
            avg_order_value=stats.avg_order_value,
            raw_strength=strength,
            raw_lift=lift,
        )
        if debug:
            opportunity.weighted_co_occurrence = round(weighted_co, 2)
            opportunity.support_pct = round(support * 100, 2)
            opportunity.confidence_pct = round(confidence * 100, 2)
            opportunity.lift = round(lift, 2)
        return opportunity

    @staticmethod
    def rank_score(opportunity: BundleOpportunity, mode: AssociationMode) -> float:
        if mode == AssociationMode.ADVANCED:
            lift = (
                opportunity.raw_lift
                if opportunity.raw_lift is not None
                else opportunity.raw_strength
            )
            return lift * opportunity.potential_revenue * (1 + opportunity.raw_strength)
        return opportunity.raw_strength * opportunity.potential_revenue

    def analyze(
        self,
        baskets: Sequence[OrderBasket],
        mode: AssociationMode = AssociationMode.ADVANCED,
        debug: bool = False,
        now: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> Tuple[List[BundleOpportunity], int]:
        """
        Return the top bundle opportunities and the number of products seen
        in multi-product orders.

        Each unordered pair is reported once, from the first anchor that
        qualifies in lexicographic order.
        """
        now = now or now_utc()
        limit = limit or self.config.ASSOCIATION_RESULT_LIMIT
        products, pairs = self._accumulate(baskets, now)
        total_weighted = sum(p.weighted_appearances for p in products.values())

        directed: Dict[str, List[Tuple[str, _PairStats]]] = {}
        for (first, second), stats in pairs.items():
            directed.setdefault(first, []).append((second, stats))
            directed.setdefault(second, []).append((first, stats))

        opportunities: List[BundleOpportunity] = []
        reported = set()

        for anchor in sorted(directed):
            if products[anchor].orders < self.config.ASSOCIATION_MIN_PRODUCT_ORDERS:
                continue

            for other, stats in sorted(directed[anchor], key=lambda item: item[0]):
                pair_key = (anchor, other) if anchor <= other else (other, anchor)
                if pair_key in reported:
                    continue

                if mode == AssociationMode.BASIC:
                    opportunity = self._basic(anchor, other, products, stats)
                else:
                    opportunity = self._advanced(
                        anchor, other, products, stats, total_weighted, debug
                    )

                if opportunity is not None:
                    reported.add(pair_key)
                    opportunities.append(opportunity)

        opportunities.sort(key=lambda o: self.rank_score(o, mode), reverse=True)
        return opportunities[:limit], len(products)
