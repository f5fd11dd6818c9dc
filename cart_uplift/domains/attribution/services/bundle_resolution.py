"""
Bundle resolution

A storefront bundle id is matched back to a stored bundle by trying
resolver strategies in order; the first one that returns a bundle wins.
"""

from typing import List, Optional, Sequence

from cart_uplift.core.database.models import Bundle
from cart_uplift.core.database.models.enums import BundleAssignmentType
from cart_uplift.core.logging import get_logger
from cart_uplift.repository.BundleRepository import BundleRepository
from cart_uplift.shared.constants.tracking import AI_BUNDLE_PREFIX, DYNAMIC_BUNDLE_PREFIX

logger = get_logger(__name__)


def strip_ai_prefix(bundle_id: str) -> str:
    if bundle_id.startswith(AI_BUNDLE_PREFIX):
        return bundle_id[len(AI_BUNDLE_PREFIX) :]
    return bundle_id


class BundleResolverStrategy:
    """Base class for a single resolution attempt"""

    name = "base"

    async def resolve(
        self, repository: BundleRepository, shop_id: str, bundle_id: str
    ) -> Optional[Bundle]:
        raise NotImplementedError


class DirectIdStrategy(BundleResolverStrategy):
    """Look the id up directly, without the ai- prefix"""

    name = "direct"

    async def resolve(self, repository, shop_id, bundle_id):
        return await repository.get_by_id(shop_id, strip_ai_prefix(bundle_id))


class DynamicProductStrategy(BundleResolverStrategy):
    """
    bundle_dynamic_<productId> maps to an active generated bundle shown on
    that product; bundles assigned to the product beat bundles shown on all
    products.
    """

    name = "dynamic"

    async def resolve(self, repository, shop_id, bundle_id):
        if not bundle_id.startswith(DYNAMIC_BUNDLE_PREFIX):
            return None

        product_id = bundle_id[len(DYNAMIC_BUNDLE_PREFIX) :]
        candidates = await repository.get_active_generated(shop_id)
        return select_dynamic_bundle(candidates, product_id)


class OriginalIdStrategy(BundleResolverStrategy):
    """Fall back to the id exactly as sent, when it differs from the stripped one"""

    name = "original"

    async def resolve(self, repository, shop_id, bundle_id):
        if strip_ai_prefix(bundle_id) == bundle_id:
            return None
        return await repository.get_by_id(shop_id, bundle_id)


def select_dynamic_bundle(candidates: Sequence[Bundle], product_id: str) -> Optional[Bundle]:
    specific: List[Bundle] = []
    shown_everywhere: List[Bundle] = []

    for bundle in candidates:
        products = [str(p) for p in bundle.resolved_products]
        if bundle.assignment_type == BundleAssignmentType.ALL.value:
            shown_everywhere.append(bundle)
        elif product_id in products:
            specific.append(bundle)

    if specific:
        return specific[0]
    if shown_everywhere:
        return shown_everywhere[0]
    return None


DEFAULT_STRATEGIES = (DirectIdStrategy(), DynamicProductStrategy(), OriginalIdStrategy())


class BundleResolver:
    def __init__(
        self,
        repository: BundleRepository,
        strategies: Sequence[BundleResolverStrategy] = DEFAULT_STRATEGIES,
    ):
        self.repository = repository
        self.strategies = strategies

    async def resolve(self, shop_id: str, bundle_id: str) -> Optional[Bundle]:
        for strategy in self.strategies:
            bundle = await strategy.resolve(self.repository, shop_id, bundle_id)
            if bundle is not None:
                logger.debug(
                    "Resolved bundle",
                    bundle_id=bundle_id,
                    strategy=strategy.name,
                    resolved_id=bundle.id,
                )
                return bundle

        logger.warning("Bundle not found in database", bundle_id=bundle_id, shop_id=shop_id)
        return None
