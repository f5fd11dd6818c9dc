"""
Product association read path
"""

from typing import Callable, Optional

from cart_uplift.core.config.settings import settings
from cart_uplift.core.database.session import get_session_context
from cart_uplift.core.logging import get_logger
from cart_uplift.repository.TrackingEventRepository import TrackingEventRepository
from ..models import AssociationMode, AssociationReport
from .decayed_associations import DecayedAssociationAnalyzer

logger = get_logger(__name__)


class ProductAssociationService:
    """Loads recent orders and ranks bundle opportunities"""

    def __init__(
        self,
        session_context: Callable = get_session_context,
        analyzer: Optional[DecayedAssociationAnalyzer] = None,
    ):
        self._session_context = session_context
        self.analyzer = analyzer or DecayedAssociationAnalyzer()

    async def get_associations(
        self,
        shop_id: str,
        mode: AssociationMode = AssociationMode.ADVANCED,
        debug: bool = False,
    ) -> AssociationReport:
        async with self._session_context() as session:
            baskets = await TrackingEventRepository(session).get_recent_order_baskets(
                shop_id, settings.affinity.ASSOCIATION_ORDER_LIMIT
            )

        opportunities, total_associations = self.analyzer.analyze(
            baskets, mode=mode, debug=debug
        )
        logger.info(
            "Analyzed product associations",
            shop_id=shop_id,
            mode=mode.value,
            orders=len(baskets),
            opportunities=len(opportunities),
        )

        return AssociationReport(
            bundle_opportunities=opportunities,
            total_associations=total_associations,
            analyzed_orders=len(baskets),
            mode=mode,
        )
