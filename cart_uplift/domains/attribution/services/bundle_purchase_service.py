"""
Bundle purchase tracking

Groups bundle-tagged line items of an order, credits matched bundles and
writes a per-order tracking row so redelivered webhooks are not counted
twice.
"""

from decimal import Decimal
from typing import Dict, List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from cart_uplift.core.database.models import BundlePurchase, CustomerBundle
from cart_uplift.core.database.models.enums import CustomerBundleAction
from cart_uplift.core.logging import get_logger
from cart_uplift.repository.BundlePurchaseRepository import BundlePurchaseRepository
from cart_uplift.repository.BundleRepository import BundleRepository
from cart_uplift.repository.CustomerBundleRepository import CustomerBundleRepository
from cart_uplift.shared.constants.tracking import PROPERTY_BUNDLE_ID, PROPERTY_BUNDLE_NAME
from ..models import BundleGroup, OrderLineItem, OrderPayload
from .bundle_resolution import BundleResolver, strip_ai_prefix
from .source_quantities import bundle_quantity

logger = get_logger(__name__)


def group_bundle_items(items: List[OrderLineItem]) -> List[BundleGroup]:
    """Group line items by their bundle id, keeping first-seen order"""
    groups: Dict[str, BundleGroup] = {}
    for item in items:
        bundle_id = item.get_property(PROPERTY_BUNDLE_ID)
        if not bundle_id:
            continue

        group = groups.get(bundle_id)
        if group is None:
            group = BundleGroup(bundle_id=bundle_id)
            groups[bundle_id] = group
        if group.bundle_name is None:
            group.bundle_name = item.get_property(PROPERTY_BUNDLE_NAME)

        group.items.append(item)
        group.revenue += item.price * bundle_quantity(item)

    return list(groups.values())


class BundlePurchaseService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.bundle_repository = BundleRepository(session)
        self.bundle_purchase_repository = BundlePurchaseRepository(session)
        self.customer_bundle_repository = CustomerBundleRepository(session)
        self.resolver = BundleResolver(self.bundle_repository)

    async def process(self, shop_id: str, order: OrderPayload) -> Tuple[bool, Decimal]:
        """Return (bundles used, bundle revenue) for the order"""
        existing = await self.bundle_purchase_repository.get_by_order(shop_id, order.id)
        if existing is not None:
            logger.info("Bundle tracking already exists, skipping duplicate", order_id=order.id)
            return True, Decimal(str(existing.total_value or 0))

        groups = group_bundle_items(order.line_items)
        if not groups:
            logger.debug("No bundle purchases found in this order", order_id=order.id)
            return False, Decimal("0")

        total_revenue = Decimal("0")
        for group in groups:
            total_revenue += group.revenue
            bundle = await self.resolver.resolve(shop_id, group.bundle_id)

            if bundle is not None:
                await self.bundle_repository.record_purchase(bundle.id, group.revenue)
                logger.info(
                    "🎁 Updated bundle purchase stats",
                    bundle_id=bundle.id,
                    bundle_name=group.bundle_name or bundle.name,
                    revenue=group.revenue,
                )

            tracked_id = bundle.id if bundle is not None else strip_ai_prefix(group.bundle_id)
            await self._log_customer_bundle(shop_id, order, tracked_id, group.revenue)

        await self.bundle_purchase_repository.create(
            BundlePurchase(
                shop_id=shop_id,
                order_id=order.id,
                order_number=order.order_number,
                bundle_count=len(groups),
                total_value=total_revenue,
            )
        )
        logger.info(
            "Created bundle purchase tracking record",
            order_id=order.id,
            bundle_count=len(groups),
            total_bundle_revenue=total_revenue,
        )
        return True, total_revenue

    async def _log_customer_bundle(
        self, shop_id: str, order: OrderPayload, bundle_id: str, revenue: Decimal
    ) -> None:
        """Best effort; a failure here never affects the order result"""
        try:
            async with self.session.begin_nested():
                await self.customer_bundle_repository.create(
                    CustomerBundle(
                        shop_id=shop_id,
                        customer_id=order.customer_id,
                        bundle_id=bundle_id,
                        action=CustomerBundleAction.PURCHASE.value,
                        cart_value=revenue,
                    )
                )
        except Exception as e:
            logger.warning(
                "Failed to record customer bundle purchase", bundle_id=bundle_id, error=str(e)
            )
