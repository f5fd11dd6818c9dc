"""
Order webhook endpoint
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request

from cart_uplift.core.exceptions import DataValidationError
from cart_uplift.core.logging import get_logger
from cart_uplift.domains.attribution.models import AttributionOutcome, OrderPayload
from cart_uplift.domains.attribution.services import OrderAttributionService

logger = get_logger(__name__)
router = APIRouter(prefix="/api/v1/webhooks", tags=["webhooks"])


def get_attribution_service() -> OrderAttributionService:
    return OrderAttributionService()


@router.post("/orders/create")
async def order_created(
    request: Request,
    x_shop_domain: Optional[str] = Header(None, alias="X-Shop-Domain"),
    service: OrderAttributionService = Depends(get_attribution_service),
):
    """
    Attribute a newly created order.

    Always answers 200 so the platform does not retry; a payload that cannot
    be parsed is acknowledged as not influenced by the app.
    """
    if not x_shop_domain:
        logger.warning("Order webhook without X-Shop-Domain header, ignoring")
        return AttributionOutcome().to_response()

    try:
        order = OrderPayload.from_webhook(await request.json())
    except ValueError as e:
        logger.warning("Order webhook body is not JSON", shop_id=x_shop_domain, error=str(e))
        return AttributionOutcome().to_response()
    except DataValidationError as e:
        logger.warning(
            "Malformed order payload",
            shop_id=x_shop_domain,
            errors=len(e.validation_errors),
        )
        return AttributionOutcome().to_response()

    logger.info("📦 Order webhook received", shop_id=x_shop_domain, order_id=order.id)
    outcome = await service.process_order(x_shop_domain, order)
    return outcome.to_response()
