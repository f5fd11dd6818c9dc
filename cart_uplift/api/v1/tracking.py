"""
Storefront tracking endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from cart_uplift.core.exceptions import DataStorageError
from cart_uplift.core.logging import get_logger
from cart_uplift.core.redis import get_redis_client_instance
from cart_uplift.domains.tracking.models import (
    TrackEventRequest,
    TrackEventResponse,
    TrackingCounters,
)
from cart_uplift.domains.tracking.services import (
    TrackingCounterStore,
    TrackingIngestionService,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/api/v1/track", tags=["tracking"])


def get_ingestion_service() -> TrackingIngestionService:
    return TrackingIngestionService(TrackingCounterStore(get_redis_client_instance()))


@router.post("", response_model=TrackEventResponse)
async def track_event(
    request: TrackEventRequest,
    service: TrackingIngestionService = Depends(get_ingestion_service),
):
    """Store a tracking event"""
    try:
        return await service.track(request)
    except DataStorageError as e:
        logger.error(
            "Tracking event not stored",
            error_code=e.error_code,
            shop_id=request.shop,
            cause=str(e.cause),
        )
        raise HTTPException(status_code=503, detail=e.message)
    except Exception as e:
        logger.error(
            f"Failed to track {request.event_type}: {e}",
            shop_id=request.shop,
            error_type=type(e).__name__,
        )
        raise HTTPException(status_code=500, detail="Failed to track event")


@router.get("/counters", response_model=TrackingCounters)
async def get_tracking_counters(
    shop_id: str = Query(..., min_length=1),
    service: TrackingIngestionService = Depends(get_ingestion_service),
):
    """Per-event counters of a shop"""
    try:
        counters = await service.get_counters(shop_id)
    except Exception as e:
        logger.error(f"Failed to read tracking counters for {shop_id}: {e}")
        raise HTTPException(status_code=503, detail="Counter store unavailable")
    return TrackingCounters(shop=shop_id, counters=counters)
