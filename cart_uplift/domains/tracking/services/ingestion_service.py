"""
Tracking ingestion

Validated storefront events are stored with their metadata decoded into
the canonical shape, so readers never deal with legacy aliases.
"""

from typing import Callable, List

from sqlalchemy.exc import SQLAlchemyError

from cart_uplift.core.database.models import TrackingEvent
from cart_uplift.core.database.session import get_transaction_context
from cart_uplift.core.exceptions import DataStorageError
from cart_uplift.core.logging import get_logger
from cart_uplift.repository.TrackingEventRepository import TrackingEventRepository
from cart_uplift.shared.constants.tracking import TrackingEventType
from ..models import TrackEventRequest, TrackEventResponse, decode_metadata
from .counter_store import TrackingCounterStore

logger = get_logger(__name__)

# Only these are deduplicated per session and product
DEDUPLICATED_EVENTS = (TrackingEventType.IMPRESSION, TrackingEventType.CLICK)


def build_metadata(request: TrackEventRequest) -> dict:
    """Merge explicit request fields into the raw metadata and decode it"""
    raw = dict(request.metadata)

    if request.event_type in TrackingEventType.RECOMMENDATION_EVENTS:
        if request.recommendation_ids:
            raw["recommendationIds"] = request.recommendation_ids
        if request.anchors:
            raw["anchors"] = request.anchors
    elif request.event_type == TrackingEventType.CLICK:
        if request.variant_id:
            raw["variantId"] = request.variant_id
        if request.parent_product_id:
            raw["productId"] = request.parent_product_id

    return decode_metadata(request.event_type, raw).to_storage()


class TrackingIngestionService:
    """Stores tracking events and bumps the shop's counters"""

    def __init__(
        self,
        counter_store: TrackingCounterStore,
        session_context: Callable = get_transaction_context,
    ):
        self.counter_store = counter_store
        self._session_context = session_context

    def _build_events(self, request: TrackEventRequest) -> List[TrackingEvent]:
        if request.event_type == TrackingEventType.PURCHASE:
            return [
                TrackingEvent(
                    shop_id=request.shop,
                    event=request.event_type,
                    product_id=product_id,
                    session_id=request.session_id,
                    customer_id=request.customer_id,
                    order_id=request.order_id,
                    order_value=request.order_value,
                    source=request.source,
                    event_metadata={},
                )
                for product_id in request.purchased_product_ids
            ]

        return [
            TrackingEvent(
                shop_id=request.shop,
                event=request.event_type,
                product_id=request.product_id,
                variant_id=request.variant_id,
                session_id=request.session_id,
                customer_id=request.customer_id,
                source=request.source or "cart_drawer",
                event_metadata=build_metadata(request),
            )
        ]

    async def track(self, request: TrackEventRequest) -> TrackEventResponse:
        async with self._session_context() as session:
            repository = TrackingEventRepository(session)

            if (
                request.event_type in DEDUPLICATED_EVENTS
                and request.session_id
                and await repository.exists_for_session_product(
                    request.shop,
                    request.event_type,
                    request.session_id,
                    request.product_id,
                )
            ):
                logger.info(
                    f"🛡️ Deduplication: {request.event_type} for product "
                    f"{request.product_id} already tracked",
                    session_id=request.session_id,
                )
                return TrackEventResponse(deduplicated=True)

            events = self._build_events(request)
            try:
                for event in events:
                    await repository.create(event)
            except SQLAlchemyError as e:
                raise DataStorageError(
                    f"Failed to store {request.event_type} event",
                    operation="create",
                    data_type="tracking_event",
                    details={"shop_id": request.shop},
                    cause=e,
                ) from e

        await self.counter_store.increment(request.shop, request.event_type)
        logger.info(
            f"✅ Tracked {request.event_type}",
            shop_id=request.shop,
            product_id=request.product_id,
            stored=len(events),
        )
        return TrackEventResponse(stored=len(events))

    async def get_counters(self, shop_id: str) -> dict:
        return await self.counter_store.get_counters(shop_id)
