"""
Tests for tracking ingestion and the Redis counter store
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from cart_uplift.core.exceptions import DataStorageError
from cart_uplift.domains.tracking.models import TrackEventRequest
from cart_uplift.domains.tracking.services import TrackingCounterStore, TrackingIngestionService

MODULE = "cart_uplift.domains.tracking.services.ingestion_service"
SHOP = "shop.example.com"


@pytest.fixture
def redis_client():
    client = MagicMock()
    client.hincrby = AsyncMock(return_value=1)
    client.hgetall = AsyncMock(return_value={"impression": "3", "click": "1"})
    client.delete = AsyncMock(return_value=1)
    return client


@pytest.fixture
def counter_store(redis_client):
    return TrackingCounterStore(redis_client)


@pytest.fixture
def repository():
    with patch(f"{MODULE}.TrackingEventRepository") as repository_cls:
        repository = repository_cls.return_value
        repository.exists_for_session_product = AsyncMock(return_value=False)
        repository.create = AsyncMock(side_effect=lambda event: event)
        yield repository


@pytest.fixture
def service(counter_store, session_context):
    return TrackingIngestionService(counter_store, session_context=session_context)


def request(**fields):
    data = {"shop": SHOP, "sessionId": "sess-1"}
    data.update(fields)
    return TrackEventRequest.model_validate(data)


class TestTrackingCounterStore:
    def test_key_layout(self):
        assert TrackingCounterStore.key_for(SHOP) == "tracking:counters:shop.example.com"

    async def test_increment(self, counter_store, redis_client):
        assert await counter_store.increment(SHOP, "click") == 1
        redis_client.hincrby.assert_awaited_once_with("tracking:counters:shop.example.com", "click", 1)

    async def test_increment_failure_is_swallowed(self, counter_store, redis_client):
        redis_client.hincrby.side_effect = ConnectionError("redis down")

        assert await counter_store.increment(SHOP, "click") is None

    async def test_counters_are_integers(self, counter_store):
        assert await counter_store.get_counters(SHOP) == {"impression": 3, "click": 1}


class TestTrackingIngestionService:
    async def test_impression_is_stored_and_counted(self, service, repository, redis_client):
        response = await service.track(
            request(
                eventType="impression",
                productId="A1",
                recommendationIds=["P1", "P2"],
                anchors=["A1"],
            )
        )

        assert response.stored == 1
        assert response.deduplicated is False
        event = repository.create.await_args.args[0]
        assert event.event == "impression"
        assert event.event_metadata == {"recommendationIds": ["P1", "P2"], "anchors": ["A1"]}
        redis_client.hincrby.assert_awaited_once()

    async def test_repeat_click_is_deduplicated(self, service, repository, redis_client):
        repository.exists_for_session_product.return_value = True

        response = await service.track(request(eventType="click", productId="P1"))

        assert response.deduplicated is True
        assert response.stored == 0
        repository.create.assert_not_awaited()
        redis_client.hincrby.assert_not_awaited()

    async def test_click_metadata_is_canonical(self, service, repository):
        await service.track(
            request(
                eventType="click",
                productId="V1",
                variantId="V1",
                parentProductId="P1",
                metadata={"source": "drawer"},
            )
        )

        event = repository.create.await_args.args[0]
        assert event.event_metadata == {"productId": "P1", "variantId": "V1"}

    async def test_purchase_is_stored_per_product(self, service, repository):
        response = await service.track(
            request(
                eventType="purchase",
                orderId="O1",
                orderValue="59.90",
                productIds=["P1", "P2"],
            )
        )

        assert response.stored == 2
        stored = [call.args[0] for call in repository.create.await_args_list]
        assert [event.product_id for event in stored] == ["P1", "P2"]
        assert all(event.order_id == "O1" for event in stored)
        assert stored[0].order_value == Decimal("59.90")
        repository.exists_for_session_product.assert_not_awaited()

    async def test_counter_failure_does_not_fail_tracking(self, service, repository, redis_client):
        redis_client.hincrby.side_effect = ConnectionError("redis down")

        response = await service.track(request(eventType="click", productId="P1"))

        assert response.success is True
        assert response.stored == 1

    async def test_storage_failure_raises_storage_error(self, service, repository, redis_client):
        repository.create.side_effect = OperationalError("INSERT", {}, Exception("disk full"))

        with pytest.raises(DataStorageError) as exc_info:
            await service.track(request(eventType="click", productId="P1"))

        assert exc_info.value.data_type == "tracking_event"
        redis_client.hincrby.assert_not_awaited()
