"""
Tests for the similarity batch job
"""

from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest

from cart_uplift.domains.affinity.models import (
    PurchaseEvent,
    ShopSimilarityResult,
    ShopSimilarityStatus,
)
from cart_uplift.domains.affinity.services import SimilarityComputationService

MODULE = "cart_uplift.domains.affinity.services.similarity_service"


def purchase(order_id, product_id):
    return PurchaseEvent(
        shop_id="shop-a", order_id=order_id, product_id=product_id, order_total=Decimal("30")
    )


@pytest.fixture
def repositories():
    with patch(f"{MODULE}.TrackingEventRepository") as events_cls, patch(
        f"{MODULE}.ProductSimilarityRepository"
    ) as similarity_cls, patch(f"{MODULE}.ShopSettingsRepository") as shops_cls:
        events_cls.return_value.get_purchase_events = AsyncMock(return_value=[])
        similarity_cls.return_value.replace_for_shop = AsyncMock(return_value=(0, 0))
        shops_cls.return_value.get_enabled_shop_ids = AsyncMock(return_value=[])
        yield events_cls.return_value, similarity_cls.return_value, shops_cls.return_value


@pytest.fixture
def service(session_context):
    return SimilarityComputationService(session_context=session_context)


async def test_shop_without_purchases_reports_no_data(service, repositories):
    result = await service.compute_for_shop("shop-a")

    assert result.status == ShopSimilarityStatus.NO_DATA
    assert result.similarities_created == 0
    repositories[1].replace_for_shop.assert_not_awaited()


async def test_shop_similarities_are_replaced(service, repositories):
    events, similarities, _ = repositories
    events.get_purchase_events.return_value = [
        purchase("O1", "P1"),
        purchase("O1", "P2"),
        purchase("O2", "P1"),
        purchase("O2", "P2"),
        purchase("O3", "P1"),
        purchase("O3", "P3"),
    ]
    similarities.replace_for_shop.return_value = (6, 2)

    result = await service.compute_for_shop("shop-a")

    assert result.status == ShopSimilarityStatus.COMPUTED
    assert result.analyzed == 2
    assert result.similarities_created == 2
    assert result.deleted == 6

    shop_id, records, batch_size = similarities.replace_for_shop.await_args.args
    assert shop_id == "shop-a"
    assert {(r.product_id1, r.product_id2) for r in records} == {("P1", "P2"), ("P2", "P1")}
    assert batch_size == 1000


async def test_failure_is_reported_not_raised(service, repositories):
    repositories[0].get_purchase_events.side_effect = RuntimeError("timeout")

    result = await service.compute_for_shop("shop-a")

    assert result.status == ShopSimilarityStatus.FAILED
    assert result.error == "timeout"


async def test_batch_continues_past_failing_shop(service, repositories):
    repositories[2].get_enabled_shop_ids.return_value = ["shop-a", "shop-b", "shop-c"]
    outcomes = {
        "shop-a": ShopSimilarityResult(
            shop="shop-a", status=ShopSimilarityStatus.COMPUTED, similarities_created=4, deleted=2
        ),
        "shop-b": ShopSimilarityResult(
            shop="shop-b", status=ShopSimilarityStatus.FAILED, error="boom"
        ),
        "shop-c": ShopSimilarityResult(shop="shop-c", status=ShopSimilarityStatus.NO_DATA),
    }

    with patch.object(
        service, "compute_for_shop", AsyncMock(side_effect=lambda shop: outcomes[shop])
    ) as compute:
        summary = await service.compute_for_all_shops()

    assert compute.await_count == 3
    assert summary.success is True
    assert summary.total_shops == 3
    assert summary.successful_shops == 2
    assert summary.total_similarities == 4
    assert summary.total_deleted == 2
    assert summary.breakdown == {"computed": 1, "no_data": 1, "failed": 1}

    dumped = summary.model_dump(by_alias=True, mode="json")
    assert dumped["totalShops"] == 3
    assert dumped["results"][0]["similaritiesCreated"] == 4


async def test_shop_listing_failure_fails_the_run(service, repositories):
    repositories[2].get_enabled_shop_ids.side_effect = RuntimeError("db down")

    summary = await service.compute_for_all_shops()

    assert summary.success is False
    assert summary.error == "db down"
