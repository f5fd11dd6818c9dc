"""
Tests for the missed-opportunity soft signal
"""

from unittest.mock import AsyncMock

import pytest

from cart_uplift.domains.attribution.models import RecommendationSignals
from cart_uplift.domains.attribution.services import MissedOpportunityTracker

SHOP = "shop.example.com"


@pytest.fixture
def tracker(session):
    tracker = MissedOpportunityTracker(session)
    tracker.repository.upsert_soft_signal = AsyncMock()
    return tracker


async def test_upserts_anchor_to_purchased_products(tracker):
    signals = RecommendationSignals(newest_anchors=["A1", "A2"])

    written = await tracker.track(SHOP, signals, ["P1", "P2"])

    assert written == 2
    calls = tracker.repository.upsert_soft_signal.await_args_list
    assert [call.args[1:3] for call in calls] == [("A1", "P1"), ("A1", "P2")]
    assert calls[0].kwargs == {
        "co_purchase_increment": 0.1,
        "overall_increment": 0.05,
        "score_cap": 1.0,
    }


async def test_anchor_itself_is_skipped(tracker):
    signals = RecommendationSignals(newest_anchors=["P1"])

    assert await tracker.track(SHOP, signals, ["P1", "P2"]) == 1


async def test_no_anchor_writes_nothing(tracker):
    assert await tracker.track(SHOP, RecommendationSignals(), ["P1"]) == 0
    tracker.repository.upsert_soft_signal.assert_not_awaited()


async def test_failed_upsert_is_skipped(tracker):
    tracker.repository.upsert_soft_signal.side_effect = [RuntimeError("conflict"), None]
    signals = RecommendationSignals(newest_anchors=["A1"])

    assert await tracker.track(SHOP, signals, ["P1", "P2"]) == 1
