"""
Tests for recommendation signals and the attribution matcher
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from cart_uplift.domains.attribution.services import (
    AttributionMatcher,
    build_signals,
    product_revenue,
    split_by_product,
)
from tests.conftest import NOW, make_event, make_line_item, make_order

CLICK_WINDOW = timedelta(minutes=60)


def attribute(order, events):
    signals = build_signals(events, NOW, CLICK_WINDOW)
    return AttributionMatcher().match(order, split_by_product(order.line_items), signals, NOW)


class TestBuildSignals:
    def test_collects_recommended_products(self):
        events = [
            make_event("impression", 5, metadata={"recommendationIds": ["P2", "P3"]}),
            make_event("ml_recommendation_served", 20, metadata={"recommendedIds": ["P2"]}),
        ]

        signals = build_signals(events, NOW, CLICK_WINDOW)

        assert signals.impression_count == 2
        assert [ref.event_id for ref in signals.recommended["P2"]] == [
            "impression-5",
            "ml_recommendation_served-20",
        ]
        assert signals.was_recommended("P3")

    def test_clicks_outside_the_window_are_ignored(self):
        events = [
            make_event("click", 30, product_id="P1"),
            make_event("click", 61, product_id="P2"),
        ]

        signals = build_signals(events, NOW, CLICK_WINDOW)

        assert signals.click_count == 2
        assert signals.recent_click_count == 1
        assert signals.clicked_ids == {"P1"}

    def test_click_metadata_ids_are_collected(self):
        events = [
            make_event(
                "click",
                1,
                product_id="V1",
                metadata={"parentProductId": "P1", "variantId": "V1"},
            )
        ]

        signals = build_signals(events, NOW, CLICK_WINDOW)

        assert signals.clicked_ids == {"V1", "P1"}

    def test_newest_impression_supplies_anchors(self):
        events = [
            make_event("impression", 1, metadata={"recommendationIds": ["P2"], "anchors": ["A1"]}),
            make_event("impression", 9, metadata={"recommendationIds": ["P3"], "anchors": ["A2"]}),
        ]

        assert build_signals(events, NOW, CLICK_WINDOW).newest_anchors == ["A1"]

    def test_unparseable_metadata_is_skipped(self):
        events = [make_event("impression", 1, metadata="{broken")]

        signals = build_signals(events, NOW, CLICK_WINDOW)

        assert signals.impression_count == 1
        assert signals.recommended == {}


class TestAttributionMatcher:
    def test_recommended_and_clicked_product_is_attributed(self):
        order = make_order(
            make_line_item("P1", price="20.00"),
            make_line_item("P2", price="15.00", _source_rec_qty="1"),
        )
        events = [
            make_event("click", 5, product_id="P2"),
            make_event("impression", 15, metadata={"recommendedIds": ["P2"]}),
        ]

        attributed = attribute(order, events)

        assert [product.product_id for product in attributed] == ["P2"]
        assert attributed[0].attributed_revenue == Decimal("15.00")
        assert attributed[0].rec_quantity == 1
        assert attributed[0].recommendation_event_ids == ["impression-15"]
        assert attributed[0].conversion_time_minutes == 15

    def test_recommended_but_not_clicked_is_not_attributed(self):
        order = make_order(make_line_item("P2", _source_rec_qty="1"))
        events = [make_event("impression", 15, metadata={"recommendationIds": ["P2"]})]

        assert attribute(order, events) == []

    def test_clicked_but_not_recommended_is_not_attributed(self):
        order = make_order(make_line_item("P2", _source_rec_qty="1"))
        events = [
            make_event("click", 5, product_id="P2"),
            make_event("impression", 15, metadata={"recommendationIds": ["P9"]}),
        ]

        assert attribute(order, events) == []

    def test_manual_add_is_not_attributed(self):
        order = make_order(make_line_item("P2", quantity=2))
        events = [
            make_event("click", 5, product_id="P2"),
            make_event("impression", 15, metadata={"recommendationIds": ["P2"]}),
        ]

        assert attribute(order, events) == []

    def test_bundle_units_are_not_attributed(self):
        order = make_order(make_line_item("P2", _source_bundle_qty="1", _bundle_id="b1"))
        events = [
            make_event("click", 5, product_id="P2"),
            make_event("impression", 15, metadata={"recommendationIds": ["P2"]}),
        ]

        assert attribute(order, events) == []

    def test_stale_click_is_not_attributed(self):
        order = make_order(make_line_item("P2", _source_rec_qty="1"))
        events = [
            make_event("click", 65, product_id="P2"),
            make_event("impression", 70, metadata={"recommendationIds": ["P2"]}),
        ]

        assert attribute(order, events) == []

    def test_variant_click_counts_for_its_product(self):
        order = make_order(make_line_item("P2", variant_id="V7", _source_rec_qty="1"))
        events = [
            make_event("click", 5, product_id="V7"),
            make_event("impression", 15, metadata={"recommendationIds": ["P2"]}),
        ]

        assert [product.product_id for product in attribute(order, events)] == ["P2"]

    def test_revenue_counts_only_recommended_units(self):
        order = make_order(
            make_line_item(
                "P2", price="10.00", quantity=3, _source_rec_qty="2", _source_manual_qty="1"
            )
        )
        events = [
            make_event("click", 5, product_id="P2"),
            make_event("impression", 15, metadata={"recommendationIds": ["P2"]}),
        ]

        attributed = attribute(order, events)

        assert attributed[0].attributed_revenue == Decimal("20.00")
        assert product_revenue(order, "P2") == Decimal("20.00")

    def test_attributed_revenue_never_exceeds_order_lines(self):
        order = make_order(
            make_line_item("P1", price="12.50", _source_rec_qty="1"),
            make_line_item("P2", price="7.25", quantity=2, _source_rec_qty="2"),
        )
        events = [
            make_event("click", 3, product_id="P1"),
            make_event("click", 4, product_id="P2"),
            make_event("impression", 10, metadata={"recommendationIds": ["P1", "P2"]}),
        ]

        attributed = attribute(order, events)
        total = sum(product.attributed_revenue for product in attributed)
        line_total = sum(item.price * item.quantity for item in order.line_items)

        assert len(attributed) == 2
        assert total == Decimal("27.00")
        assert total <= line_total

    @pytest.mark.parametrize("minutes_ago", [0, 59])
    def test_click_inside_window(self, minutes_ago):
        order = make_order(make_line_item("P2", _source_rec_qty="1"))
        events = [
            make_event("click", minutes_ago, product_id="P2"),
            make_event("impression", 90, metadata={"recommendationIds": ["P2"]}),
        ]

        assert len(attribute(order, events)) == 1
