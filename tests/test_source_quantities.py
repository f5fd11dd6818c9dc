"""
Tests for the per-line source-quantity split
"""

from cart_uplift.domains.attribution.models import OrderLineItem, SourceQuantities
from cart_uplift.domains.attribution.services import (
    bundle_quantity,
    split_by_product,
    split_line_item,
)
from tests.conftest import make_line_item


def line(product_id="P1", quantity=1, **properties):
    return OrderLineItem.model_validate(
        make_line_item(product_id, quantity=quantity, **properties)
    )


class TestSplitLineItem:
    def test_no_properties_means_manual(self):
        assert split_line_item(line(quantity=3)) == SourceQuantities(manual=3)

    def test_reads_all_three_sources(self):
        item = line(
            quantity=4, _source_bundle_qty="1", _source_rec_qty="2", _source_manual_qty="1"
        )

        assert split_line_item(item) == SourceQuantities(bundle=1, rec=2, manual=1)

    def test_zero_sum_falls_back_to_manual(self):
        item = line(quantity=2, _source_rec_qty="0", _source_bundle_qty="0")

        assert split_line_item(item) == SourceQuantities(manual=2)

    def test_unparseable_and_negative_values_count_as_zero(self):
        item = line(quantity=2, _source_rec_qty="abc", _source_bundle_qty="-3", _source_manual_qty="2")

        assert split_line_item(item) == SourceQuantities(manual=2)

    def test_missing_quantity_defaults_to_one(self):
        item = OrderLineItem.model_validate({"product_id": "P1", "price": "5.00"})

        assert split_line_item(item) == SourceQuantities(manual=1)

    def test_properties_may_arrive_as_mapping(self):
        item = OrderLineItem.model_validate(
            {"product_id": "P1", "quantity": 2, "properties": {"_source_rec_qty": 2}}
        )

        assert split_line_item(item).rec == 2


class TestSplitByProduct:
    def test_sums_lines_of_the_same_product(self):
        items = [
            line("P1", quantity=1, _source_rec_qty="1"),
            line("P1", quantity=2),
            line("P2", quantity=1, _source_bundle_qty="1"),
        ]

        quantities = split_by_product(items)

        assert quantities["P1"] == SourceQuantities(rec=1, manual=2)
        assert quantities["P2"] == SourceQuantities(bundle=1)
        assert quantities["P1"].total == 3

    def test_lines_without_product_are_skipped(self):
        item = OrderLineItem.model_validate({"title": "Gift card", "quantity": 1})

        assert split_by_product([item]) == {}


class TestBundleQuantity:
    def test_uses_bundle_property_when_present(self):
        assert bundle_quantity(line(quantity=5, _source_bundle_qty="2")) == 2

    def test_defaults_to_line_quantity(self):
        assert bundle_quantity(line(quantity=3, _bundle_id="b1")) == 3
