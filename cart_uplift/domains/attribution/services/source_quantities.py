"""
Source-quantity split of order line items
"""

from typing import Dict, Iterable

from cart_uplift.shared.constants.tracking import (
    PROPERTY_SOURCE_BUNDLE_QTY,
    PROPERTY_SOURCE_MANUAL_QTY,
    PROPERTY_SOURCE_REC_QTY,
)
from cart_uplift.shared.helpers import to_int
from ..models import OrderLineItem, SourceQuantities


def _quantity_property(item: OrderLineItem, name: str) -> int:
    return max(0, to_int(item.get_property(name)))


def split_line_item(item: OrderLineItem) -> SourceQuantities:
    """
    Read the bundle / recommendation / manual split of a line.

    Without any source properties (or when they sum to zero) the whole
    line quantity counts as a manual add.
    """
    bundle = _quantity_property(item, PROPERTY_SOURCE_BUNDLE_QTY)
    rec = _quantity_property(item, PROPERTY_SOURCE_REC_QTY)
    manual = _quantity_property(item, PROPERTY_SOURCE_MANUAL_QTY)

    if bundle + rec + manual == 0:
        return SourceQuantities(manual=item.quantity)
    return SourceQuantities(bundle=bundle, rec=rec, manual=manual)


def split_by_product(items: Iterable[OrderLineItem]) -> Dict[str, SourceQuantities]:
    """Sum the split over every line of the same product"""
    quantities: Dict[str, SourceQuantities] = {}
    for item in items:
        if not item.product_id:
            continue
        quantities[item.product_id] = quantities.get(
            item.product_id, SourceQuantities()
        ) + split_line_item(item)
    return quantities


def bundle_quantity(item: OrderLineItem) -> int:
    """Units of a bundle-tagged line that came from the bundle"""
    if item.has_property(PROPERTY_SOURCE_BUNDLE_QTY):
        return _quantity_property(item, PROPERTY_SOURCE_BUNDLE_QTY)
    return item.quantity
