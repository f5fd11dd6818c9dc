"""
Tests for bundle resolution and the bundle purchase sub-pass
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from cart_uplift.core.database.models import Bundle, BundlePurchase
from cart_uplift.domains.attribution.models import OrderLineItem
from cart_uplift.domains.attribution.services import (
    BundlePurchaseService,
    BundleResolver,
    group_bundle_items,
)
from tests.conftest import make_line_item, make_order

SHOP = "shop.example.com"


def bundle(bundle_id, assignment_type="specific", products=None, name="Bundle"):
    return Bundle(
        id=bundle_id,
        shop_id=SHOP,
        name=name,
        type="ml",
        status="active",
        assignment_type=assignment_type,
        assigned_products=products or [],
    )


def bundle_repository(by_id=None, generated=None):
    by_id = by_id or {}
    repository = MagicMock()
    repository.get_by_id = AsyncMock(side_effect=lambda shop_id, bundle_id: by_id.get(bundle_id))
    repository.get_active_generated = AsyncMock(return_value=generated or [])
    repository.record_purchase = AsyncMock()
    return repository


class TestBundleResolver:
    async def test_direct_id_strips_ai_prefix(self):
        repository = bundle_repository(by_id={"b1": bundle("b1")})

        resolved = await BundleResolver(repository).resolve(SHOP, "ai-b1")

        assert resolved.id == "b1"
        repository.get_by_id.assert_awaited_once_with(SHOP, "b1")

    async def test_dynamic_id_prefers_product_specific_bundle(self):
        generated = [
            bundle("everywhere", assignment_type="all"),
            bundle("other", products=["P9"]),
            bundle("specific", products=["P1", "P2"]),
        ]
        repository = bundle_repository(generated=generated)

        resolved = await BundleResolver(repository).resolve(SHOP, "bundle_dynamic_P1")

        assert resolved.id == "specific"

    async def test_dynamic_id_falls_back_to_bundle_shown_everywhere(self):
        generated = [bundle("other", products=["P9"]), bundle("everywhere", assignment_type="all")]
        repository = bundle_repository(generated=generated)

        resolved = await BundleResolver(repository).resolve(SHOP, "bundle_dynamic_P1")

        assert resolved.id == "everywhere"

    async def test_original_id_is_tried_last(self):
        repository = bundle_repository(by_id={"ai-legacy": bundle("ai-legacy")})

        resolved = await BundleResolver(repository).resolve(SHOP, "ai-legacy")

        assert resolved.id == "ai-legacy"
        assert [call.args[1] for call in repository.get_by_id.await_args_list] == [
            "legacy",
            "ai-legacy",
        ]

    async def test_unknown_bundle_resolves_to_none(self):
        repository = bundle_repository()

        assert await BundleResolver(repository).resolve(SHOP, "missing") is None
        repository.get_active_generated.assert_not_awaited()


class TestGroupBundleItems:
    def test_groups_by_bundle_id_and_sums_revenue(self):
        items = [
            OrderLineItem.model_validate(
                make_line_item("P1", price="10.00", quantity=2, _bundle_id="b1", _bundle_name="Duo")
            ),
            OrderLineItem.model_validate(
                make_line_item("P2", price="5.00", quantity=3, _bundle_id="b1", _source_bundle_qty="1")
            ),
            OrderLineItem.model_validate(make_line_item("P3", price="99.00")),
            OrderLineItem.model_validate(make_line_item("P4", price="4.00", _bundle_id="b2")),
        ]

        groups = group_bundle_items(items)

        assert [group.bundle_id for group in groups] == ["b1", "b2"]
        assert groups[0].bundle_name == "Duo"
        assert groups[0].revenue == Decimal("25.00")
        assert groups[0].product_ids == ["P1", "P2"]
        assert groups[1].revenue == Decimal("4.00")


class TestBundlePurchaseService:
    @pytest.fixture
    def service(self, session):
        service = BundlePurchaseService(session)
        service.bundle_repository = bundle_repository(by_id={"b1": bundle("b1", name="Duo")})
        service.resolver = BundleResolver(service.bundle_repository)
        service.bundle_purchase_repository = MagicMock(
            get_by_order=AsyncMock(return_value=None), create=AsyncMock()
        )
        service.customer_bundle_repository = MagicMock(create=AsyncMock())
        return service

    async def test_existing_tracking_row_short_circuits(self, service):
        service.bundle_purchase_repository.get_by_order.return_value = BundlePurchase(
            total_value=Decimal("30.00")
        )
        order = make_order(make_line_item("P1", _bundle_id="b1"))

        used, revenue = await service.process(SHOP, order)

        assert (used, revenue) == (True, Decimal("30.00"))
        service.bundle_repository.record_purchase.assert_not_awaited()
        service.bundle_purchase_repository.create.assert_not_awaited()

    async def test_order_without_bundles(self, service):
        order = make_order(make_line_item("P1"))

        used, revenue = await service.process(SHOP, order)

        assert (used, revenue) == (False, Decimal("0"))
        service.bundle_purchase_repository.create.assert_not_awaited()

    async def test_matched_bundle_is_credited(self, service):
        order = make_order(
            make_line_item("P1", price="10.00", quantity=2, _bundle_id="ai-b1"),
            make_line_item("P2", price="8.00", _bundle_id="unknown"),
        )

        used, revenue = await service.process(SHOP, order)

        assert used is True
        assert revenue == Decimal("28.00")
        service.bundle_repository.record_purchase.assert_awaited_once_with(
            "b1", Decimal("20.00")
        )

        purchase = service.bundle_purchase_repository.create.await_args.args[0]
        assert purchase.bundle_count == 2
        assert purchase.total_value == Decimal("28.00")

        logged = [call.args[0] for call in service.customer_bundle_repository.create.await_args_list]
        assert [entry.bundle_id for entry in logged] == ["b1", "unknown"]
        assert all(entry.action == "purchase" for entry in logged)

    async def test_customer_bundle_failure_is_not_fatal(self, service):
        service.customer_bundle_repository.create.side_effect = RuntimeError("boom")
        order = make_order(make_line_item("P1", price="10.00", _bundle_id="b1"))

        used, revenue = await service.process(SHOP, order)

        assert (used, revenue) == (True, Decimal("10.00"))
        service.bundle_purchase_repository.create.assert_awaited_once()
