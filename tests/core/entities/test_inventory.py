"""Tests for inventory entities."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from nexus_ledger.core.entities.inventory import (
    Department,
    MovementRecord,
    MovementType,
    Product,
    ProductType,
    StockPosition,
)


class TestProductType:
    def test_resale_is_not_consumable(self):
        assert ProductType.RESALE.consumable is False

    @pytest.mark.parametrize("kind", [ProductType.CONSUMABLE, ProductType.RAW_MATERIAL, ProductType.ASSET])
    def test_other_types_are_consumable(self, kind):
        assert kind.consumable is True


class TestProduct:
    def test_defaults(self):
        product = Product(id="P1", sku="SKU-1", name="Widget")
        assert product.product_type == ProductType.RESALE
        assert product.min_reorder_level is None
        assert product.unit == "pcs"

    def test_negative_reorder_level_rejected(self):
        with pytest.raises(ValidationError):
            Product(id="P1", sku="SKU-1", name="Widget", min_reorder_level=-1)


class TestDepartment:
    def test_negative_budget_rejected(self):
        with pytest.raises(ValidationError):
            Department(id="D1", name="Ops", budget_cap=Decimal("-1"))


class TestStockPosition:
    def test_available_and_value(self):
        position = StockPosition(
            product_id="P1",
            warehouse_id="WH1",
            quantity_on_hand=100,
            quantity_reserved=30,
            average_cost=Decimal("12.00"),
        )
        assert position.key == ("P1", "WH1")
        assert position.quantity_available == 70
        assert position.total_value == Decimal("1200.00")

    def test_is_frozen(self):
        position = StockPosition(product_id="P1", warehouse_id="WH1")
        with pytest.raises(ValidationError):
            position.quantity_on_hand = 5

    def test_negative_on_hand_rejected(self):
        with pytest.raises(ValidationError):
            StockPosition(product_id="P1", warehouse_id="WH1", quantity_on_hand=-1)

    def test_round_trips_through_json(self):
        position = StockPosition(
            product_id="P1", warehouse_id="WH1", quantity_on_hand=3, average_cost=Decimal("1.25")
        )
        restored = StockPosition.model_validate(position.model_dump(mode="json"))
        assert restored == position


class TestMovementRecord:
    def test_movement_type_values(self):
        assert [t.value for t in MovementType] == [
            "IN",
            "OUT",
            "TRANSFER",
            "ADJUSTMENT",
            "CONSUMPTION",
        ]

    def test_defaults(self):
        movement = MovementRecord(
            id="MOV-1", movement_type=MovementType.IN, product_id="P1", quantity=5
        )
        assert movement.actor == "system"
        assert movement.quantity_delta == 0
        assert movement.timestamp.tzinfo is not None
