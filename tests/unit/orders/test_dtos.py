"""Unit tests for order DTO validation and its messages."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.orders.dtos import (
    CreateOrderDTO,
    CreateOrderItemDTO,
    UpdateOrderStatusDTO,
    first_validation_message,
)

pytestmark = pytest.mark.unit


def _message(**kwargs):
    with pytest.raises(ValidationError) as exc_info:
        CreateOrderDTO(**kwargs)
    return first_validation_message(exc_info.value)


class TestCreateOrderDTO:
    def test_valid_items(self):
        dto = CreateOrderDTO(
            items=[
                {"product": "A", "quantity": 2, "price": 100.5},
                {"product": "B", "quantity": 1, "price": 250},
            ]
        )

        entities = dto.to_entities()
        assert [e.product for e in entities] == ["A", "B"]
        assert entities[0].price == Decimal("100.5")
        assert entities[1].quantity == 1

    @pytest.mark.parametrize("items", [None, []])
    def test_items_required(self, items):
        assert _message(items=items) == "At least one item is required"

    def test_items_missing(self):
        assert _message() == "Items is required"

    def test_items_must_be_a_list(self):
        assert _message(items="A") == "Items must be a list"

    @pytest.mark.parametrize("item", ["x", 3, None, ["A", 1, 2]])
    def test_item_must_be_object(self, item):
        assert _message(items=[item]) == "Each item must be an object"

    @pytest.mark.parametrize("product", ["", None, 5])
    def test_product_name_required(self, product):
        items = [{"product": product, "quantity": 1, "price": 1}]

        assert _message(items=items) == "Product name is required"

    def test_product_key_missing(self):
        assert _message(items=[{"quantity": 1, "price": 1}]) == "Product name is required"

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", True, None])
    def test_quantity_positive_integer(self, quantity):
        items = [{"product": "A", "quantity": quantity, "price": 1}]

        assert _message(items=items) == "Quantity must be a positive integer"

    def test_integral_float_quantity_accepted(self):
        dto = CreateOrderDTO(items=[{"product": "A", "quantity": 2.0, "price": 1}])

        assert dto.items[0].quantity == 2

    @pytest.mark.parametrize("price", [0, -5, float("inf")])
    def test_price_positive(self, price):
        items = [{"product": "A", "quantity": 1, "price": price}]

        assert _message(items=items) == "Price must be positive"

    @pytest.mark.parametrize("price", ["10", None, False])
    def test_price_number(self, price):
        items = [{"product": "A", "quantity": 1, "price": price}]

        assert _message(items=items) == "Price must be a number"

    def test_first_failing_rule_wins(self):
        items = [
            {"product": "A", "quantity": 1, "price": 1},
            {"product": "", "quantity": 0, "price": 0},
        ]

        assert _message(items=items) == "Product name is required"

    def test_unknown_fields_ignored(self):
        dto = CreateOrderItemDTO(product="A", quantity=1, price=1, colour="red")

        assert dto.to_entity().product == "A"


class TestUpdateOrderStatusDTO:
    @pytest.mark.parametrize("status", ["in_work", "completed", "cancelled"])
    def test_updatable_statuses(self, status):
        assert UpdateOrderStatusDTO(status=status).status == status

    @pytest.mark.parametrize("status", ["created", "shipped", "", None, 3])
    def test_invalid_status(self, status):
        with pytest.raises(ValidationError) as exc_info:
            UpdateOrderStatusDTO(status=status)

        assert first_validation_message(exc_info.value) == "Invalid status"
