"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``UpdateOrderStatusDTO``: input for a status update.

Validation messages are part of the wire contract: the first failing
rule is reported verbatim as the ``VALIDATION_ERROR`` message.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, List

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from modules.orders.constants import UPDATABLE_STATUSES
from modules.orders.models import OrderItem

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order item in a creation request."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Missing keys run through the validators so they get the same messages.
    product: str = Field(default=None, validate_default=True)
    quantity: int = Field(default=None, validate_default=True)
    price: Decimal = Field(default=None, validate_default=True)

    @model_validator(mode="before")
    @classmethod
    def item_must_be_object(cls, data: Any) -> Any:
        if not isinstance(data, (dict, CreateOrderItemDTO)):
            raise PydanticCustomError("item_type", "Each item must be an object")
        return data

    @field_validator("product", mode="before")
    @classmethod
    def product_must_be_named(cls, v: Any) -> str:
        if not isinstance(v, str) or not v:
            raise PydanticCustomError("product_name", "Product name is required")
        return v

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_must_be_positive_integer(cls, v: Any) -> int:
        if isinstance(v, float) and v.is_integer():
            v = int(v)
        if isinstance(v, bool) or not isinstance(v, int) or v < 1:
            raise PydanticCustomError(
                "positive_integer", "Quantity must be a positive integer"
            )
        return v

    @field_validator("price", mode="before")
    @classmethod
    def price_must_be_positive(cls, v: Any) -> Decimal:
        if isinstance(v, bool) or not isinstance(v, (int, float, Decimal)):
            raise PydanticCustomError("price_type", "Price must be a number")
        try:
            price = Decimal(str(v))
        except InvalidOperation:
            raise PydanticCustomError("price_type", "Price must be a number") from None
        if not price.is_finite() or price <= 0:
            raise PydanticCustomError("positive_price", "Price must be positive")
        return price

    def to_entity(self) -> OrderItem:
        return OrderItem(product=self.product, quantity=self.quantity, price=self.price)


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``items`` must contain at least one item.
    - Each item has a product name, a positive integer quantity and a
      positive price.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    items: List[CreateOrderItemDTO]

    @field_validator("items", mode="before")
    @classmethod
    def items_must_not_be_empty(cls, v: Any) -> Any:
        if v is None or (isinstance(v, (list, tuple)) and not v):
            raise PydanticCustomError("items_empty", "At least one item is required")
        if not isinstance(v, (list, tuple)):
            raise PydanticCustomError("items_type", "Items must be a list")
        return v

    def to_entities(self) -> List[OrderItem]:
        return [item.to_entity() for item in self.items]


class UpdateOrderStatusDTO(BaseModel):
    """Immutable DTO for status update requests."""

    model_config = ConfigDict(frozen=True)

    status: str

    @field_validator("status", mode="before")
    @classmethod
    def status_must_be_updatable(cls, v: Any) -> str:
        if not isinstance(v, str) or v not in UPDATABLE_STATUSES:
            raise PydanticCustomError("invalid_status", "Invalid status")
        return v


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def first_validation_message(exc: ValidationError) -> str:
    """Return the message of the first failing rule in *exc*."""
    errors = exc.errors()
    if not errors:
        return "Invalid request payload"
    first = errors[0]
    if first["type"] == "missing":
        field = next(
            (part for part in reversed(first["loc"]) if isinstance(part, str)),
            "field",
        )
        return f"{field.capitalize()} is required"
    return first["msg"]
