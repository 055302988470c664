"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business validation lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.  Field names follow the camelCase
wire format of the orders API.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    DEFAULT_SORT_DIRECTION,
    DEFAULT_SORT_FIELD,
)
from modules.orders.queries import OrderQuery

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class ListOrdersQuerySerializer(serializers.Serializer):
    """Validates the query string of the order listing.

    ``sortBy``/``sortOrder`` are free text: unknown values fall back to
    storage order / descending instead of failing.
    """

    page = serializers.IntegerField(
        min_value=1,
        default=DEFAULT_PAGE,
        error_messages={
            "invalid": "Page must be a positive integer",
            "min_value": "Page must be a positive integer",
        },
    )
    limit = serializers.IntegerField(
        min_value=1,
        default=DEFAULT_LIMIT,
        error_messages={
            "invalid": "Limit must be a positive integer",
            "min_value": "Limit must be a positive integer",
        },
    )
    userId = serializers.CharField(required=False, allow_blank=True)
    status = serializers.CharField(required=False, allow_blank=True)
    sortBy = serializers.CharField(required=False, default=DEFAULT_SORT_FIELD)
    sortOrder = serializers.CharField(required=False, default=DEFAULT_SORT_DIRECTION)

    def to_query(self) -> OrderQuery:
        data = self.validated_data
        return OrderQuery(
            user_id=data.get("userId") or None,
            status=data.get("status") or None,
            page=data["page"],
            limit=data["limit"],
            sort_by=data["sortBy"],
            sort_order=data["sortOrder"],
        )


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.Serializer):
    product = serializers.CharField(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    price = serializers.DecimalField(
        max_digits=None, decimal_places=None, read_only=True
    )


class OrderSerializer(serializers.Serializer):
    """Read serializer for orders with their line items."""

    id = serializers.CharField(read_only=True)
    userId = serializers.CharField(source="user_id", read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    status = serializers.CharField(read_only=True)
    total = serializers.DecimalField(
        max_digits=None, decimal_places=None, read_only=True
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)


class PaginationSerializer(serializers.Serializer):
    page = serializers.IntegerField(read_only=True)
    limit = serializers.IntegerField(read_only=True)
    total = serializers.IntegerField(read_only=True)
    totalPages = serializers.IntegerField(source="total_pages", read_only=True)


class OrderPageSerializer(serializers.Serializer):
    """Serializes an ``OrderPage`` as ``{orders, pagination}``."""

    orders = OrderSerializer(many=True, read_only=True)
    pagination = serializers.SerializerMethodField()

    def get_pagination(self, page) -> dict:
        return PaginationSerializer(page).data
