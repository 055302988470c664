"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.  The
caller's ``IdentityContext`` comes from ``request.user`` (set by the
gateway identity authentication backend); domain exceptions propagate
to the envelope exception handler.
"""

from __future__ import annotations

from typing import Any

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.responses import success_response
from modules.orders.providers import get_order_service
from modules.orders.serializers import (
    ListOrdersQuerySerializer,
    OrderPageSerializer,
    OrderSerializer,
)
from modules.orders.services import OrderService


def _body_field(request: Request, name: str) -> Any:
    data = request.data
    return data.get(name) if isinstance(data, dict) else None


class OrderViewSet(ViewSet):
    """ViewSet for Order operations.

    All store access goes through ``OrderService``.
    """

    lookup_field = "order_id"
    lookup_value_regex = "[^/]+"

    @property
    def service(self) -> OrderService:
        return get_order_service()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /v1/orders"""
        order = self.service.create_order(request.user, _body_field(request, "items"))
        return success_response(OrderSerializer(order).data, status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /v1/orders

        Query: ``page``, ``limit``, ``userId`` (admins only), ``status``,
        ``sortBy``, ``sortOrder``.
        """
        params = ListOrdersQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        page = self.service.list_orders(request.user, params.to_query())
        return success_response(OrderPageSerializer(page).data)

    def retrieve(self, request: Request, order_id: str | None = None) -> Response:
        """GET /v1/orders/{order_id}"""
        order = self.service.get_order(request.user, order_id)
        return success_response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request: Request, order_id: str | None = None) -> Response:
        """PATCH /v1/orders/{order_id}/status"""
        order = self.service.update_status(
            request.user, order_id, _body_field(request, "status")
        )
        return success_response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Cancel (dedicated action)
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def cancel(self, request: Request, order_id: str | None = None) -> Response:
        """POST /v1/orders/{order_id}/cancel"""
        order = self.service.cancel_order(request.user, order_id)
        return success_response(OrderSerializer(order).data)
