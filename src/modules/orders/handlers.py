"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import OrderCreated, OrderStatusUpdated
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderCreatedHandler(IEventHandler[OrderCreated]):
    def handle(self, event: OrderCreated) -> None:
        logger.info(
            f"Order {event.aggregate_id} created",
            order_id=event.aggregate_id,
            user_id=event.payload.get("userId"),
            total=event.payload.get("total"),
        )


class OrderStatusUpdatedHandler(IEventHandler[OrderStatusUpdated]):
    def handle(self, event: OrderStatusUpdated) -> None:
        logger.info(
            f"Order {event.aggregate_id} moved to {event.payload.get('newStatus')}",
            order_id=event.aggregate_id,
            old_status=event.payload.get("oldStatus"),
            new_status=event.payload.get("newStatus"),
        )


order_created_handler = OrderCreatedHandler()
order_status_updated_handler = OrderStatusUpdatedHandler()
