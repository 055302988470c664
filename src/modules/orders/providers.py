"""Process-wide wiring of the order service.

The store is volatile, so one ``OrderService`` (and one repository)
must back every request of the process.  Tests build their own
``OrderService`` and patch ``get_order_service`` instead.
"""

from __future__ import annotations

from functools import lru_cache

from django.conf import settings

from modules.orders.clients import HttpUserDirectory
from modules.orders.events import OrderCreated, OrderStatusUpdated
from modules.orders.handlers import order_created_handler, order_status_updated_handler
from modules.orders.repositories import InMemoryOrderRepository
from modules.orders.services import OrderService
from shared.infrastructure.bus import InMemoryEventBus


@lru_cache(maxsize=None)
def get_event_bus() -> InMemoryEventBus:
    bus = InMemoryEventBus(maxsize=settings.EVENT_QUEUE_MAXSIZE)
    bus.subscribe(OrderCreated, order_created_handler)
    bus.subscribe(OrderStatusUpdated, order_status_updated_handler)
    return bus


@lru_cache(maxsize=None)
def get_order_service() -> OrderService:
    return OrderService(
        order_repository=InMemoryOrderRepository(),
        user_directory=HttpUserDirectory.from_settings(),
        event_bus=get_event_bus(),
    )
