"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Raised when an order is created.

    Payload: ``orderId``, ``userId``, ``total``, ``items``.
    """

    event_type: ClassVar[str] = "order.created"


@dataclass(frozen=True)
class OrderStatusUpdated(DomainEvent):
    """Raised on every accepted status change, cancellations included.

    Payload: ``orderId``, ``userId``, ``oldStatus``, ``newStatus``.
    """

    event_type: ClassVar[str] = "order.status_updated"
