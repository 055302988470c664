"""Order aggregate and OrderItem value object.

Business rules implemented:
- ``total`` is ``sum(price * quantity)`` over the items, computed once
  at creation and never recomputed.
- ``id``, ``user_id`` and ``items`` are immutable after creation.
- ``status`` only changes through ``Order.apply_status`` which the
  Service Layer calls after the transition guards passed.
- ``updated_at`` is refreshed on every mutation.

Orders are plain Python objects kept by the in-memory repository; no
database table backs them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Tuple

import uuid6
from django.utils import timezone

from modules.orders.constants import TERMINAL_STATES, VALID_TRANSITIONS, OrderStatus


@dataclass(frozen=True)
class OrderItem:
    """Line item as submitted by the customer (no catalog lookup)."""

    product: str
    quantity: int
    price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


@dataclass
class Order:
    """Order aggregate root, identified by a UUIDv7 string."""

    id: str
    user_id: str
    items: Tuple[OrderItem, ...]
    total: Decimal
    status: str = OrderStatus.CREATED
    created_at: datetime = field(default_factory=timezone.now)
    updated_at: datetime = field(default_factory=timezone.now)

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        user_id: str,
        items: Iterable[OrderItem],
        now: Optional[datetime] = None,
    ) -> Order:
        """Build a new order in ``created`` state owned by *user_id*."""
        items = tuple(items)
        now = now or timezone.now()
        return cls(
            id=str(uuid6.uuid7()),
            user_id=user_id,
            items=items,
            total=calculate_total(items),
            status=OrderStatus.CREATED,
            created_at=now,
            updated_at=now,
        )

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is in a terminal state."""
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        allowed = VALID_TRANSITIONS.get(self.status, set())
        return new_status in allowed

    def is_owned_by(self, user_id: Optional[str]) -> bool:
        return bool(user_id) and self.user_id == user_id

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def apply_status(self, new_status: str, now: Optional[datetime] = None) -> None:
        """Set *new_status* and refresh ``updated_at``.  Guards run before."""
        self.status = new_status
        self.updated_at = now or timezone.now()

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.id} ({self.status})"


def calculate_total(items: Iterable[OrderItem]) -> Decimal:
    return sum((item.subtotal for item in items), Decimal("0"))
