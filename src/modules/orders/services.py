"""Order service layer (Use Cases).

Orchestrates the order lifecycle: creation, retrieval, listing, status
updates and cancellation.  Every operation receives the caller's
``IdentityContext``; authorization is decided here, never in views.

Business rules enforced:
- The ordering user must be confirmed by the identity service.
- Owners and admins may read and cancel; only admins set
  ``in_work``/``completed``.
- ``cancelled`` accepts no further transition; ``completed`` only
  accepts the ``completed`` re-assertion.
- Status changes run inside a per-order critical section and emit
  ``order.status_updated``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

import structlog
from pydantic import ValidationError

from modules.core.exceptions import Forbidden, InvalidPayload
from modules.orders.clients import IdentityLookupError
from modules.orders.constants import OrderStatus
from modules.orders.dtos import (
    CreateOrderDTO,
    UpdateOrderStatusDTO,
    first_validation_message,
)
from modules.orders.events import OrderCreated, OrderStatusUpdated
from modules.orders.exceptions import (
    IdentityServiceUnavailable,
    InvalidOrderStatus,
    OrderNotFound,
    UserNotFound,
)
from modules.orders.models import Order
from modules.orders.policies import (
    can_access,
    ensure_can_set_status,
    require_identity,
    scoped_user_filter,
)
from modules.orders.queries import OrderPage, OrderQuery, run_query

if TYPE_CHECKING:
    from modules.core.identity import IdentityContext
    from modules.orders.clients import IUserDirectory
    from modules.orders.repositories.interfaces import IOrderRepository
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives the repository, the identity directory and the event bus
    via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        user_directory: IUserDirectory,
        event_bus: IEventBus,
    ) -> None:
        self._order_repo = order_repository
        self._users = user_directory
        self._events = event_bus

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, identity: Optional[IdentityContext], items: Any) -> Order:
        """Create a new order owned by the caller.

        Steps:
        1. Require an identity.
        2. Confirm the user with the identity service.
        3. Validate the items payload.
        4. Persist the order in ``created`` with its fixed total.
        5. Emit ``order.created``.

        Raises:
            Unauthorized: no caller identity.
            UserNotFound: the identity service denied the user.
            IdentityServiceUnavailable: the identity service gave no answer.
            InvalidPayload: items are missing or malformed.
        """
        identity = require_identity(identity)
        log = logger.bind(user_id=identity.user_id)
        log.info("order.creation_started")

        self._verify_user(identity.user_id)

        try:
            dto = CreateOrderDTO(items=items)
        except ValidationError as exc:
            message = first_validation_message(exc)
            log.info("order.validation_failed", reason=message)
            raise InvalidPayload(message) from exc

        order = Order.create(user_id=identity.user_id, items=dto.to_entities())
        self._order_repo.put(order)

        log.info("order.created", order_id=order.id, total=str(order.total))
        self._events.publish(
            OrderCreated(
                aggregate_id=order.id,
                payload={
                    "orderId": order.id,
                    "userId": order.user_id,
                    "total": float(order.total),
                    "items": [
                        {
                            "product": item.product,
                            "quantity": item.quantity,
                            "price": float(item.price),
                        }
                        for item in order.items
                    ],
                },
            )
        )
        return order

    def update_status(
        self,
        identity: Optional[IdentityContext],
        order_id: str,
        new_status: Any,
    ) -> Order:
        """Transition an order to *new_status*.

        Guard order: identity, existence, access, payload, admin-only
        targets, state machine.

        Raises:
            Unauthorized: no caller identity.
            OrderNotFound: order does not exist.
            Forbidden: caller is neither owner nor admin, or a non-admin
                asked for ``in_work``/``completed``.
            InvalidPayload: *new_status* is not an updatable status.
            InvalidOrderStatus: the state machine rejects the transition.
        """
        identity = require_identity(identity)

        with self._order_repo.lock(order_id):
            order = self._load(order_id)
            self._ensure_access(identity, order)

            try:
                target = UpdateOrderStatusDTO(status=new_status).status
            except ValidationError as exc:
                raise InvalidPayload(first_validation_message(exc)) from exc

            ensure_can_set_status(identity, target)

            log = logger.bind(
                order_id=order_id,
                current_status=order.status,
                new_status=target,
            )

            if order.status == OrderStatus.CANCELLED:
                log.warning("order.invalid_transition")
                raise InvalidOrderStatus("Cannot update cancelled order")
            if not order.can_transition_to(target):
                log.warning("order.invalid_transition")
                if order.status == OrderStatus.COMPLETED:
                    raise InvalidOrderStatus("Cannot change status of completed order")
                raise InvalidOrderStatus(
                    f"Cannot transition from {order.status} to {target}"
                )

            updated = self._apply(order, target)

        log.info("order.status_updated")
        return updated

    def cancel_order(self, identity: Optional[IdentityContext], order_id: str) -> Order:
        """Cancel an order on behalf of its owner or an admin.

        Unlike ``update_status`` there is no admin-only restriction.

        Raises:
            Unauthorized: no caller identity.
            OrderNotFound: order does not exist.
            Forbidden: caller is neither owner nor admin.
            InvalidOrderStatus: order is already cancelled or completed.
        """
        identity = require_identity(identity)

        with self._order_repo.lock(order_id):
            order = self._load(order_id)
            self._ensure_access(identity, order)

            log = logger.bind(order_id=order_id, current_status=order.status)

            if order.status == OrderStatus.CANCELLED:
                log.warning("order.cancel_not_allowed")
                raise InvalidOrderStatus("Order is already cancelled")
            if order.status == OrderStatus.COMPLETED:
                log.warning("order.cancel_not_allowed")
                raise InvalidOrderStatus("Cannot cancel completed order")

            updated = self._apply(order, OrderStatus.CANCELLED)

        log.info("order.cancelled")
        return updated

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, identity: Optional[IdentityContext], order_id: str) -> Order:
        """Retrieve a single order visible to the caller.

        Raises:
            Unauthorized: no caller identity.
            OrderNotFound: if the order does not exist.
            Forbidden: caller is neither owner nor admin.
        """
        identity = require_identity(identity)
        order = self._load(order_id)
        self._ensure_access(identity, order)
        return order

    def list_orders(
        self, identity: Optional[IdentityContext], query: Optional[OrderQuery] = None
    ) -> OrderPage:
        """Return one page of the orders visible to the caller.

        Non-admins are scoped to their own orders regardless of the
        ``user_id`` filter they passed.
        """
        identity = require_identity(identity)
        query = query or OrderQuery()
        scoped = OrderQuery(
            user_id=scoped_user_filter(identity, query.user_id),
            status=query.status,
            page=query.page,
            limit=query.limit,
            sort_by=query.sort_by,
            sort_order=query.sort_order,
        )
        return run_query(self._order_repo.list_all(), scoped)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _verify_user(self, user_id: str) -> None:
        try:
            exists = self._users.user_exists(user_id)
        except IdentityLookupError as exc:
            logger.error("order.user_verification_failed", user_id=user_id, error=str(exc))
            raise IdentityServiceUnavailable() from exc
        if not exists:
            raise UserNotFound()

    def _load(self, order_id: str) -> Order:
        order = self._order_repo.get(order_id)
        if order is None:
            raise OrderNotFound()
        return order

    @staticmethod
    def _ensure_access(identity: IdentityContext, order: Order) -> None:
        if not can_access(identity, order):
            logger.warning(
                "order.access_denied",
                order_id=order.id,
                user_id=identity.user_id,
            )
            raise Forbidden()

    def _apply(self, order: Order, new_status: str) -> Order:
        old_status = order.status
        updated = self._order_repo.replace(
            order.id, lambda stored: stored.apply_status(new_status)
        )
        if updated is None:
            raise OrderNotFound()

        self._events.publish(
            OrderStatusUpdated(
                aggregate_id=updated.id,
                payload={
                    "orderId": updated.id,
                    "userId": updated.user_id,
                    "oldStatus": str(old_status),
                    "newStatus": str(new_status),
                },
            )
        )
        return updated
