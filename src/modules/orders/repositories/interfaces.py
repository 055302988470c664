"""Order repository interface.

Extends ``IRepository[Order]`` with the in-place update and the
per-order critical section required by status transitions.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Callable, ContextManager, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    Every call is atomic on its own and returns detached copies:
    mutating a returned order never changes stored state.
    """

    @abstractmethod
    def get(self, id: str) -> Optional[Order]:
        """Retrieve an order by id, or ``None``."""

    @abstractmethod
    def put(self, entity: Order) -> Order:
        """Insert or overwrite the order stored under ``entity.id``."""

    @abstractmethod
    def list_all(self) -> List[Order]:
        """Return all orders in insertion order."""

    @abstractmethod
    def replace(self, id: str, mutator: Callable[[Order], None]) -> Optional[Order]:
        """Apply *mutator* to the stored order and return the result.

        Returns ``None`` when no order has that id.
        """

    @abstractmethod
    def clear(self) -> None:
        """Drop every stored order."""

    @abstractmethod
    def lock(self, id: str) -> ContextManager[None]:
        """Critical section for a read-check-replace sequence on one order.

        Ids that are not stored get no lock; the caller fails on the lookup.
        """
