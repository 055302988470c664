"""In-memory implementation of ``IOrderRepository``.

State is volatile and lives as long as the repository instance.  A
single lock guards the mapping.  Every stored order gets its own
re-entrant lock from ``put``; ``lock(order_id)`` hands it out so that
transitions on different orders do not serialize each other.
"""

from __future__ import annotations

import copy
import threading
from contextlib import contextmanager, nullcontext
from typing import Callable, Dict, Iterator, List, Optional

from modules.orders.models import Order
from modules.orders.repositories.interfaces import IOrderRepository


class InMemoryOrderRepository(IOrderRepository):
    def __init__(self) -> None:
        self._orders: Dict[str, Order] = {}
        self._lock = threading.Lock()
        self._order_locks: Dict[str, threading.RLock] = {}

    def get(self, id: str) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(id)
            return copy.deepcopy(order) if order is not None else None

    def put(self, entity: Order) -> Order:
        with self._lock:
            self._orders[entity.id] = copy.deepcopy(entity)
            self._order_locks.setdefault(entity.id, threading.RLock())
        return entity

    def list_all(self) -> List[Order]:
        with self._lock:
            return copy.deepcopy(list(self._orders.values()))

    def replace(self, id: str, mutator: Callable[[Order], None]) -> Optional[Order]:
        with self._lock:
            current = self._orders.get(id)
            if current is None:
                return None
            updated = copy.deepcopy(current)
            mutator(updated)
            self._orders[id] = updated
            return copy.deepcopy(updated)

    @contextmanager
    def lock(self, id: str) -> Iterator[None]:
        # Unknown ids get no lock of their own; the caller then fails on the lookup.
        with self._lock:
            order_lock = self._order_locks.get(id)
        if order_lock is None:
            order_lock = nullcontext()
        with order_lock:
            yield

    def clear(self) -> None:
        with self._lock:
            self._orders.clear()
            self._order_locks.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)
