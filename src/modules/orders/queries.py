"""Order listing: filtering, sorting and pagination over the store.

The query runs on a snapshot of the repository:

1. keep orders matching every given equality filter (``user_id``, ``status``);
2. sort by the chosen field (``createdAt``, ``updatedAt`` chronologically,
   ``total`` numerically); an unknown field keeps storage order;
3. slice ``[(page - 1) * limit, page * limit)``.

Sorting is stable in both directions, so equal keys keep storage order.
Authorization scoping of ``user_id`` happens before, in the service.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Callable, Dict, List, Optional, Sequence

from modules.core.exceptions import InvalidPayload
from modules.orders.constants import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    DEFAULT_SORT_DIRECTION,
    DEFAULT_SORT_FIELD,
    SortDirection,
    SortField,
)
from modules.orders.models import Order

SORT_KEYS: Dict[str, Callable[[Order], Any]] = {
    SortField.CREATED_AT: attrgetter("created_at"),
    SortField.UPDATED_AT: attrgetter("updated_at"),
    SortField.TOTAL: attrgetter("total"),
}


@dataclass(frozen=True)
class OrderQuery:
    user_id: Optional[str] = None
    status: Optional[str] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: str = DEFAULT_SORT_FIELD
    sort_order: str = DEFAULT_SORT_DIRECTION

    def __post_init__(self) -> None:
        if self.page < 1:
            raise InvalidPayload("Page must be a positive integer")
        if self.limit < 1:
            raise InvalidPayload("Limit must be a positive integer")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def descending(self) -> bool:
        return self.sort_order != SortDirection.ASC


@dataclass
class OrderPage:
    orders: List[Order] = field(default_factory=list)
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)


def filter_orders(orders: Sequence[Order], query: OrderQuery) -> List[Order]:
    selected = list(orders)
    if query.user_id:
        selected = [o for o in selected if o.user_id == query.user_id]
    if query.status:
        selected = [o for o in selected if o.status == query.status]
    return selected


def sort_orders(orders: List[Order], query: OrderQuery) -> List[Order]:
    key = SORT_KEYS.get(query.sort_by)
    if key is None:
        return list(orders)
    return sorted(orders, key=key, reverse=query.descending)


def run_query(orders: Sequence[Order], query: OrderQuery) -> OrderPage:
    """Filter, sort and paginate *orders* according to *query*."""
    matched = sort_orders(filter_orders(orders, query), query)
    return OrderPage(
        orders=matched[query.offset : query.offset + query.limit],
        page=query.page,
        limit=query.limit,
        total=len(matched),
    )
