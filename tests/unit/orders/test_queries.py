"""Unit tests for order listing: filtering, sorting and pagination."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from modules.core.exceptions import InvalidPayload
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem
from modules.orders.queries import OrderQuery, run_query

pytestmark = pytest.mark.unit

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _order(user_id="u-1", price="10", minutes=0, status=OrderStatus.CREATED):
    order = Order.create(
        user_id=user_id,
        items=[OrderItem(product="A", quantity=1, price=Decimal(price))],
        now=T0 + timedelta(minutes=minutes),
    )
    order.status = status
    return order


@pytest.fixture()
def orders():
    return [_order(minutes=n, price=str(10 + n)) for n in range(25)]


class TestPagination:
    def test_pages_cover_set_exactly_once(self, orders):
        seen = []
        for page in (1, 2, 3):
            result = run_query(orders, OrderQuery(page=page, limit=10))
            seen.extend(o.id for o in result.orders)

        assert sorted(seen) == sorted(o.id for o in orders)
        assert len(seen) == len(set(seen))

    def test_page_metadata(self, orders):
        result = run_query(orders, OrderQuery(page=3, limit=10))

        assert len(result.orders) == 5
        assert result.total == 25
        assert result.total_pages == 3

    def test_page_beyond_last_is_empty(self, orders):
        result = run_query(orders, OrderQuery(page=9, limit=10))

        assert result.orders == []
        assert result.total == 25

    def test_empty_store(self):
        result = run_query([], OrderQuery())

        assert result.total == 0
        assert result.total_pages == 0

    @pytest.mark.parametrize(("page", "limit"), [(0, 10), (-1, 10), (1, 0)])
    def test_non_positive_values_rejected(self, page, limit):
        with pytest.raises(InvalidPayload):
            OrderQuery(page=page, limit=limit)


class TestSorting:
    def test_default_is_newest_first(self, orders):
        result = run_query(orders, OrderQuery(limit=3))

        assert [o.created_at for o in result.orders] == [
            T0 + timedelta(minutes=m) for m in (24, 23, 22)
        ]

    def test_total_ascending(self, orders):
        result = run_query(orders, OrderQuery(sort_by="total", sort_order="asc", limit=3))

        assert [o.total for o in result.orders] == [Decimal("10"), Decimal("11"), Decimal("12")]

    def test_unknown_direction_is_descending(self, orders):
        result = run_query(orders, OrderQuery(sort_by="total", sort_order="sideways", limit=1))

        assert result.orders[0].total == Decimal("34")

    def test_unknown_field_keeps_storage_order(self, orders):
        result = run_query(orders, OrderQuery(sort_by="colour", limit=25))

        assert [o.id for o in result.orders] == [o.id for o in orders]

    def test_updated_at(self, orders):
        orders[0].apply_status(OrderStatus.CANCELLED, now=T0 + timedelta(days=1))

        result = run_query(orders, OrderQuery(sort_by="updatedAt", limit=1))

        assert result.orders[0].id == orders[0].id

    def test_sort_is_stable_for_equal_keys(self):
        same = [_order(price="5") for _ in range(4)]

        result = run_query(same, OrderQuery(sort_by="total", sort_order="desc"))

        assert [o.id for o in result.orders] == [o.id for o in same]


class TestFiltering:
    def test_by_user(self):
        data = [_order(user_id="u-1"), _order(user_id="u-2"), _order(user_id="u-1")]

        result = run_query(data, OrderQuery(user_id="u-1"))

        assert result.total == 2
        assert {o.user_id for o in result.orders} == {"u-1"}

    def test_by_status(self):
        data = [_order(status=OrderStatus.CANCELLED), _order()]

        result = run_query(data, OrderQuery(status="cancelled"))

        assert [o.status for o in result.orders] == [OrderStatus.CANCELLED]

    def test_unknown_status_matches_nothing(self):
        assert run_query([_order()], OrderQuery(status="shipped")).total == 0

    def test_filters_combine(self):
        data = [
            _order(user_id="u-1", status=OrderStatus.CANCELLED),
            _order(user_id="u-2", status=OrderStatus.CANCELLED),
            _order(user_id="u-1"),
        ]

        result = run_query(data, OrderQuery(user_id="u-1", status="cancelled"))

        assert result.total == 1
