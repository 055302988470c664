"""Order domain constants.

Defines status choices and valid status transitions for the order
state machine, plus the listing defaults.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    CREATED = "created", "Created"
    IN_WORK = "in_work", "In work"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


# ``in_work -> in_work`` and ``completed -> completed`` are permitted
# re-assertions: they refresh ``updated_at`` and emit ``order.status_updated``.
VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.CREATED: {
        OrderStatus.IN_WORK,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.IN_WORK: {
        OrderStatus.IN_WORK,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.COMPLETED: {OrderStatus.COMPLETED},
    OrderStatus.CANCELLED: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.COMPLETED, OrderStatus.CANCELLED}

# Targets accepted by the status update operation.
UPDATABLE_STATUSES: set[str] = {
    OrderStatus.IN_WORK,
    OrderStatus.COMPLETED,
    OrderStatus.CANCELLED,
}

# Targets only an admin may set; owners may only cancel.
ADMIN_ONLY_STATUSES: set[str] = {OrderStatus.IN_WORK, OrderStatus.COMPLETED}


class SortField(models.TextChoices):
    CREATED_AT = "createdAt", "Created at"
    UPDATED_AT = "updatedAt", "Updated at"
    TOTAL = "total", "Total"


class SortDirection(models.TextChoices):
    ASC = "asc", "Ascending"
    DESC = "desc", "Descending"


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SORT_FIELD = SortField.CREATED_AT
DEFAULT_SORT_DIRECTION = SortDirection.DESC
