"""Authorization rules for order operations.

- Owners and admins may read and cancel an order.
- Only admins may move an order to ``in_work`` or ``completed``.
- Non-admin listings are always scoped to the caller's own orders.
"""

from __future__ import annotations

from typing import Optional

from modules.core.exceptions import Forbidden, Unauthorized
from modules.core.identity import IdentityContext
from modules.orders.constants import ADMIN_ONLY_STATUSES
from modules.orders.models import Order


def require_identity(identity: Optional[IdentityContext]) -> IdentityContext:
    """Return *identity* or raise ``Unauthorized`` when no user id is known."""
    if identity is None or not identity.is_authenticated:
        raise Unauthorized()
    return identity


def can_access(identity: IdentityContext, order: Order) -> bool:
    return order.is_owned_by(identity.user_id) or identity.is_admin


def ensure_can_set_status(identity: IdentityContext, target_status: str) -> None:
    if target_status in ADMIN_ONLY_STATUSES and not identity.is_admin:
        raise Forbidden("Only admin can update status to in_work or completed")


def scoped_user_filter(
    identity: IdentityContext, requested_user_id: Optional[str]
) -> Optional[str]:
    """User filter actually applied to a listing.

    Non-admins always see their own orders whatever they asked for;
    admins get the requested filter, or every order when none is given.
    """
    if not identity.is_admin:
        return identity.user_id
    return requested_user_id or None
