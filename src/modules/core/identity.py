"""Caller identity established by the gateway.

The gateway verifies the bearer token and forwards the caller as two
trusted headers: ``X-User-Id`` and ``X-User-Roles`` (a JSON array of
strings).  No cryptographic verification happens here.

Security decisions
------------------
* Missing user id means no identity (requests fail with 401).
* Roles that are not a JSON array of strings collapse to an empty set;
  malformed metadata never grants a role.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Mapping, Optional

import structlog

logger = structlog.get_logger(__name__)

USER_ID_HEADER = "X-User-Id"
USER_ROLES_HEADER = "X-User-Roles"

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class IdentityContext:
    """Request-scoped ``(user_id, roles)`` pair."""

    user_id: Optional[str]
    roles: FrozenSet[str] = field(default_factory=frozenset)

    # DRF checks
    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles

    def __str__(self) -> str:  # pragma: no cover
        return self.user_id or "<anonymous>"


ANONYMOUS = IdentityContext(user_id=None)


def parse_roles(raw: Optional[str]) -> FrozenSet[str]:
    """Decode the roles header, falling back to no roles on any defect."""
    if not raw:
        return frozenset()
    try:
        decoded: Any = json.loads(raw)
    except ValueError:
        logger.warning("identity.header_roles_invalid", reason="not_json")
        return frozenset()
    if not isinstance(decoded, list) or not all(isinstance(r, str) for r in decoded):
        logger.warning("identity.header_roles_invalid", reason="not_a_string_list")
        return frozenset()
    return frozenset(decoded)


def extract_identity(headers: Mapping[str, str]) -> IdentityContext:
    """Build an ``IdentityContext`` from gateway-injected headers."""
    user_id = (headers.get(USER_ID_HEADER) or "").strip()
    if not user_id:
        return ANONYMOUS
    return IdentityContext(
        user_id=user_id,
        roles=parse_roles(headers.get(USER_ROLES_HEADER)),
    )
