"""Identity service adapter.

Before an order is created the ordering user must be confirmed by the
identity service (``GET /v1/users/{id}``).  The call is made with admin
credentials so it is authorized whatever the caller's own roles are.

Only ``200`` confirms the user and ``404`` denies it.  Any other status,
a timeout or a transport error raises ``IdentityLookupError``; the
Service Layer never treats those as success.
"""

from __future__ import annotations

import json
from typing import Optional, Protocol
from urllib.parse import quote

import httpx
import structlog

from modules.core.identity import ADMIN_ROLE, USER_ID_HEADER, USER_ROLES_HEADER
from modules.core.middleware import REQUEST_ID_HEADER, current_correlation_id

logger = structlog.get_logger(__name__)


class IdentityLookupError(Exception):
    """The identity service could not give a definite answer."""


class IUserDirectory(Protocol):
    def user_exists(self, user_id: str) -> bool: ...


class HttpUserDirectory(IUserDirectory):
    """``IUserDirectory`` backed by the identity service's REST API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> HttpUserDirectory:
        from django.conf import settings

        return cls(
            base_url=settings.USERS_SERVICE_URL,
            timeout=settings.USERS_SERVICE_TIMEOUT,
        )

    def _headers(self, user_id: str) -> dict[str, str]:
        headers = {
            USER_ID_HEADER: user_id,
            USER_ROLES_HEADER: json.dumps([ADMIN_ROLE]),
        }
        request_id = current_correlation_id()
        if request_id:
            headers[REQUEST_ID_HEADER] = request_id
        return headers

    def user_exists(self, user_id: str) -> bool:
        url = f"{self._base_url}/v1/users/{quote(user_id, safe='')}"
        log = logger.bind(user_id=user_id, url=url)

        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.get(url, headers=self._headers(user_id))
        except httpx.HTTPError as exc:
            log.error("identity.lookup_failed", error=str(exc))
            raise IdentityLookupError(f"Identity service unreachable: {exc}") from exc

        if response.status_code == httpx.codes.OK:
            return True
        if response.status_code == httpx.codes.NOT_FOUND:
            log.info("identity.user_not_found")
            return False

        log.error("identity.lookup_failed", status_code=response.status_code)
        raise IdentityLookupError(
            f"Identity service answered {response.status_code} for user lookup"
        )
