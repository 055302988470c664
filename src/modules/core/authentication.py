"""Gateway identity authentication backend for Django REST Framework.

The API gateway validates the caller's JWT and injects ``X-User-Id`` /
``X-User-Roles``.  This backend turns those headers into an
``IdentityContext`` exactly once per request; views and services only
ever see the typed value.
"""

import structlog
from rest_framework.authentication import BaseAuthentication

from modules.core.identity import extract_identity

logger = structlog.get_logger(__name__)


class GatewayIdentityAuthentication(BaseAuthentication):
    """DRF authentication class trusting gateway-injected identity headers."""

    realm = "orders"

    def authenticate(self, request):
        """Return ``(IdentityContext, None)`` or ``None`` (no identity)."""
        identity = extract_identity(request.headers)
        if not identity.is_authenticated:
            return None  # IsAuthenticated rejects with 401

        structlog.contextvars.bind_contextvars(user_id=identity.user_id)
        logger.debug(
            "identity_resolved",
            user_id=identity.user_id,
            roles=sorted(identity.roles),
        )
        return (identity, None)

    def authenticate_header(self, request):
        """Value for the ``WWW-Authenticate`` response header on 401."""
        return f'Gateway realm="{self.realm}"'
