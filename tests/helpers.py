"""Shared test data and request helpers."""

import json
from decimal import Decimal

OWNER_ID = "user-owner"
OTHER_ID = "user-other"
ADMIN_ID = "user-admin"

SAMPLE_ITEMS = [
    {"product": "A", "quantity": 2, "price": 100.5},
    {"product": "B", "quantity": 1, "price": 250},
]
SAMPLE_TOTAL = Decimal("451.0")


def identity_headers(user_id, roles=("user",)):
    """Gateway-injected identity headers for the Django test client."""
    headers = {}
    if user_id is not None:
        headers["HTTP_X_USER_ID"] = user_id
    if roles is not None:
        headers["HTTP_X_USER_ROLES"] = json.dumps(list(roles))
    return headers
