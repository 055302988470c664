from unittest.mock import MagicMock

import pytest

from rest_framework.test import APIClient

from helpers import ADMIN_ID, OTHER_ID, OWNER_ID, SAMPLE_ITEMS
from modules.core.identity import IdentityContext
from modules.orders.repositories import InMemoryOrderRepository
from modules.orders.services import OrderService
from shared.infrastructure.bus import InMemoryEventBus


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def repository():
    return InMemoryOrderRepository()


@pytest.fixture()
def event_bus():
    return InMemoryEventBus(maxsize=100)


@pytest.fixture()
def user_directory():
    """Identity service stand-in that confirms every user."""
    directory = MagicMock()
    directory.user_exists.return_value = True
    return directory


@pytest.fixture()
def service(repository, user_directory, event_bus):
    return OrderService(
        order_repository=repository,
        user_directory=user_directory,
        event_bus=event_bus,
    )


@pytest.fixture()
def owner():
    return IdentityContext(user_id=OWNER_ID, roles=frozenset({"user"}))


@pytest.fixture()
def other_user():
    return IdentityContext(user_id=OTHER_ID, roles=frozenset({"user"}))


@pytest.fixture()
def admin():
    return IdentityContext(user_id=ADMIN_ID, roles=frozenset({"admin"}))


@pytest.fixture()
def created_order(service, owner):
    """An order in ``created`` status owned by ``owner``."""
    return service.create_order(owner, SAMPLE_ITEMS)
