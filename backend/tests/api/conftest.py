"""
Fixtures for API tests.

Routes are exercised through TestClient with the service dependencies
overridden; token validation uses the real auth service with the test
secret.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import (
    get_auth_service,
    get_catalog_service,
    get_graph,
    get_subscription_service,
)
from modules.auth.service import AuthService
from shared.config import get_settings
from modules.catalog.interfaces import ICatalogService
from modules.subscriptions.interfaces import ISubscriptionService


@pytest.fixture
def catalog_service():
    service = MagicMock(spec=ICatalogService)
    service.resolve_genres_for_user = AsyncMock(return_value=[])
    service.resolve_genre_detail = AsyncMock()
    service.list_movies_for_genre = AsyncMock(return_value=[])
    return service


@pytest.fixture
def subscription_service():
    service = MagicMock(spec=ISubscriptionService)
    for name in (
        "list_plans",
        "start_checkout",
        "confirm_checkout",
        "get_current_subscription",
        "cancel_subscription",
    ):
        setattr(service, name, AsyncMock())
    return service


@pytest.fixture
def auth_service(fake_graph, settings, subscription_service):
    return AuthService(fake_graph, subscriptions=subscription_service, settings=settings)


@pytest.fixture
def app(fake_graph, settings, auth_service, catalog_service, subscription_service):
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_graph] = lambda: fake_graph
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    app.dependency_overrides[get_subscription_service] = lambda: subscription_service
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
