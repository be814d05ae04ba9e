"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from agrigov.config import Settings
from agrigov.infrastructure.notification.webhook_notifier import LoggingReviewerNotifier
from agrigov.interfaces.api.app import create_app
from agrigov.interfaces.api.middleware.auth import RequestUser
from agrigov.main import build_services

from tests.conftest import seed_role


class HeaderAuthMiddleware:
    """Middleware that takes the caller from X-Test-User; no header means unauthenticated."""

    async def process_request(self, req, resp):
        user_id = req.get_header("X-Test-User")
        req.context.user = RequestUser(user_id=user_id) if user_id else None


@pytest.fixture
def services(uow_factory, catalog, clock):
    settings = Settings(_env_file=None, audit_background=False)
    return build_services(
        uow_factory,
        settings,
        catalog=catalog,
        clock=clock,
        notifier=LoggingReviewerNotifier(),
    )


@pytest.fixture
def app(services):
    """Falcon ASGI app with every route and test authentication."""
    return create_app(services, middleware=[HeaderAuthMiddleware()])


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def owner(store, catalog):
    seed_role(store, catalog, "boss", "owner")
    return {"X-Test-User": "boss"}


@pytest.fixture
def worker(store, catalog):
    seed_role(store, catalog, "hand", "worker")
    return {"X-Test-User": "hand"}
