# tests/conftest.py
from typing import Any, Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from storefront_api.config import load_settings
from storefront_api.db import db_session
from storefront_api.db.models import UserRole
from storefront_api.main import create_app
from storefront_api.repositories import UsersRepository
from storefront_api.security import hash_password
from storefront_api.services.notifier import Notifier

API = "/api"

SHIPPING_ADDRESS = {
    "address": "12 Ring Road",
    "city": "Accra",
    "region": "Greater Accra",
    "zipCode": "00233",
    "country": "Ghana",
}


class FakeNotifier(Notifier):
    """
    In-memory notifier. Records every call; ``errors`` maps an operation
    name to the exception it should raise.
    """

    enabled = True

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.errors: Dict[str, Exception] = {}
        self.closed = False

    def _record(self, name: str, **kwargs: Any) -> Dict[str, Any]:
        self.calls.append((name, kwargs))
        if name in self.errors:
            raise self.errors[name]
        return {"success": True}

    def calls_to(self, name: str) -> List[Dict[str, Any]]:
        return [kwargs for called, kwargs in self.calls if called == name]

    def send_email(self, **kwargs: Any) -> Dict[str, Any]:
        return self._record("send_email", **kwargs)

    def subscribe_contact(self, service_slug: str, **kwargs: Any) -> Dict[str, Any]:
        return self._record("subscribe_contact", service_slug=service_slug, **kwargs)

    def unsubscribe_contact(self, service_slug: str, email: str) -> Dict[str, Any]:
        return self._record("unsubscribe_contact", service_slug=service_slug, email=email)

    def get_status(self) -> Dict[str, Any]:
        return self._record("get_status")

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings():
    """Settings for an isolated in-memory database."""
    return load_settings(
        APP_ENV="test",
        DATABASE_URL="sqlite://",
        JWT_SECRET="test-secret",
        BCRYPT_ROUNDS=4,
        AUTO_CREATE_TABLES=True,
        EMMISOR_SERVICE_SLUG="apple-treats",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def app(settings, notifier):
    """
    Application with the notifier replaced by ``FakeNotifier``. Tables are
    created by the startup hook (``AUTO_CREATE_TABLES``).
    """
    application = create_app(settings=settings)
    application.state.container.notifier.override(notifier)
    yield application
    application.state.container.notifier.reset_override()


@pytest.fixture
def container(app):
    return app.state.container


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


# ---------------------------------------------------------------------------
# Account helpers
# ---------------------------------------------------------------------------


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register(
    client: TestClient,
    email: str = "ama@example.com",
    password: str = "secret123",
    first_name: str = "Ama",
    last_name: str = "Mensah",
) -> Dict[str, Any]:
    """
    Register through the API and return the session user. The session
    cookie is dropped so callers authenticate with explicit headers.
    """
    response = client.post(
        f"{API}/auth/register",
        json={"firstName": first_name, "lastName": last_name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    client.cookies.clear()
    return response.json()["data"]


def create_admin(container, email: str = "admin@example.com", password: str = "admin-pass") -> None:
    with db_session(container.session_factory()) as session:
        UsersRepository(session).create(
            first_name="Store",
            last_name="Admin",
            email=email,
            password_hash=hash_password(password, rounds=4),
            role=UserRole.ADMIN,
        )


def login(client: TestClient, email: str, password: str) -> str:
    response = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    client.cookies.clear()
    return response.json()["data"]["token"]


@pytest.fixture
def customer_token(client) -> str:
    return register(client)["token"]


@pytest.fixture
def admin_token(client, container) -> str:
    create_admin(container)
    return login(client, "admin@example.com", "admin-pass")


def create_category(client: TestClient, admin_token: str, name: str = "iPhone", slug: Optional[str] = None, **extra) -> int:
    payload = {"name": name, "slug": slug or name.lower(), **extra}
    response = client.post(f"{API}/admin/categories", json=payload, headers=bearer(admin_token))
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]


def create_product(client: TestClient, admin_token: str, category_id: int, **overrides) -> str:
    payload = {
        "name": "iPhone 15",
        "categoryId": category_id,
        "price": 999,
        "originalPrice": 1099,
        "image": "/images/iphone-15.jpg",
        "condition": "New",
    }
    payload.update(overrides)
    response = client.post(f"{API}/admin/products", json=payload, headers=bearer(admin_token))
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]
