"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from storefront.backend.app import create_app  # noqa: E402
from storefront.backend.app.services import EXTENSION_KEY, StorefrontServices  # noqa: E402
from storefront.backend.config.settings import StorefrontSettings, load_settings  # noqa: E402

TEST_ENVIRONMENT = {
    "STOREFRONT_SECRET_KEY": "test-secret",
    "STOREFRONT_ALLOWED_ORIGINS": "http://localhost:3000",
}

ADMIN_ACCOUNT = {
    "name": "Admin",
    "email": "admin@example.com",
    "password": "admin-pass",
    "phone": "555-0100",
    "address": "1 Admin Way",
    "answer": "blue",
}

CUSTOMER_ACCOUNT = {
    "name": "Customer",
    "email": "customer@example.com",
    "password": "customer-pass",
    "phone": "555-0101",
    "address": "2 Customer Road",
    "answer": "green",
}


@pytest.fixture()
def settings() -> StorefrontSettings:
    """Settings built from the bundled defaults with deterministic overrides."""

    return load_settings(environ=TEST_ENVIRONMENT)


@pytest.fixture()
def app(settings: StorefrontSettings) -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app(settings)
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()


@pytest.fixture()
def services(app: Flask) -> StorefrontServices:
    return app.extensions[EXTENSION_KEY]


def _login(client: FlaskClient, account: dict[str, str]) -> str:
    response = client.post(
        "/api/v1/auth/login",
        json={"email": account["email"], "password": account["password"]},
    )
    assert response.status_code == 200, response.get_json()
    return response.get_json()["token"]


@pytest.fixture()
def admin_token(client: FlaskClient, services: StorefrontServices) -> str:
    """Register an account, grant it the admin role and return its token."""

    response = client.post("/api/v1/auth/register", json=ADMIN_ACCOUNT)
    assert response.status_code == 201, response.get_json()
    services.auth.promote_to_admin(response.get_json()["user"]["_id"])
    return _login(client, ADMIN_ACCOUNT)


@pytest.fixture()
def user_token(client: FlaskClient) -> str:
    response = client.post("/api/v1/auth/register", json=CUSTOMER_ACCOUNT)
    assert response.status_code == 201, response.get_json()
    return _login(client, CUSTOMER_ACCOUNT)


@pytest.fixture()
def category(client: FlaskClient, admin_token: str) -> dict:
    """A stored category created through the API."""

    response = client.post(
        "/api/v1/category/create-category",
        json={"name": "Electronics"},
        headers={"Authorization": admin_token},
    )
    assert response.status_code == 201, response.get_json()
    return response.get_json()["category"]
