"""Integration tests for application-level endpoints and wiring."""

from http import HTTPStatus
from pathlib import Path

import pytest
from flask.testing import FlaskClient

from storefront.backend.app import create_app
from storefront.backend.app.services import EXTENSION_KEY
from storefront.backend.app.services.document_store import SQLiteDocumentStore
from storefront.backend.config.settings import load_settings
from storefront.backend.version import get_project_version


def test_health_endpoint(client: FlaskClient) -> None:
    """Ensure the health endpoint returns a successful status payload."""
    response = client.get("/health")
    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["status"] == "ok"
    assert payload["version"] == get_project_version()
    assert response.mimetype == "application/json"


def test_unknown_route_returns_not_found(client: FlaskClient) -> None:
    response = client.get("/api/v1/unknown")
    assert response.status_code == HTTPStatus.NOT_FOUND


def test_database_path_selects_sqlite_store(tmp_path: Path) -> None:
    settings = load_settings(
        environ={"STOREFRONT_SECRET_KEY": "s", "STOREFRONT_DB": str(tmp_path / "shop.db")}
    )
    app = create_app(settings)

    assert isinstance(app.extensions[EXTENSION_KEY].store, SQLiteDocumentStore)


def test_missing_allowed_origins_warns() -> None:
    settings = load_settings(
        environ={"STOREFRONT_SECRET_KEY": "s", "STOREFRONT_ALLOWED_ORIGINS": ""}
    )

    with pytest.warns(UserWarning, match="No allowed origins"):
        create_app(settings)


def test_wsgi_module_exposes_application(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOREFRONT_SECRET_KEY", "wsgi-secret")
    monkeypatch.setenv("STOREFRONT_ALLOWED_ORIGINS", "http://localhost:3000")
    monkeypatch.delenv("STOREFRONT_DB", raising=False)

    from storefront.backend import passenger_wsgi

    assert passenger_wsgi.application.name == "storefront.backend.app"


def test_value_errors_render_problem_envelope(settings) -> None:
    app = create_app(settings)

    @app.get("/explode")
    def explode():
        raise ValueError("quantity must be whole")

    response = app.test_client().get("/explode")

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json() == {
        "success": False,
        "error": "validation_error",
        "message": "quantity must be whole",
    }
