from __future__ import annotations

import pytest
from flask import Flask, g

from storefront.backend.app.middleware import extract_token, is_admin, require_sign_in


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        (None, None),
        ("", None),
        ("   ", None),
        ("raw-token", "raw-token"),
        ("Bearer abc.def", "abc.def"),
        ("bearer abc.def", "abc.def"),
    ],
)
def test_extract_token(header: str | None, expected: str | None) -> None:
    assert extract_token(header) == expected


def _protected() -> str:
    return g.user_id


def test_require_sign_in_rejects_missing_token(app: Flask) -> None:
    view = require_sign_in(_protected)

    with app.test_request_context("/"):
        response, status = view()

    assert status == 401
    assert response.get_json()["message"] == "Authorization token missing"


def test_require_sign_in_rejects_tampered_token(app: Flask) -> None:
    view = require_sign_in(_protected)

    with app.test_request_context("/", headers={"Authorization": "Bearer forged"}):
        response, status = view()

    assert status == 401
    assert response.get_json()["success"] is False


def test_require_sign_in_exposes_user_id(app: Flask, services) -> None:
    token = services.auth.signer.issue("user-1")
    view = require_sign_in(_protected)

    with app.test_request_context("/", headers={"Authorization": token}):
        assert view() == "user-1"


def test_is_admin_rejects_non_admin(app: Flask, services) -> None:
    token = services.auth.signer.issue("unknown-user")
    view = require_sign_in(is_admin(_protected))

    with app.test_request_context("/", headers={"Authorization": token}):
        response, status = view()

    assert status == 401
    assert response.get_json()["message"] == "UnAuthorized Access"
