"""REST endpoints for customer accounts and session checks."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, g, jsonify, request

from storefront.backend.app.http import problem_response
from storefront.backend.app.middleware import is_admin, require_sign_in
from storefront.backend.app.services import get_services
from storefront.backend.services import build_success_response, parse_json_payload

blueprint = Blueprint("auth", __name__, url_prefix="/api/v1/auth")


@blueprint.post("/register")
def register() -> tuple[Any, int]:
    user = get_services().auth.register(parse_json_payload(request))
    return build_success_response(
        "User Register Successfully", status=HTTPStatus.CREATED, user=user
    )


@blueprint.post("/login")
def login() -> tuple[Any, int]:
    user, token = get_services().auth.login(parse_json_payload(request))
    return build_success_response("login successfully", user=user, token=token)


@blueprint.post("/forgot-password")
def forgot_password() -> tuple[Any, int]:
    get_services().auth.forgot_password(parse_json_payload(request))
    return build_success_response("Password Reset Successfully")


@blueprint.get("/test")
@require_sign_in
@is_admin
def protected_test() -> tuple[Any, int]:
    return build_success_response("Protected Routes")


@blueprint.get("/user-auth")
@require_sign_in
def user_auth() -> tuple[Any, int]:
    return jsonify({"ok": True}), HTTPStatus.OK


@blueprint.get("/admin-auth")
@require_sign_in
@is_admin
def admin_auth() -> tuple[Any, int]:
    return jsonify({"ok": True}), HTTPStatus.OK


@blueprint.put("/profile")
@require_sign_in
def update_profile() -> tuple[Any, int]:
    try:
        user = get_services().auth.update_profile(g.user_id, parse_json_payload(request))
    except KeyError:
        return problem_response(
            "not_found", status=HTTPStatus.NOT_FOUND, message="User not found"
        ).to_response()
    return build_success_response("Profile Updated Successfully", updatedUser=user)


__all__ = ["blueprint"]
