"""REST endpoints for product categories."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, request

from storefront.backend.app.http import problem_response
from storefront.backend.app.middleware import is_admin, require_sign_in
from storefront.backend.app.services import get_services
from storefront.backend.services import build_success_response, parse_json_payload

blueprint = Blueprint("category", __name__, url_prefix="/api/v1/category")


def _category_not_found() -> tuple[Any, int]:
    return problem_response(
        "not_found", status=HTTPStatus.NOT_FOUND, message="Category not found"
    ).to_response()


@blueprint.post("/create-category")
@require_sign_in
@is_admin
def create_category() -> tuple[Any, int]:
    category = get_services().categories.create(parse_json_payload(request))
    return build_success_response(
        "new category created", status=HTTPStatus.CREATED, category=category
    )


@blueprint.put("/update-category/<string:category_id>")
@require_sign_in
@is_admin
def update_category(category_id: str) -> tuple[Any, int]:
    try:
        category = get_services().categories.update(category_id, parse_json_payload(request))
    except KeyError:
        return _category_not_found()
    return build_success_response("Category Updated Successfully", category=category)


@blueprint.get("/get-category")
def list_categories() -> tuple[Any, int]:
    return build_success_response(
        "All Categories List", category=get_services().categories.list_all()
    )


@blueprint.get("/single-category/<string:slug>")
def single_category(slug: str) -> tuple[Any, int]:
    try:
        category = get_services().categories.get_by_slug(slug)
    except KeyError:
        return _category_not_found()
    return build_success_response("Get SIngle Category SUccessfully", category=category)


@blueprint.delete("/delete-category/<string:category_id>")
@require_sign_in
@is_admin
def delete_category(category_id: str) -> tuple[Any, int]:
    try:
        get_services().categories.delete(category_id)
    except KeyError:
        return _category_not_found()
    return build_success_response("Categry Deleted Successfully")


__all__ = ["blueprint"]
