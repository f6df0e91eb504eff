"""REST endpoints for the product catalogue."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, Response, request

from storefront.backend.app.http import problem_response
from storefront.backend.app.middleware import is_admin, require_sign_in
from storefront.backend.app.services import get_services
from storefront.backend.services import (
    build_success_response,
    parse_json_payload,
    parse_product_form,
)

blueprint = Blueprint("product", __name__, url_prefix="/api/v1/product")


def _product_not_found() -> tuple[Any, int]:
    return problem_response(
        "not_found", status=HTTPStatus.NOT_FOUND, message="Product not found"
    ).to_response()


@blueprint.post("/create-product")
@require_sign_in
@is_admin
def create_product() -> tuple[Any, int]:
    fields, photo = parse_product_form(request)
    product = get_services().products.create(fields, photo)
    return build_success_response(
        "Product Created Successfully", status=HTTPStatus.CREATED, products=product
    )


@blueprint.put("/update-product/<string:product_id>")
@require_sign_in
@is_admin
def update_product(product_id: str) -> tuple[Any, int]:
    fields, photo = parse_product_form(request)
    try:
        product = get_services().products.update(product_id, fields, photo)
    except KeyError:
        return _product_not_found()
    return build_success_response(
        "Product Updated Successfully", status=HTTPStatus.CREATED, products=product
    )


@blueprint.get("/get-product")
def list_products() -> tuple[Any, int]:
    products = get_services().products.latest()
    return build_success_response("All Products", countTotal=len(products), products=products)


@blueprint.get("/get-product/<string:slug>")
def get_product(slug: str) -> tuple[Any, int]:
    try:
        product = get_services().products.get_by_slug(slug)
    except KeyError:
        return _product_not_found()
    return build_success_response("Single Product Fetched", product=product)


@blueprint.get("/product-photo/<string:product_id>")
def product_photo(product_id: str) -> Response | tuple[Any, int]:
    try:
        photo = get_services().products.photo(product_id)
    except KeyError:
        return problem_response(
            "not_found", status=HTTPStatus.NOT_FOUND, message="Photo not found"
        ).to_response()
    return Response(photo.data, status=HTTPStatus.OK, mimetype=photo.content_type)


@blueprint.delete("/delete-product/<string:product_id>")
@require_sign_in
@is_admin
def delete_product(product_id: str) -> tuple[Any, int]:
    try:
        get_services().products.delete(product_id)
    except KeyError:
        return _product_not_found()
    return build_success_response("Product Deleted successfully")


@blueprint.post("/product-filters")
def filter_products() -> tuple[Any, int]:
    products = get_services().products.filter(parse_json_payload(request))
    return build_success_response(products=products)


@blueprint.get("/product-count")
def product_count() -> tuple[Any, int]:
    return build_success_response(total=get_services().products.count())


@blueprint.get("/product-list/<int:page>")
def product_list(page: int) -> tuple[Any, int]:
    return build_success_response(products=get_services().products.page(page))


@blueprint.get("/search/<string:keyword>")
def search_products(keyword: str) -> tuple[Any, int]:
    return build_success_response(results=get_services().products.search(keyword))


@blueprint.get("/related-product/<string:product_id>/<string:category_id>")
def related_products(product_id: str, category_id: str) -> tuple[Any, int]:
    products = get_services().products.related(product_id, category_id)
    return build_success_response(products=products)


@blueprint.get("/product-category/<string:slug>")
def products_by_category(slug: str) -> tuple[Any, int]:
    try:
        category, products = get_services().products.by_category(slug)
    except KeyError:
        return problem_response(
            "not_found", status=HTTPStatus.NOT_FOUND, message="Category not found"
        ).to_response()
    return build_success_response(category=category, products=products)


__all__ = ["blueprint"]
