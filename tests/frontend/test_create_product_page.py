"""Tests for the admin create-product flow."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from storefront.client.api import ApiError, ApiResponse
from storefront.client.context import Navigator, Notifier
from storefront.client.pages import CreateProductPage, PhotoUpload

CATEGORIES = [
    {"_id": "c1", "name": "Electronics", "slug": "electronics"},
    {"_id": "c2", "name": "Books", "slug": "books"},
]


@pytest.fixture()
def api() -> MagicMock:
    api = MagicMock()
    api.get.return_value = ApiResponse(
        200, {"success": True, "message": "All Categories List", "category": CATEGORIES}
    )
    return api


@pytest.fixture()
def page(api: MagicMock) -> CreateProductPage:
    return CreateProductPage(api, Notifier(), Navigator("/dashboard/admin/create-product"))


def _fill(page: CreateProductPage) -> None:
    page.change("name", "New Laptop")
    page.change("description", "A powerful laptop")
    page.change("price", "1500")
    page.change("quantity", "10")
    page.select_category("c1")
    page.select_shipping(True)
    page.attach_photo(PhotoUpload("laptop.jpg", b"jpeg-bytes", "image/jpeg"))


def test_load_fetches_categories(page: CreateProductPage, api: MagicMock) -> None:
    page.load()

    assert page.heading == "Create Product"
    api.get.assert_called_once_with("/api/v1/category/get-category")
    assert [item["name"] for item in page.categories] == ["Electronics", "Books"]


def test_load_failure_shows_error(page: CreateProductPage, api: MagicMock) -> None:
    api.get.side_effect = ApiError("offline")

    page.load()

    assert page.categories == []
    assert page.notifier.last.message == "Something went wrong in getting category"


def test_load_ignores_unsuccessful_response(page: CreateProductPage, api: MagicMock) -> None:
    api.get.return_value = ApiResponse(200, {"success": False})

    page.load()

    assert page.categories == []
    assert page.notifier.toasts == []


def test_submit_posts_multipart_form(page: CreateProductPage, api: MagicMock) -> None:
    api.post.return_value = ApiResponse(201, {"success": True, "message": "Product Created Successfully"})
    _fill(page)

    assert page.submit() is True

    api.post.assert_called_once_with(
        "/api/v1/product/create-product",
        data={
            "name": "New Laptop",
            "description": "A powerful laptop",
            "price": "1500",
            "quantity": "10",
            "category": "c1",
            "shipping": "1",
        },
        files={"photo": ("laptop.jpg", b"jpeg-bytes", "image/jpeg")},
    )
    assert page.notifier.last.kind == "success"
    assert page.notifier.last.message == "Product Created Successfully"
    assert page.navigator.current == "/dashboard/admin/products"


def test_submit_without_photo_sends_no_files(page: CreateProductPage, api: MagicMock) -> None:
    api.post.return_value = ApiResponse(201, {"success": True})
    _fill(page)
    page.photo = None
    page.select_shipping("0")

    page.submit()

    kwargs = api.post.call_args.kwargs
    assert kwargs["files"] is None
    assert kwargs["data"]["shipping"] == "0"


def test_submit_rejected_shows_server_message(page: CreateProductPage, api: MagicMock) -> None:
    api.post.return_value = ApiResponse(400, {"success": False, "message": "Name is Required"})

    assert page.submit() is False

    assert page.notifier.last.kind == "error"
    assert page.notifier.last.message == "Name is Required"
    assert page.navigator.current == "/dashboard/admin/create-product"


def test_submit_failure_shows_generic_error(page: CreateProductPage, api: MagicMock) -> None:
    api.post.side_effect = ApiError("Server error 500", status=500)
    _fill(page)

    assert page.submit() is False

    assert page.notifier.last.message == "Something went wrong"


def test_attach_photo_from_path(page: CreateProductPage, tmp_path: Path) -> None:
    path = tmp_path / "cover.png"
    path.write_bytes(b"png-bytes")

    page.attach_photo(path)

    assert page.photo == PhotoUpload("cover.png", b"png-bytes", "image/png")


def test_form_starts_empty(page: CreateProductPage) -> None:
    assert (page.name, page.description, page.price, page.quantity) == ("", "", "", "")
    assert (page.category, page.shipping, page.photo) == ("", "", None)
    assert page.categories == []


def test_change_rejects_unknown_fields(page: CreateProductPage) -> None:
    with pytest.raises(ValueError):
        page.change("colour", "red")


def test_submit_rejected_without_message(page: CreateProductPage, api: MagicMock) -> None:
    api.post.return_value = ApiResponse(200, {"success": False})
    _fill(page)

    assert page.submit() is False

    assert page.notifier.last.kind == "error"
    assert page.notifier.last.message is None
    assert page.navigator.current == "/dashboard/admin/create-product"


def test_unexpected_submit_exception_shows_generic_error(
    page: CreateProductPage, api: MagicMock
) -> None:
    api.post.side_effect = RuntimeError("Network Error")
    _fill(page)

    assert page.submit() is False

    assert page.notifier.last.kind == "error"
    assert page.notifier.last.message == "Something went wrong"


def test_unexpected_load_exception_shows_category_error(
    page: CreateProductPage, api: MagicMock
) -> None:
    api.get.side_effect = RuntimeError("Network Error")

    page.load()

    assert page.notifier.last.message == "Something went wrong in getting category"
