"""Unit tests for request parsing helpers."""

from __future__ import annotations

import io

import pytest
from flask import Flask, request
from werkzeug.exceptions import BadRequest

from storefront.backend.services.request_parser import parse_json_payload, parse_product_form


def test_parse_payload_returns_object(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/auth/login",
        method="POST",
        json={"email": "a@example.com", "password": "secret"},
    ):
        payload = parse_json_payload(request)

    assert payload == {"email": "a@example.com", "password": "secret"}


def test_parse_payload_rejects_non_object(app: Flask) -> None:
    """Non-object JSON payloads should trigger BadRequest responses."""

    with app.test_request_context(
        "/api/v1/auth/login",
        method="POST",
        json=["not", "an", "object"],
    ):
        with pytest.raises(BadRequest, match="must be an object"):
            parse_json_payload(request)


def test_parse_payload_rejects_invalid_json(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/auth/login",
        method="POST",
        data="{not json",
        content_type="application/json",
    ):
        with pytest.raises(BadRequest, match="valid JSON"):
            parse_json_payload(request)


def test_parse_product_form_extracts_photo(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/product/create-product",
        method="POST",
        data={
            "name": "Laptop",
            "price": "999",
            "photo": (io.BytesIO(b"\x89PNG-bytes"), "laptop.png", "image/png"),
        },
        content_type="multipart/form-data",
    ):
        fields, photo = parse_product_form(request)

    assert fields == {"name": "Laptop", "price": "999"}
    assert photo is not None
    assert photo.data == b"\x89PNG-bytes"
    assert photo.content_type == "image/png"


def test_parse_product_form_without_photo(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/product/create-product",
        method="POST",
        data={"name": "Laptop"},
        content_type="multipart/form-data",
    ):
        fields, photo = parse_product_form(request)

    assert fields == {"name": "Laptop"}
    assert photo is None


def test_parse_product_form_ignores_empty_upload(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/product/create-product",
        method="POST",
        data={"name": "Laptop", "photo": (io.BytesIO(b""), "empty.png")},
        content_type="multipart/form-data",
    ):
        _, photo = parse_product_form(request)

    assert photo is None
