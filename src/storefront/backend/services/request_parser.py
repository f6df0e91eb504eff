"""Helpers for normalising incoming JSON and multipart requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Request
from werkzeug.exceptions import BadRequest

from storefront.backend.app.models import Photo


def parse_json_payload(req: Request) -> dict[str, Any]:
    """Extract a JSON object from ``req``."""

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    return dict(data)


def parse_product_form(req: Request) -> tuple[dict[str, str], Photo | None]:
    """Split a multipart product form into its text fields and optional photo."""

    fields = {key: value for key, value in req.form.items()}

    upload = req.files.get("photo")
    if upload is None or not upload.filename:
        return fields, None

    data = upload.read()
    if not data:
        return fields, None

    return fields, Photo(data=data, content_type=upload.mimetype or "application/octet-stream")
