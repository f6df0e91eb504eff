"""Typed request models and stored-document helpers for the storefront API.

Request payloads are validated by the Pydantic models in :mod:`.api`. Stored
records stay plain mappings (the document store hands out dictionaries the way
a Mongo collection would), so this module only carries the small value types
and projections needed to turn those documents into API responses.
"""

from __future__ import annotations

import base64
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from .api import (
    PRODUCT_REQUIRED_FIELDS,
    CategoryRequest,
    ForgotPasswordRequest,
    LoginRequest,
    ProductFilterRequest,
    ProductForm,
    ProfileUpdateRequest,
    RegisterRequest,
    format_validation_error,
)

__all__ = [
    "Role",
    "Photo",
    "public_user",
    "public_category",
    "public_product",
    "CategoryRequest",
    "ForgotPasswordRequest",
    "LoginRequest",
    "ProductFilterRequest",
    "ProductForm",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "PRODUCT_REQUIRED_FIELDS",
    "format_validation_error",
]

USER_PUBLIC_FIELDS: tuple[str, ...] = ("_id", "name", "email", "phone", "address", "role")


class Role(IntEnum):
    """Account roles stored on user documents."""

    USER = 0
    ADMIN = 1


@dataclass(frozen=True)
class Photo:
    """Binary product photo together with its declared content type."""

    data: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.data)

    def to_document(self) -> dict[str, str]:
        return {
            "data": base64.b64encode(self.data).decode("ascii"),
            "contentType": self.content_type,
        }

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Photo":
        return cls(
            data=base64.b64decode(document["data"]),
            content_type=str(document.get("contentType") or "application/octet-stream"),
        )


def public_user(document: Mapping[str, Any]) -> dict[str, Any]:
    """Project a user document onto the fields safe to return to clients."""

    return {field: document.get(field) for field in USER_PUBLIC_FIELDS}


def public_category(document: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "_id": document["_id"],
        "name": document["name"],
        "slug": document["slug"],
    }


def public_product(
    document: Mapping[str, Any],
    categories: Mapping[str, Mapping[str, Any]] | None = None,
) -> dict[str, Any]:
    """Drop the photo blob and optionally populate the category reference."""

    product = {key: value for key, value in document.items() if key != "photo"}
    if categories is not None:
        category = categories.get(str(document.get("category")))
        if category is not None:
            product["category"] = public_category(category)
    return product
