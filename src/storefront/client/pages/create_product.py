"""Admin screen for adding a product to the catalogue."""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from storefront.client.api import StorefrontApi
from storefront.client.context import Navigator, Notifier

logger = logging.getLogger(__name__)

CATEGORY_ENDPOINT = "/api/v1/category/get-category"
CREATE_ENDPOINT = "/api/v1/product/create-product"
PRODUCTS_DASHBOARD_PATH = "/dashboard/admin/products"


@dataclass(frozen=True)
class PhotoUpload:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: Path) -> "PhotoUpload":
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(path.name, path.read_bytes(), content_type or "application/octet-stream")


class CreateProductPage:
    heading = "Create Product"
    fields = ("name", "description", "price", "quantity", "category", "shipping")

    def __init__(self, api: StorefrontApi, notifier: Notifier, navigator: Navigator) -> None:
        self.api = api
        self.notifier = notifier
        self.navigator = navigator
        self.categories: list[dict[str, Any]] = []
        self.name = ""
        self.description = ""
        self.price = ""
        self.quantity = ""
        self.category = ""
        self.shipping = ""
        self.photo: PhotoUpload | None = None

    def load(self) -> None:
        """Fetch the categories offered in the category selector."""

        try:
            response = self.api.get(CATEGORY_ENDPOINT)
        except Exception:
            logger.exception("Fetching categories failed")
            self.notifier.error("Something went wrong in getting category")
            return
        if response.success:
            self.categories = list(response.data.get("category") or [])

    def change(self, field: str, value: str) -> None:
        if field not in self.fields:
            raise ValueError(f"Unknown product field: {field}")
        setattr(self, field, value)

    def select_category(self, category_id: str) -> None:
        self.category = category_id

    def select_shipping(self, shipping: bool | str) -> None:
        if isinstance(shipping, bool):
            shipping = "1" if shipping else "0"
        self.shipping = shipping

    def attach_photo(self, photo: PhotoUpload | Path) -> None:
        self.photo = PhotoUpload.from_path(photo) if isinstance(photo, Path) else photo

    def form_data(self) -> tuple[dict[str, str], dict[str, tuple[str, bytes, str]]]:
        data = {
            "name": self.name,
            "description": self.description,
            "price": str(self.price),
            "quantity": str(self.quantity),
            "category": self.category,
            "shipping": self.shipping,
        }
        files = {}
        if self.photo is not None:
            files["photo"] = (self.photo.filename, self.photo.content, self.photo.content_type)
        return data, files

    def submit(self) -> bool:
        try:
            data, files = self.form_data()
            response = self.api.post(CREATE_ENDPOINT, data=data, files=files or None)
        except Exception:
            logger.exception("Creating product %r failed", self.name)
            self.notifier.error("Something went wrong")
            return False

        if not response.success:
            self.notifier.error(response.message)
            return False

        self.notifier.success("Product Created Successfully")
        self.navigator.navigate(PRODUCTS_DASHBOARD_PATH)
        return True


__all__ = [
    "CATEGORY_ENDPOINT",
    "CREATE_ENDPOINT",
    "CreateProductPage",
    "PRODUCTS_DASHBOARD_PATH",
    "PhotoUpload",
]
