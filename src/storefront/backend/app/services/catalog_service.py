"""Category and product operations on the document store."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from pydantic import ValidationError
from slugify import slugify

from storefront.backend.app.http import ServiceError
from storefront.backend.app.models import (
    PRODUCT_REQUIRED_FIELDS,
    CategoryRequest,
    Photo,
    ProductFilterRequest,
    ProductForm,
    format_validation_error,
    public_category,
    public_product,
)
from storefront.backend.config.settings import PaginationSettings

from .document_store import DESCENDING, DocumentStore

CATEGORIES = "categories"
PRODUCTS = "products"

_LOGGER = logging.getLogger(__name__)


class CategoryService:
    """CRUD for product categories; names are unique, slugs derive from names."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def _validated_name(self, payload: Mapping[str, Any]) -> str:
        try:
            return CategoryRequest.model_validate(payload).name
        except ValidationError as error:
            raise ServiceError(
                "Name is required", status=HTTPStatus.UNAUTHORIZED, error="missing_field"
            ) from error

    def create(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        name = self._validated_name(payload)
        if self._store.find_one(CATEGORIES, {"name": name}) is not None:
            raise ServiceError("Category Already Exisits", status=200, error="duplicate_category")

        document = self._store.insert(CATEGORIES, {"name": name, "slug": slugify(name)})
        _LOGGER.info("Created category %s (%s)", document["slug"], document["_id"])
        return public_category(document)

    def update(self, category_id: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        name = self._validated_name(payload)
        existing = self._store.find_one(CATEGORIES, {"name": name})
        if existing is not None and existing["_id"] != category_id:
            raise ServiceError("Category Already Exisits", status=200, error="duplicate_category")

        document = self._store.update(CATEGORIES, category_id, {"name": name, "slug": slugify(name)})
        return public_category(document)

    def list_all(self) -> list[dict[str, Any]]:
        return [public_category(document) for document in self._store.find(CATEGORIES)]

    def get_by_slug(self, slug: str) -> dict[str, Any]:
        document = self._store.find_one(CATEGORIES, {"slug": slug})
        if document is None:
            raise KeyError(slug)
        return public_category(document)

    def get(self, category_id: str) -> dict[str, Any]:
        return public_category(self._store.get(CATEGORIES, category_id))

    def delete(self, category_id: str) -> dict[str, Any]:
        document = self._store.delete(CATEGORIES, category_id)
        _LOGGER.info("Deleted category %s", category_id)
        return public_category(document)

    def index(self) -> dict[str, dict[str, Any]]:
        """Return every category keyed by id, for populating product references."""

        return {document["_id"]: document for document in self._store.find(CATEGORIES)}


class ProductService:
    """Product catalogue operations, including multipart create and update."""

    def __init__(
        self,
        store: DocumentStore,
        categories: CategoryService,
        *,
        max_photo_bytes: int,
        pagination: PaginationSettings | None = None,
    ) -> None:
        self._store = store
        self._categories = categories
        self._max_photo_bytes = max_photo_bytes
        self._pagination = pagination or PaginationSettings()

    def _validated_document(
        self, fields: Mapping[str, Any], photo: Photo | None
    ) -> dict[str, Any]:
        for field in PRODUCT_REQUIRED_FIELDS:
            value = fields.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                message = f"{field.capitalize()} is Required"
                raise ServiceError(message, status=HTTPStatus.INTERNAL_SERVER_ERROR, error=message)

        if photo is not None and photo.size > self._max_photo_bytes:
            raise ServiceError(
                f"Photo should be less than {self._max_photo_bytes} bytes",
                status=HTTPStatus.INTERNAL_SERVER_ERROR,
                error="photo_too_large",
            )

        try:
            form = ProductForm.model_validate(fields)
        except ValidationError as error:
            raise ServiceError(
                format_validation_error(error, subject="product"), error="validation_error"
            ) from error

        try:
            self._categories.get(form.category)
        except KeyError as exc:
            raise ServiceError("Category not found", status=404, error="not_found") from exc

        document = form.model_dump()
        document["slug"] = slugify(form.name)
        if photo is not None:
            document["photo"] = photo.to_document()
        return document

    def _populate(self, documents: list[dict[str, Any]]) -> list[dict[str, Any]]:
        categories = self._categories.index()
        return [public_product(document, categories) for document in documents]

    def create(self, fields: Mapping[str, Any], photo: Photo | None) -> dict[str, Any]:
        document = self._store.insert(PRODUCTS, self._validated_document(fields, photo))
        _LOGGER.info("Created product %s (%s)", document["slug"], document["_id"])
        return public_product(document)

    def update(
        self, product_id: str, fields: Mapping[str, Any], photo: Photo | None
    ) -> dict[str, Any]:
        self._store.get(PRODUCTS, product_id)
        document = self._store.update(PRODUCTS, product_id, self._validated_document(fields, photo))
        _LOGGER.info("Updated product %s", product_id)
        return public_product(document)

    def latest(self) -> list[dict[str, Any]]:
        documents = self._store.find(
            PRODUCTS,
            sort=("createdAt", DESCENDING),
            limit=self._pagination.latest_products,
            exclude=("photo",),
        )
        return self._populate(documents)

    def get_by_slug(self, slug: str) -> dict[str, Any]:
        document = self._store.find_one(PRODUCTS, {"slug": slug})
        if document is None:
            raise KeyError(slug)
        return self._populate([document])[0]

    def photo(self, product_id: str) -> Photo:
        document = self._store.get(PRODUCTS, product_id)
        stored = document.get("photo")
        if not stored:
            raise KeyError(product_id)
        return Photo.from_document(stored)

    def delete(self, product_id: str) -> None:
        self._store.delete(PRODUCTS, product_id)
        _LOGGER.info("Deleted product %s", product_id)

    def filter(self, payload: Mapping[str, Any]) -> list[dict[str, Any]]:
        request = ProductFilterRequest.model_validate(payload)
        query: dict[str, Any] = {}
        if request.checked:
            checked = set(request.checked)
            query["category"] = lambda value: value in checked
        if request.radio:
            low, high = request.radio
            query["price"] = lambda value: value is not None and low <= value <= high
        return self._store.find(PRODUCTS, query, exclude=("photo",))

    def count(self) -> int:
        return self._store.count(PRODUCTS)

    def page(self, page: int) -> list[dict[str, Any]]:
        if page < 1:
            raise ServiceError("Page numbers start at 1", error="invalid_page")
        per_page = self._pagination.page_size
        return self._store.find(
            PRODUCTS,
            sort=("createdAt", DESCENDING),
            skip=(page - 1) * per_page,
            limit=per_page,
            exclude=("photo",),
        )

    def search(self, keyword: str) -> list[dict[str, Any]]:
        pattern = re.compile(re.escape(keyword), re.IGNORECASE)
        return [
            document
            for document in self._store.find(PRODUCTS, exclude=("photo",))
            if pattern.search(document.get("name", "")) or pattern.search(document.get("description", ""))
        ]

    def related(self, product_id: str, category_id: str) -> list[dict[str, Any]]:
        documents = self._store.find(
            PRODUCTS,
            {"category": category_id, "_id": lambda value: value != product_id},
            limit=self._pagination.related_products,
            exclude=("photo",),
        )
        return self._populate(documents)

    def by_category(self, slug: str) -> tuple[dict[str, Any], list[dict[str, Any]]]:
        category = self._categories.get_by_slug(slug)
        documents = self._store.find(PRODUCTS, {"category": category["_id"]}, exclude=("photo",))
        return category, self._populate(documents)


__all__ = ["CATEGORIES", "PRODUCTS", "CategoryService", "ProductService"]
