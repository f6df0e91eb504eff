"""Service wiring shared by the application factory and blueprints."""

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from storefront.backend.config.settings import StorefrontSettings

from .auth_service import AuthService, TokenSigner
from .catalog_service import CategoryService, ProductService
from .document_store import DocumentStore, InMemoryDocumentStore, SQLiteDocumentStore

EXTENSION_KEY = "storefront"


@dataclass(frozen=True)
class StorefrontServices:
    """Per-application service instances sharing one document store."""

    settings: StorefrontSettings
    store: DocumentStore
    auth: AuthService
    categories: CategoryService
    products: ProductService

    @classmethod
    def from_settings(
        cls, settings: StorefrontSettings, store: DocumentStore | None = None
    ) -> "StorefrontServices":
        store = store or build_document_store(settings)
        signer = TokenSigner(settings.secret_key, ttl_seconds=settings.token_ttl_seconds)
        categories = CategoryService(store)
        return cls(
            settings=settings,
            store=store,
            auth=AuthService(store, signer),
            categories=categories,
            products=ProductService(
                store,
                categories,
                max_photo_bytes=settings.max_photo_bytes,
                pagination=settings.pagination,
            ),
        )


def build_document_store(settings: StorefrontSettings) -> DocumentStore:
    if settings.database_path is not None:
        return SQLiteDocumentStore(settings.database_path)
    return InMemoryDocumentStore()


def get_services() -> StorefrontServices:
    """Return the services bound to the active Flask application."""

    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "EXTENSION_KEY",
    "StorefrontServices",
    "build_document_store",
    "get_services",
]
