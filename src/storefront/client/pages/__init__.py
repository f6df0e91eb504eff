"""Page flows driven against the storefront API."""

from .create_product import CreateProductPage, PhotoUpload
from .login import LoginPage

__all__ = ["CreateProductPage", "LoginPage", "PhotoUpload"]
