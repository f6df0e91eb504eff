"""Request/response helpers shared by the storefront blueprints."""

from .request_parser import parse_json_payload, parse_product_form
from .response_builder import build_success_response

__all__ = [
    "build_success_response",
    "parse_json_payload",
    "parse_product_form",
]
