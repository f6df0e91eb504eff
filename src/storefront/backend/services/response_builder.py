"""Utilities for serialising successful API responses."""

from __future__ import annotations

from typing import Any, Tuple

from flask import jsonify

ResponseTuple = Tuple[Any, int]


def build_success_response(
    message: str | None = None, *, status: int = 200, **payload: Any
) -> ResponseTuple:
    """Return a JSON ``{"success": true, ...}`` envelope and ``status``."""

    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    body.update(payload)
    return jsonify(body), status
