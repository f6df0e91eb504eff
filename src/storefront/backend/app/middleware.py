"""Route decorators enforcing authentication and the admin role."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from flask import g, request

from .http import problem_response
from .services import get_services
from .services.auth_service import InvalidToken

ViewFunc = TypeVar("ViewFunc", bound=Callable[..., Any])

logger = logging.getLogger(__name__)


def extract_token(header: str | None) -> str | None:
    """Accept either a raw token or ``Bearer <token>`` in the header value."""

    if not header or not header.strip():
        return None
    scheme, _, credentials = header.strip().partition(" ")
    if credentials and scheme.lower() == "bearer":
        return credentials.strip() or None
    return header.strip()


def require_sign_in(view: ViewFunc) -> ViewFunc:
    """Reject requests without a valid token; stores the user id on ``g``."""

    @wraps(view)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        token = extract_token(request.headers.get("Authorization"))
        if token is None:
            return problem_response(
                "unauthorized", status=401, message="Authorization token missing"
            ).to_response()
        try:
            g.user_id = get_services().auth.signer.verify(token)
        except InvalidToken as exc:
            logger.info("Rejected token for %s: %s", request.path, exc)
            return problem_response("unauthorized", status=401, message=str(exc)).to_response()
        return view(*args, **kwargs)

    return cast(ViewFunc, wrapper)


def is_admin(view: ViewFunc) -> ViewFunc:
    """Allow only signed-in administrators; apply after :func:`require_sign_in`."""

    @wraps(view)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        user_id = g.get("user_id")
        if user_id is None or not get_services().auth.is_admin(user_id):
            return problem_response(
                "unauthorized", status=401, message="UnAuthorized Access"
            ).to_response()
        return view(*args, **kwargs)

    return cast(ViewFunc, wrapper)


__all__ = ["extract_token", "is_admin", "require_sign_in"]
