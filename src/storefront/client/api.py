"""HTTP client for the storefront REST API.

The pages talk to the backend exclusively through :class:`StorefrontApi`, so
tests can swap the underlying ``requests.Session`` for a stand-in and drive
every branch of the page flows without a running server.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

import requests

if TYPE_CHECKING:  # pragma: no cover - only for static type checkers
    from .context import AuthContext

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"


class ApiError(Exception):
    """Raised when a request fails in transport or returns an unusable body."""

    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


@dataclass(frozen=True)
class ApiResponse:
    """Decoded JSON envelope returned by the API."""

    status: int
    data: Mapping[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return bool(self.data.get("success"))

    @property
    def message(self) -> Optional[str]:
        message = self.data.get("message")
        return str(message) if message is not None else None


class StorefrontApi:
    """Thin wrapper around ``requests.Session`` bound to the API base URL.

    Responses with a JSON object body are returned even for 4xx statuses so
    the caller can show the server-supplied message; transport failures,
    undecodable bodies and 5xx statuses raise :class:`ApiError`.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: Optional[requests.Session] = None,
        auth: Optional["AuthContext"] = None,
        connect_timeout: float = 5.0,
        read_timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.auth = auth
        self.timeout = (connect_timeout, read_timeout)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.auth is not None and self.auth.token:
            headers["Authorization"] = self.auth.token
        return headers

    def _request(self, method: str, path: str, **kwargs: Any) -> ApiResponse:
        try:
            response = self.session.request(
                method,
                self._url(path),
                headers=self._headers(),
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(str(exc)) from exc

        if response.status_code >= 500:
            raise ApiError(f"Server error {response.status_code}", status=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError("Response body is not valid JSON", status=response.status_code) from exc
        if not isinstance(payload, Mapping):
            raise ApiError("Response JSON must be an object", status=response.status_code)

        logger.debug("%s %s -> %s", method, path, response.status_code)
        return ApiResponse(status=response.status_code, data=payload)

    def get(self, path: str, **params: Any) -> ApiResponse:
        return self._request("GET", path, params=params or None)

    def post(
        self,
        path: str,
        *,
        json: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
    ) -> ApiResponse:
        """POST a JSON body, or a multipart form when ``data``/``files`` are given."""

        if json is not None:
            return self._request("POST", path, json=json)
        return self._request("POST", path, data=data, files=files)


__all__ = ["ApiError", "ApiResponse", "DEFAULT_BASE_URL", "StorefrontApi"]
