"""Client-side state shared by the storefront pages.

These objects play the roles the browser plays for the web front end: toast
notifications, the router's navigation history, ``localStorage`` and the auth
context that carries the signed-in user and token.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from typing import Any, Mapping

logger = logging.getLogger(__name__)

AUTH_STORAGE_KEY = "auth"


@dataclass(frozen=True)
class Toast:
    """A transient notification raised by a page."""

    kind: str
    message: str | None
    options: Mapping[str, Any] = field(default_factory=dict)


class Notifier:
    """Collects toasts in the order pages raise them and logs each one."""

    def __init__(self) -> None:
        self.toasts: list[Toast] = []

    def success(self, message: str | None, **options: Any) -> None:
        self.toasts.append(Toast("success", message, dict(options)))
        logger.info("toast success: %s", message)

    def error(self, message: str | None, **options: Any) -> None:
        self.toasts.append(Toast("error", message, dict(options)))
        logger.warning("toast error: %s", message)

    @property
    def last(self) -> Toast | None:
        return self.toasts[-1] if self.toasts else None


class Navigator:
    """Records page navigation; ``state`` holds the location to return to."""

    def __init__(self, initial: str = "/", *, state: str | None = None) -> None:
        self.history: list[str] = [initial]
        self.state = state

    @property
    def current(self) -> str:
        return self.history[-1]

    def navigate(self, path: str, *, state: str | None = None) -> None:
        logger.debug("navigate %s -> %s", self.current, path)
        self.history.append(path)
        self.state = state


class LocalStorage:
    """String key/value store, persisted to a JSON file when ``path`` is given."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._lock = Lock()
        self._items: dict[str, str] = {}
        if path is not None and path.exists():
            with path.open("r", encoding="utf-8") as handle:
                loaded = json.load(handle)
            if not isinstance(loaded, dict):
                raise ValueError(f"Storage file {path} must contain a JSON object")
            self._items = {str(key): str(value) for key, value in loaded.items()}

    def _flush_locked(self) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as handle:
            json.dump(self._items, handle, ensure_ascii=False, indent=2)

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = str(value)
            self._flush_locked()

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)
            self._flush_locked()


class AuthContext:
    """Signed-in user and token, restored from storage on construction."""

    def __init__(self, storage: LocalStorage | None = None) -> None:
        self.storage = storage or LocalStorage()
        self.user: Mapping[str, Any] | None = None
        self.token: str = ""
        self._restore()

    def _restore(self) -> None:
        raw = self.storage.get_item(AUTH_STORAGE_KEY)
        if not raw:
            return
        try:
            saved = json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable auth entry in storage")
            self.storage.remove_item(AUTH_STORAGE_KEY)
            return
        if isinstance(saved, dict):
            self.user = saved.get("user")
            self.token = str(saved.get("token") or "")

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def set(self, user: Mapping[str, Any] | None, token: str | None) -> None:
        self.user = user
        self.token = token or ""

    def persist(self, payload: Mapping[str, Any]) -> None:
        """Store the raw login response the way the web client does."""

        self.storage.set_item(AUTH_STORAGE_KEY, json.dumps(dict(payload)))

    def clear(self) -> None:
        self.user = None
        self.token = ""
        self.storage.remove_item(AUTH_STORAGE_KEY)


__all__ = [
    "AUTH_STORAGE_KEY",
    "AuthContext",
    "LocalStorage",
    "Navigator",
    "Notifier",
    "Toast",
]
