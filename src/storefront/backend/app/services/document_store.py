"""Mongo-style document collections backed by memory or SQLite."""

from __future__ import annotations

import json
import os
import secrets
import sqlite3
from collections import OrderedDict
from copy import deepcopy
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable, Dict, Iterable, List, Mapping, Sequence, Tuple

Document = Dict[str, Any]
Query = Mapping[str, Any]
SortSpec = Tuple[str, int]

ASCENDING = 1
DESCENDING = -1


def new_object_id() -> str:
    """Return a 24 character hexadecimal identifier."""

    return secrets.token_hex(12)


def _matches(document: Mapping[str, Any], query: Query | None) -> bool:
    """Return ``True`` when ``document`` satisfies every clause of ``query``.

    A clause value may be a plain value (equality) or a callable predicate
    receiving the field value, which covers ranges, membership and
    case-insensitive searches without a query language.
    """

    if not query:
        return True
    for field, expected in query.items():
        value = document.get(field)
        if callable(expected):
            if not expected(value):
                return False
        elif value != expected:
            return False
    return True


def _select(
    documents: Iterable[Document],
    query: Query | None,
    *,
    sort: SortSpec | None,
    skip: int,
    limit: int | None,
    exclude: Sequence[str],
) -> List[Document]:
    selected = [document for document in documents if _matches(document, query)]
    if sort is not None:
        field, direction = sort
        if direction == DESCENDING:
            # Ties keep newest-inserted first.
            selected.reverse()
        selected.sort(key=lambda item: item.get(field) or "", reverse=direction == DESCENDING)
    if skip:
        selected = selected[skip:]
    if limit is not None:
        selected = selected[:limit]
    return [
        {key: deepcopy(value) for key, value in document.items() if key not in exclude}
        for document in selected
    ]


class InMemoryDocumentStore:
    """Thread-safe in-memory collections keyed by ``_id``."""

    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._collections: Dict[str, "OrderedDict[str, Document]"] = {}
        self._lock = Lock()

    def _collection_locked(self, name: str) -> "OrderedDict[str, Document]":
        return self._collections.setdefault(name, OrderedDict())

    def insert(self, collection: str, document: Mapping[str, Any]) -> Document:
        now = self._clock().isoformat()
        stored: Document = {**deepcopy(dict(document)), "_id": new_object_id()}
        stored.setdefault("createdAt", now)
        stored["updatedAt"] = now
        with self._lock:
            self._collection_locked(collection)[stored["_id"]] = stored
        return deepcopy(stored)

    def get(self, collection: str, document_id: str) -> Document:
        with self._lock:
            document = self._collection_locked(collection).get(document_id)
            if document is None:
                raise KeyError(document_id)
            return deepcopy(document)

    def find(
        self,
        collection: str,
        query: Query | None = None,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int | None = None,
        exclude: Sequence[str] = (),
    ) -> List[Document]:
        with self._lock:
            documents = list(self._collection_locked(collection).values())
        return _select(documents, query, sort=sort, skip=skip, limit=limit, exclude=exclude)

    def find_one(self, collection: str, query: Query) -> Document | None:
        matches = self.find(collection, query, limit=1)
        return matches[0] if matches else None

    def count(self, collection: str, query: Query | None = None) -> int:
        with self._lock:
            documents = list(self._collection_locked(collection).values())
        return sum(1 for document in documents if _matches(document, query))

    def update(self, collection: str, document_id: str, changes: Mapping[str, Any]) -> Document:
        with self._lock:
            documents = self._collection_locked(collection)
            document = documents.get(document_id)
            if document is None:
                raise KeyError(document_id)
            document.update(deepcopy(dict(changes)))
            document["_id"] = document_id
            document["updatedAt"] = self._clock().isoformat()
            return deepcopy(document)

    def delete(self, collection: str, document_id: str) -> Document:
        with self._lock:
            document = self._collection_locked(collection).pop(document_id, None)
        if document is None:
            raise KeyError(document_id)
        return deepcopy(document)


class SQLiteDocumentStore:
    """SQLite-backed collections storing each document as a JSON payload."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._path = str(path)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._lock = Lock()
        self._initialise()

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._path, check_same_thread=False)
        connection.execute("PRAGMA journal_mode=WAL")
        connection.execute("PRAGMA synchronous=NORMAL")
        connection.row_factory = sqlite3.Row
        return connection

    def _initialise(self) -> None:
        with self._connect() as connection:
            connection.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    collection TEXT NOT NULL,
                    id TEXT NOT NULL,
                    payload TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    PRIMARY KEY (collection, id)
                )
                """
            )

    def _load_all(self, collection: str) -> List[Document]:
        with self._lock:
            with self._connect() as connection:
                rows = connection.execute(
                    "SELECT payload FROM documents WHERE collection = ? ORDER BY created_at ASC, rowid ASC",
                    (collection,),
                ).fetchall()
        return [json.loads(row["payload"]) for row in rows]

    def insert(self, collection: str, document: Mapping[str, Any]) -> Document:
        now = self._clock().isoformat()
        stored: Document = {**dict(document), "_id": new_object_id()}
        stored.setdefault("createdAt", now)
        stored["updatedAt"] = now
        with self._lock:
            with self._connect() as connection:
                connection.execute(
                    "INSERT INTO documents (collection, id, payload, created_at) VALUES (?, ?, ?, ?)",
                    (collection, stored["_id"], json.dumps(stored), stored["createdAt"]),
                )
        return stored

    def get(self, collection: str, document_id: str) -> Document:
        with self._lock:
            with self._connect() as connection:
                row = connection.execute(
                    "SELECT payload FROM documents WHERE collection = ? AND id = ?",
                    (collection, document_id),
                ).fetchone()
        if row is None:
            raise KeyError(document_id)
        return json.loads(row["payload"])

    def find(
        self,
        collection: str,
        query: Query | None = None,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int | None = None,
        exclude: Sequence[str] = (),
    ) -> List[Document]:
        return _select(
            self._load_all(collection), query, sort=sort, skip=skip, limit=limit, exclude=exclude
        )

    def find_one(self, collection: str, query: Query) -> Document | None:
        matches = self.find(collection, query, limit=1)
        return matches[0] if matches else None

    def count(self, collection: str, query: Query | None = None) -> int:
        return sum(1 for document in self._load_all(collection) if _matches(document, query))

    def update(self, collection: str, document_id: str, changes: Mapping[str, Any]) -> Document:
        with self._lock:
            with self._connect() as connection:
                row = connection.execute(
                    "SELECT payload FROM documents WHERE collection = ? AND id = ?",
                    (collection, document_id),
                ).fetchone()
                if row is None:
                    raise KeyError(document_id)
                document: Document = json.loads(row["payload"])
                document.update(dict(changes))
                document["_id"] = document_id
                document["updatedAt"] = self._clock().isoformat()
                connection.execute(
                    "UPDATE documents SET payload = ? WHERE collection = ? AND id = ?",
                    (json.dumps(document), collection, document_id),
                )
        return document

    def delete(self, collection: str, document_id: str) -> Document:
        document = self.get(collection, document_id)
        with self._lock:
            with self._connect() as connection:
                connection.execute(
                    "DELETE FROM documents WHERE collection = ? AND id = ?",
                    (collection, document_id),
                )
        return document


DocumentStore = InMemoryDocumentStore | SQLiteDocumentStore


__all__ = [
    "ASCENDING",
    "DESCENDING",
    "DocumentStore",
    "InMemoryDocumentStore",
    "SQLiteDocumentStore",
    "new_object_id",
]
