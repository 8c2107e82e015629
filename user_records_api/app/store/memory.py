"""
In-process store backend.

Documents live in a dictionary keyed by ``_id`` and are copied on the
way in and out, so callers never share state with the store.  Filters
are equality matches on top-level keys and updates understand ``$set``,
which is all the service layer issues.  Used by the test-suite and by
``STORE_BACKEND=memory`` for running the API without MongoDB.
"""

from __future__ import annotations

import copy
import threading
from typing import Any, Dict, List

from .base import Document, DocumentCursor, DuplicateKeyError, SingleResult, StoreError, UserStore


def _matches(document: Document, filter: Document) -> bool:
    return all(key in document and document[key] == value for key, value in filter.items())


class InMemoryCursor(DocumentCursor):
    """Cursor over a snapshot taken when the query was issued."""

    def __init__(self, documents: List[Document]) -> None:
        self._documents = iter(documents)
        self.closed = False

    def __next__(self) -> Document:
        if self.closed:
            raise StopIteration
        return next(self._documents)

    def close(self) -> None:
        self.closed = True


class InMemoryUserStore(UserStore):
    """Thread-safe dictionary-backed implementation of ``UserStore``."""

    def __init__(self) -> None:
        self._documents: Dict[Any, Document] = {}
        self._lock = threading.Lock()

    def insert_one(self, document: Document) -> Any:
        if "_id" not in document:
            raise StoreError("document must carry an _id")
        doc_id = document["_id"]
        with self._lock:
            if doc_id in self._documents:
                raise DuplicateKeyError(f"E11000 duplicate key error dup key: {{ _id: {doc_id} }}")
            self._documents[doc_id] = copy.deepcopy(document)
        return doc_id

    def find_many(self, filter: Document) -> InMemoryCursor:
        with self._lock:
            found = [copy.deepcopy(doc) for doc in self._documents.values() if _matches(doc, filter)]
        return InMemoryCursor(found)

    def find_one(self, filter: Document) -> SingleResult:
        with self._lock:
            for doc in self._documents.values():
                if _matches(doc, filter):
                    return SingleResult(copy.deepcopy(doc))
        return SingleResult()

    def delete_one(self, filter: Document) -> int:
        with self._lock:
            for doc_id, doc in self._documents.items():
                if _matches(doc, filter):
                    del self._documents[doc_id]
                    return 1
        return 0

    def update_one(self, filter: Document, update: Document) -> int:
        unsupported = set(update) - {"$set"}
        if unsupported:
            raise StoreError(f"unsupported update operators: {', '.join(sorted(unsupported))}")
        changes = update.get("$set", {})
        if "_id" in changes:
            raise StoreError("Performing an update on the path '_id' would modify the immutable field '_id'")
        with self._lock:
            for doc in self._documents.values():
                if _matches(doc, filter):
                    doc.update(copy.deepcopy(changes))
                    return 1
        return 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)
