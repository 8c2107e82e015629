"""
Store interface shared by every backend.

``UserStore`` is the narrow set of collection operations the service
layer relies on.  Handlers never see a database client directly: they
receive a store, so the real MongoDB backend and the in-memory backend
used in tests and local runs are interchangeable.

Filters, documents and updates are plain dictionaries in MongoDB query
syntax (``{"_id": oid}``, ``{"$set": {...}}``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

Document = Dict[str, Any]
ModelT = TypeVar("ModelT", bound=BaseModel)


class StoreError(Exception):
    """Any failure reported by a store backend.

    The message is the backend's own error text and is passed to
    clients unchanged.
    """


class DuplicateKeyError(StoreError):
    """A document with the same ``_id`` already exists."""


class NoDocumentsError(StoreError):
    """``find_one`` matched nothing."""

    def __init__(self, message: str = "no documents in result") -> None:
        super().__init__(message)


class DecodeError(StoreError):
    """A stored document could not be decoded into the requested model."""


class SingleResult:
    """Outcome of ``find_one``.

    Holds either the matched document, nothing, or the error raised by
    the lookup.  Errors are deferred until ``decode`` is called.
    """

    def __init__(self, document: Optional[Document] = None, error: Optional[StoreError] = None) -> None:
        self._document = document
        self._error = error

    def decode(self, model: Type[ModelT]) -> ModelT:
        if self._error is not None:
            raise self._error
        if self._document is None:
            raise NoDocumentsError()
        try:
            return model.model_validate(self._document)
        except ValidationError as exc:
            raise DecodeError(str(exc)) from exc


class DocumentCursor(ABC):
    """Forward-only iterator over query results.

    Use as a context manager so the cursor is released even when the
    consumer stops early or fails midway::

        with store.find_many({}) as cursor:
            for document in cursor:
                ...
    """

    def __enter__(self) -> "DocumentCursor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[Document]:
        return self

    @abstractmethod
    def __next__(self) -> Document:
        ...

    @abstractmethod
    def close(self) -> None:
        ...


class UserStore(ABC):
    """Capability interface over a single document collection.

    Implementations must be safe to call from several threads at once.
    """

    @abstractmethod
    def insert_one(self, document: Document) -> Any:
        """Persist ``document`` and return its ``_id``."""

    @abstractmethod
    def find_many(self, filter: Document) -> DocumentCursor:
        """Return a cursor over every document matching ``filter``."""

    @abstractmethod
    def find_one(self, filter: Document) -> SingleResult:
        """Look up the first document matching ``filter``."""

    @abstractmethod
    def delete_one(self, filter: Document) -> int:
        """Delete one matching document and return the deleted count."""

    @abstractmethod
    def update_one(self, filter: Document, update: Document) -> int:
        """Apply ``update`` to one matching document and return the matched count."""

    def close(self) -> None:
        """Release backend resources.  The default does nothing."""
