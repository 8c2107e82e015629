"""
MongoDB store backend built on pymongo.

Every collection call runs under ``pymongo.timeout`` so that a slow or
unreachable server surfaces as an error after ``timeout`` seconds
instead of hanging the request.  Driver exceptions are re-raised as
``StoreError`` subclasses carrying the driver's message.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import pymongo
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.cursor import Cursor
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from pymongo.errors import PyMongoError

from .base import Document, DocumentCursor, DuplicateKeyError, SingleResult, StoreError, UserStore

logger = logging.getLogger(__name__)


def _translate(exc: PyMongoError) -> StoreError:
    if isinstance(exc, MongoDuplicateKeyError):
        return DuplicateKeyError(str(exc))
    return StoreError(str(exc))


class MongoCursor(DocumentCursor):
    """Wraps a pymongo cursor; each batch fetch is bounded by the store timeout."""

    def __init__(self, cursor: Cursor, timeout: float) -> None:
        self._cursor = cursor
        self._timeout = timeout

    def __next__(self) -> Document:
        try:
            with pymongo.timeout(self._timeout):
                return next(self._cursor)
        except PyMongoError as exc:
            logger.error("Cursor iteration failed: %s", exc)
            raise _translate(exc) from exc

    def close(self) -> None:
        self._cursor.close()


class MongoUserStore(UserStore):
    """``UserStore`` over a pymongo ``Collection``.

    Parameters
    ----------
    collection : Collection
        The collection holding user documents.
    timeout : float
        Per-operation limit in seconds.
    client : Optional[MongoClient]
        Client owned by this store, closed by ``close``.  Pass ``None``
        when the caller manages the client's lifetime.
    """

    def __init__(self, collection: Collection, timeout: float = 5.0, client: Optional[MongoClient] = None) -> None:
        self._collection = collection
        self._timeout = timeout
        self._client = client

    @classmethod
    def connect(cls, uri: str, database: str, collection: str, timeout: float = 5.0) -> "MongoUserStore":
        """Create a client for ``uri``, verify it with a ping and return a store.

        Raises ``StoreError`` if the server cannot be reached.
        """
        client: MongoClient = MongoClient(uri, serverSelectionTimeoutMS=int(timeout * 1000))
        try:
            with pymongo.timeout(timeout):
                client.admin.command("ping")
        except PyMongoError as exc:
            client.close()
            raise _translate(exc) from exc
        logger.info("Connected to MongoDB database %s, collection %s", database, collection)
        return cls(client[database][collection], timeout=timeout, client=client)

    def insert_one(self, document: Document) -> Any:
        try:
            with pymongo.timeout(self._timeout):
                result = self._collection.insert_one(document)
        except PyMongoError as exc:
            logger.error("insert_one failed: %s", exc)
            raise _translate(exc) from exc
        return result.inserted_id

    def find_many(self, filter: Document) -> MongoCursor:
        try:
            with pymongo.timeout(self._timeout):
                cursor = self._collection.find(filter)
        except PyMongoError as exc:
            logger.error("find failed: %s", exc)
            raise _translate(exc) from exc
        return MongoCursor(cursor, self._timeout)

    def find_one(self, filter: Document) -> SingleResult:
        try:
            with pymongo.timeout(self._timeout):
                document = self._collection.find_one(filter)
        except PyMongoError as exc:
            logger.error("find_one failed: %s", exc)
            return SingleResult(error=_translate(exc))
        return SingleResult(document)

    def delete_one(self, filter: Document) -> int:
        try:
            with pymongo.timeout(self._timeout):
                result = self._collection.delete_one(filter)
        except PyMongoError as exc:
            logger.error("delete_one failed: %s", exc)
            raise _translate(exc) from exc
        return result.deleted_count

    def update_one(self, filter: Document, update: Document) -> int:
        try:
            with pymongo.timeout(self._timeout):
                result = self._collection.update_one(filter, update)
        except PyMongoError as exc:
            logger.error("update_one failed: %s", exc)
            raise _translate(exc) from exc
        return result.matched_count

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
