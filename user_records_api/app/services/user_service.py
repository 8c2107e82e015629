"""
Business logic for users.

``UserService`` translates between API schemas and stored documents and
issues the store calls for each operation.  It receives its store at
construction time; nothing here reaches for a global connection.
Store failures propagate unchanged as ``StoreError``; an operation that
matched no document raises ``UserNotFoundError``.
"""

import logging
from typing import List

from bson import ObjectId
from pydantic import ValidationError

from ..schemas.user import UserPayload, UserRead
from ..store import NoDocumentsError, UserStore

logger = logging.getLogger(__name__)


class UserNotFoundError(LookupError):
    """No stored user has the requested identifier."""

    def __init__(self, user_id: ObjectId) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class UserService:
    """CRUD operations on users backed by a ``UserStore``."""

    def __init__(self, store: UserStore) -> None:
        self.store = store

    def create_user(self, data: UserPayload) -> UserRead:
        """Assign a fresh identifier, persist the user and return it."""
        user_id = ObjectId()
        document = {"_id": user_id, **data.to_document()}
        self.store.insert_one(document)
        logger.info("Created user %s", user_id)
        return UserRead.model_validate(document)

    def list_users(self) -> List[UserRead]:
        """Return every stored user.

        Documents that cannot be decoded are logged and skipped; errors
        from the store itself abort the listing.
        """
        users: List[UserRead] = []
        with self.store.find_many({}) as cursor:
            for document in cursor:
                try:
                    users.append(UserRead.model_validate(document))
                except ValidationError as exc:
                    logger.warning("Skipping undecodable user document %r: %s", document.get("_id"), exc)
        logger.info("Listed %d users", len(users))
        return users

    def get_user(self, user_id: ObjectId) -> UserRead:
        try:
            return self.store.find_one({"_id": user_id}).decode(UserRead)
        except NoDocumentsError:
            raise UserNotFoundError(user_id)

    def update_user(self, user_id: ObjectId, data: UserPayload) -> None:
        """Overwrite name, email and password of an existing user.

        Fields missing from the payload were decoded as empty strings and
        are written as such.
        """
        matched = self.store.update_one({"_id": user_id}, {"$set": data.to_document()})
        if matched == 0:
            raise UserNotFoundError(user_id)
        logger.info("Updated user %s", user_id)

    def delete_user(self, user_id: ObjectId) -> None:
        deleted = self.store.delete_one({"_id": user_id})
        if deleted == 0:
            raise UserNotFoundError(user_id)
        logger.info("Deleted user %s", user_id)
