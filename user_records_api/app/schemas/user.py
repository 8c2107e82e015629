"""
Pydantic models for user data.

``UserPayload`` is the body accepted by create and update.  Every field
is optional and defaults to an empty string, so a payload only fails to
decode when it is not a JSON object or a field has the wrong type.
``UserRead`` is what the API returns; it is validated straight from a
stored document, mapping MongoDB's ``_id`` to ``id``.
"""

from typing import Any

from bson import ObjectId
from pydantic import AliasChoices, BaseModel, Field, field_validator


class UserPayload(BaseModel):
    """Client-supplied user fields.  The identifier is never accepted from clients."""

    name: str = Field("", examples=["John Doe"])
    email: str = Field("", examples=["johndoe@example.com"])
    password: str = Field("", examples=["1234"])

    def to_document(self) -> dict:
        return {"name": self.name, "email": self.email, "password": self.password}


class UserRead(UserPayload):
    """Schema for reading a user from the API."""

    id: str = Field(
        ...,
        validation_alias=AliasChoices("_id", "id"),
        examples=["66f1c2a9e4b0a1b2c3d4e5f6"],
    )

    @field_validator("id", mode="before")
    @classmethod
    def _object_id_to_hex(cls, value: Any) -> str:
        if isinstance(value, ObjectId):
            return str(value)
        if isinstance(value, str) and ObjectId.is_valid(value):
            return value
        raise ValueError("id must be an ObjectId")


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
