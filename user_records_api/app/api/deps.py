"""
Shared FastAPI dependencies.

The store is attached to ``app.state`` by ``create_app``; handlers get
a ``UserService`` bound to it through ``get_user_service``.  Path
identifiers are validated by ``parse_user_id`` and request bodies are
decoded by ``parse_user_payload``, both before any store call.
"""

from typing import Iterable, List, Tuple

from bson import ObjectId
from fastapi import Depends, HTTPException, Request, status
from pydantic import ValidationError

from user_records_api.app.schemas.user import UserPayload
from user_records_api.app.services.user_service import UserService
from user_records_api.app.store import UserStore


def get_store(request: Request) -> UserStore:
    return request.app.state.store


def get_user_service(store: UserStore = Depends(get_store)) -> UserService:
    return UserService(store)


def parse_user_id(user_id: str) -> ObjectId:
    """Convert the ``{user_id}`` path segment to an ``ObjectId``.

    Anything other than 24 hexadecimal characters is rejected with 400.
    """
    if not ObjectId.is_valid(user_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid user ID")
    return ObjectId(user_id)


def client_error_details(errors: Iterable[dict], prefix: Tuple[str, ...] = ()) -> List[dict]:
    """Reduce pydantic errors to ``type``, ``loc`` and ``msg``.

    Submitted values are never echoed back, so passwords stay out of
    responses and non-finite numbers cannot break JSON encoding.
    """
    return [
        {"type": error["type"], "loc": [*prefix, *error["loc"]], "msg": error["msg"]}
        for error in errors
    ]


async def parse_user_payload(request: Request) -> UserPayload:
    """Decode the request body as a ``UserPayload``.

    The body is read as JSON whatever the ``Content-Type`` header says.
    Anything that does not decode is rejected with 400.
    """
    raw = await request.body()
    try:
        return UserPayload.model_validate_json(raw)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=client_error_details(exc.errors(), prefix=("body",)),
        ) from exc
