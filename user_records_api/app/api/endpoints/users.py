"""
User endpoints.

Create, list, fetch, update and delete user records.  Handlers are
plain functions, so FastAPI runs them in its threadpool and the
blocking store calls never stall the event loop.  Store failures are
turned into 500 responses by the application-level ``StoreError``
handler registered in ``main``.
"""

from typing import List

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException, status

from user_records_api.app.api.deps import get_user_service, parse_user_id, parse_user_payload
from user_records_api.app.schemas.user import MessageResponse, UserPayload, UserRead
from user_records_api.app.services.user_service import UserNotFoundError, UserService


router = APIRouter()

USER_NOT_FOUND = "User not found"


@router.post("", response_model=UserRead)
def create_user(
    user: UserPayload = Depends(parse_user_payload),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Create a user and return it with its generated ``id``."""
    return service.create_user(user)


@router.get("", response_model=List[UserRead])
def list_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    """Return all users.  Records that fail to decode are left out."""
    return service.list_users()


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: ObjectId = Depends(parse_user_id),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    try:
        return service.get_user(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND) from e


@router.put("/{user_id}", response_model=MessageResponse)
def update_user(
    user_id: ObjectId = Depends(parse_user_id),
    user: UserPayload = Depends(parse_user_payload),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Replace the name, email and password of an existing user.

    The whole payload is applied with ``$set``; omitted fields become
    empty strings.  Returns 404 when no user has this ``user_id``.
    """
    try:
        service.update_user(user_id, user)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND) from e
    return MessageResponse(message="User updated successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: ObjectId = Depends(parse_user_id),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    try:
        service.delete_user(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND) from e
    return MessageResponse(message="User deleted successfully")
