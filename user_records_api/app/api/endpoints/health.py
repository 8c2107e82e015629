"""
Liveness endpoints.

``/health`` answers without touching the store, so it reports that the
process is serving requests, not that MongoDB is reachable.
"""

from fastapi import APIRouter

from user_records_api.app.core.config import settings
from user_records_api.app.schemas.user import HealthResponse, MessageResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    return HealthResponse(status="healthy")


@router.get("/", response_model=MessageResponse)
def root() -> MessageResponse:
    return MessageResponse(message=f"Your API is up and running on port {settings.port}!")
