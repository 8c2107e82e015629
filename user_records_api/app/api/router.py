"""
Top-level router.

Aggregates the domain routers.  User routes live under ``/users``;
liveness routes sit at the root.
"""

from fastapi import APIRouter

from .endpoints import health, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(health.router, tags=["health"])
