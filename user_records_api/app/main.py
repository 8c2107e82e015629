"""
Main entrypoint for the User Records API.

This module assembles the FastAPI application, sets up logging,
registers error handlers and includes the routers.  ``create_app``
builds and configures the app; ``app`` is the instance created at
import time, so it can be served directly, e.g.::

    uvicorn user_records_api.app.main:app --reload

When ``create_app`` is given a store, that store is used as-is and left
open on shutdown.  Otherwise the store selected by the settings is
built during startup and closed on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.deps import client_error_details
from .api.router import router
from .core.config import settings
from .core.db import build_store
from .core.logging_config import setup_logging
from .store import StoreError, UserStore

logger = logging.getLogger(__name__)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Parameters FastAPI validates itself; bodies are decoded by parse_user_payload.
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": client_error_details(exc.errors())},
    )


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


def create_app(store: Optional[UserStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[UserStore]
        Store to serve requests from.  If omitted, one is built from
        ``settings`` when the application starts.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the startup hook
    # below can safely log messages.
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if store is not None:
            yield
            return
        app.state.store = build_store(settings)
        try:
            yield
        finally:
            app.state.store.close()

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    if store is not None:
        app.state.store = store

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.include_router(router)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
