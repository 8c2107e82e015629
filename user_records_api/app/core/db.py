"""
Database wiring.

``build_store`` turns the application settings into a concrete
``UserStore``.  MongoDB is the default backend; ``STORE_BACKEND=memory``
selects the in-process store, which is handy for demos and local
experiments but loses all data when the process exits.
"""

import logging

from .config import Settings
from ..store import InMemoryUserStore, MongoUserStore, StoreError, UserStore

logger = logging.getLogger(__name__)


def build_store(config: Settings) -> UserStore:
    """Create the store selected by ``config.store_backend``.

    Raises ``RuntimeError`` when the backend is unknown, when
    ``MONGO_URI`` is missing, or when MongoDB cannot be reached.
    """
    backend = config.store_backend
    if backend == "memory":
        logger.warning("Using in-memory store; data will not survive a restart")
        return InMemoryUserStore()
    if backend != "mongo":
        raise RuntimeError(f"Unknown STORE_BACKEND {backend!r}; expected 'mongo' or 'memory'")
    if not config.mongo_uri:
        raise RuntimeError("MongoDB URI is not set in environment variables")
    try:
        return MongoUserStore.connect(
            config.mongo_uri,
            config.db_name,
            config.collection_name,
            timeout=config.store_timeout,
        )
    except StoreError as exc:
        raise RuntimeError(f"Failed to connect to MongoDB: {exc}") from exc
