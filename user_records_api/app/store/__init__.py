"""
Data-store layer.

``UserStore`` defines the operations the service layer needs from a
document collection.  ``MongoUserStore`` talks to MongoDB through
pymongo; ``InMemoryUserStore`` keeps everything in process memory.
"""

from .base import (
    DecodeError,
    DocumentCursor,
    DuplicateKeyError,
    NoDocumentsError,
    SingleResult,
    StoreError,
    UserStore,
)
from .memory import InMemoryUserStore
from .mongo import MongoUserStore

__all__ = [
    "DecodeError",
    "DocumentCursor",
    "DuplicateKeyError",
    "InMemoryUserStore",
    "MongoUserStore",
    "NoDocumentsError",
    "SingleResult",
    "StoreError",
    "UserStore",
]
