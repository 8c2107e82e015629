"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  A ``.env`` file in the working directory, if
present, is loaded first so that local development does not require
exporting variables by hand.  Defaults are provided for everything
except the MongoDB connection string.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _port_from_env(default: int = 5000) -> int:
    # An empty PORT is treated the same as an unset one.
    value = os.getenv("PORT", "").strip()
    return int(value) if value else default


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "User Records API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = _port_from_env()

    # Which store implementation backs the API: ``mongo`` for a real
    # MongoDB deployment or ``memory`` for a throwaway in-process store.
    store_backend: str = os.getenv("STORE_BACKEND", "mongo").lower()

    # MongoDB connection string.  Required when ``store_backend`` is
    # ``mongo``; the application refuses to start without it.
    mongo_uri: str = os.getenv("MONGO_URI", "")
    db_name: str = os.getenv("DB_NAME", "userdb")
    collection_name: str = os.getenv("COLLECTION_NAME", "users")

    # Upper bound, in seconds, applied to every individual store call.
    store_timeout: float = float(os.getenv("STORE_TIMEOUT", "5"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
