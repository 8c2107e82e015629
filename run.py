"""Entry point for the User Records API.

Serves the FastAPI application with uvicorn.  Configuration such as
MONGO_URI, DB_NAME and PORT is read from the environment or from a
`.env` file in the working directory.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from user_records_api.app.core.config import settings
from user_records_api.app.main import app


async def main() -> None:
    """Start the API server on the configured host and port."""
    logging.getLogger(__name__).info("Server is running on port %s", settings.port)
    # Logging is already configured by create_app; keep uvicorn from replacing it.
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_config=None)
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
