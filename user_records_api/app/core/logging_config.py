"""
Logging setup for the API process.

``setup_logging`` installs this service's handlers on the root logger
and routes uvicorn's own loggers through them, so application,
server and access lines share one format and one destination.  It can
be called again (e.g. by every ``create_app``) without duplicating
output: handlers installed by a previous call are replaced.
"""

import logging
from pathlib import Path
from typing import List

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER = "user_records_api.console"
FILE_HANDLER = "user_records_api.file"

# Loggers uvicorn configures for itself unless told otherwise.
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _build_handlers(config: Settings) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.set_name(CONSOLE_HANDLER)
    handlers: List[logging.Handler] = [console]

    if config.log_file:
        log_file = logging.FileHandler(Path(config.log_file).resolve(), encoding="utf-8")
        log_file.set_name(FILE_HANDLER)
        handlers.append(log_file)

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(config: Settings) -> None:
    """Configure root and uvicorn loggers from ``config``.

    ``config.log_level`` is a level name such as ``"DEBUG"``; unknown
    names fall back to ``INFO``.  When ``config.log_file`` is set, lines
    are also appended to that file.
    """
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() in (CONSOLE_HANDLER, FILE_HANDLER):
            root.removeHandler(handler)
            handler.close()
    for handler in _build_handlers(config):
        root.addHandler(handler)
    root.setLevel(level)

    # uvicorn's loggers keep no handlers of their own and propagate to root.
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
        uvicorn_logger.setLevel(level)
