# app/core/logging_config.py
"""
Logging setup shared by the API process and the launcher.

App loggers follow LOG_LEVEL; HTTP client and database libraries only
report warnings so geocoder and document store traffic does not flood
the output.
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

QUIET_LOGGERS = (
    "httpx",
    "httpcore",
    "sqlalchemy",
    "sqlalchemy.engine",
    "asyncpg",
)


def resolve_level(name: Optional[str]) -> int:
    """Level for a name like 'debug'; unknown names fall back to INFO"""
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[str] = None) -> int:
    """
    Configure the root handler and per-library levels.

    Args:
        level: Level name, defaults to the LOG_LEVEL environment variable

    Returns:
        The numeric level applied to app loggers
    """
    app_level = resolve_level(level or os.environ.get("LOG_LEVEL"))

    logging.basicConfig(level=app_level, format=LOG_FORMAT, handlers=[logging.StreamHandler()])

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    for name in ("app", "__main__"):
        logging.getLogger(name).setLevel(app_level)

    logging.getLogger(__name__).debug(f"Logging configured at level: {logging.getLevelName(app_level)}")
    return app_level


# Auto-configure when module is imported
configure_logging()
