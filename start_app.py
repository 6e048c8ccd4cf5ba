#!/usr/bin/env python
"""Start the storefront API, taking the port from the environment."""
import logging
import os

import uvicorn

from app.core import logging_config  # noqa: F401

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    # Get port from environment, default to 8000
    port = int(os.environ.get("PORT", 8000))
    reload = os.environ.get("ENVIRONMENT", "development") == "development" and os.environ.get("RELOAD") == "1"

    logger.info(f"Starting Jewelry Storefront API on port {port}")

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=port,
        log_level=os.environ.get("LOG_LEVEL", "info").lower(),
        reload=reload,
    )
