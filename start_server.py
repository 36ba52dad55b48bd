#!/usr/bin/env python3
"""
Startup script for the Task API
Runs uvicorn with host/port/reload taken from the environment
"""

import logging

import uvicorn

from app.config.settings import settings
from app.utils.logger import configure_logging

logger = logging.getLogger(__name__)


def main():
    configure_logging()

    logger.info("Starting Task API server...")
    logger.info(f"Host: {settings.HOST}")
    logger.info(f"Port: {settings.PORT}")
    logger.info(f"Reload: {settings.RELOAD}")

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )

if __name__ == "__main__":
    main()
