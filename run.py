#!/usr/bin/env python3
"""
Development server runner for the Breed Match API.

Usage:
    python run.py

Or with uvicorn directly:
    uvicorn breedmatch.main:app --reload --host 0.0.0.0 --port 8000
"""
import os

import uvicorn
from dotenv import load_dotenv

from breedmatch.config import get_settings
from breedmatch.utils.logging import get_logger, setup_logging

logger = get_logger("breedmatch.run")


def main():
    load_dotenv()
    settings = get_settings()
    setup_logging("DEBUG" if settings.debug else settings.log_level)

    port = int(os.environ.get("PORT", 8000))
    host = os.environ.get("HOST", "0.0.0.0")

    logger.info(f"Serving {settings.app_name} on http://{host}:{port}")
    logger.info(f"  API docs: http://localhost:{port}/docs, health: /api/health")

    uvicorn.run(
        "breedmatch.main:app",
        host=host,
        port=port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
