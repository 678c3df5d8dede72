"""
FastAPI dependencies for dependency injection.
"""
from typing import AsyncIterator

import httpx

from .config import get_settings


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """
    HTTP client for the breed image providers, scoped to one request.

    Carries the request timeout and the TheCatAPI key (when configured).
    """
    settings = get_settings()
    headers = {}
    if settings.thecatapi_key:
        headers["x-api-key"] = settings.thecatapi_key

    async with httpx.AsyncClient(
        timeout=settings.upstream_timeout_seconds,
        headers=headers,
    ) as client:
        yield client
