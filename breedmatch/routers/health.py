"""
Health check endpoints.
"""
from fastapi import APIRouter

from ..models import HealthResponse
from ..services.llm import test_llm_connection
from .. import __version__

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check if the API is running."""
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/llm")
async def llm_health_check() -> dict:
    """Check whether the configured LLM provider answers."""
    ok, message = await test_llm_connection()
    return {"ok": ok, "message": message}
