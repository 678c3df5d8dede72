"""
Breed Match - FastAPI Backend

Main application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .routers import analyze_router, health_router
from .utils.logging import get_logger, setup_logging
from . import __version__

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    setup_logging("DEBUG" if settings.debug else settings.log_level)

    logger.info(f"Starting Breed Match API v{__version__}")
    logger.info(f"  LLM Provider: {settings.llm_provider}")
    logger.info(f"  CORS Origins: {settings.cors_origins}")
    logger.info(f"  TheCatAPI key: {'set' if settings.thecatapi_key else 'not set'}")

    yield

    logger.info("Shutting down...")


def create_app() -> FastAPI:
    """Create the FastAPI app."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Find out which dog (or cat) breed you look like",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(analyze_router, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.app_name,
            "version": __version__,
            "docs": "/docs",
            "health": "/api/health",
        }

    return app


# For running with uvicorn directly
app = create_app()
