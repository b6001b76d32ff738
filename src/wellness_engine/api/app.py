"""FastAPI application for the wellness scoring engine."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import Settings, get_settings
from ..utils.log_sanitizer import configure_logging
from .exception_handlers import register_exception_handlers
from .routes import scores


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting Wellness Engine API v%s", __version__)
    yield
    logger.info("Shutting down Wellness Engine API")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Wellness Engine API",
        description="Explainable burnout and readiness scoring",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(scores.router, prefix="/api/v1", tags=["scores"])

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "Wellness Engine API",
            "version": __version__,
            "status": "healthy",
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
