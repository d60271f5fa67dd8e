"""FastAPI application factory for the UI highlight generator."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..core.config import config
from ..core.logger import log
from .routes import batch_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="UI Highlight API",
        description="Draw leaf element bounds from layout dumps onto screenshots",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add request logging middleware
    @app.middleware("http")
    async def log_requests(request, call_next):
        log.info(f"API Request: {request.method} {request.url}")
        response = await call_next(request)
        log.info(f"API Response: {response.status_code}")
        return response

    app.include_router(batch_router, prefix="/api/v1/batch", tags=["batch"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "UI Highlight API",
            "version": __version__
        }

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "message": "UI Highlight API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health"
        }

    log.info("FastAPI application created successfully")
    return app
