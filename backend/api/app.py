"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.graph import reset_graph_client
from modules.auth.routes import router as auth_router
from modules.catalog.routes import router as catalog_router
from modules.subscriptions.routes import (
    checkout_router,
    plans_router,
    router as subscriptions_router,
)
from .middleware.errors import register_error_handlers
from .routes import health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic. The graph driver is closed on shutdown.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    # Shutdown
    reset_graph_client()
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Subscription movie catalog backed by a graph database",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_error_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(plans_router, prefix="/api/plans", tags=["plans"])
    app.include_router(catalog_router, prefix="/api/genres", tags=["catalog"])
    app.include_router(checkout_router, prefix="/api/checkout", tags=["checkout"])
    app.include_router(subscriptions_router, prefix="/api/subscriptions", tags=["subscriptions"])

    return app


# Application instance for uvicorn
app = create_app()
