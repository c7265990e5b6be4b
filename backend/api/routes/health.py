"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging
from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from shared.config import get_settings
from ..dependencies import get_graph

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(response: Response, graph=Depends(get_graph)) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Returns 503 while the graph database cannot be reached.
    """
    if graph.verify_connectivity():
        return ReadinessResponse(status="ready", database="connected")

    logger.warning("Readiness check failed: graph database unreachable")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(status="not_ready", database="unavailable")
