"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings
from shared.database import is_database_configured

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    stripe: str
    auth: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports which external integrations are configured. Does not make
    network calls.
    """
    settings = get_settings()
    database = "configured" if is_database_configured() else "missing"
    stripe = "configured" if settings.stripe_secret_key and settings.stripe_webhook_secret else "missing"
    auth = "configured" if settings.supabase_jwt_secret else "missing"

    ready = all(value == "configured" for value in (database, stripe, auth))
    return ReadinessResponse(
        status="ready" if ready else "degraded",
        database=database,
        stripe=stripe,
        auth=auth,
    )
