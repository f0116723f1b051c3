"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    identity: str


def _configured(*values: str) -> str:
    return "configured" if all(values) else "not_configured"


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

    Reports whether the Supabase database (service role) and identity
    (anon key) clients can be built.
    """
    settings = get_settings()
    database = _configured(settings.supabase_url, settings.supabase_service_role_key)
    identity = _configured(settings.supabase_url, settings.supabase_anon_key)
    ready = database == identity == "configured"
    return ReadinessResponse(
        status="ready" if ready else "degraded",
        database=database,
        identity=identity,
    )
