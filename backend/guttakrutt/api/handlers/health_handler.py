"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter

from guttakrutt.api.dependencies import StorageDep
from guttakrutt.config.settings import settings
from guttakrutt.shared.schemas.common import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(storage: StorageDep):
    """
    Health check with the active dialect and database reachability.

    Returns:
        HealthResponse; status "degraded" when the database ping fails
    """
    reachable = await storage.ping()
    return HealthResponse(
        status="healthy" if reachable else "degraded",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
        dialect=storage.dialect.value,
        database="connected" if reachable else "unreachable",
    )
