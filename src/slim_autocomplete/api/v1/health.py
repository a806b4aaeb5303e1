"""Health check endpoint."""

from fastapi import APIRouter

from slim_autocomplete import __version__
from slim_autocomplete.schemas.common import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for monitoring and load balancer health checks."""
    return HealthResponse(status="healthy", version=__version__)
