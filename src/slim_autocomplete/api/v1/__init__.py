"""API v1 router."""

from fastapi import APIRouter

from slim_autocomplete.api.v1 import autocomplete, health

router = APIRouter()

# Include sub-routers
router.include_router(health.router, tags=["Health"])
router.include_router(autocomplete.router, prefix="/autocomplete", tags=["Autocomplete"])
