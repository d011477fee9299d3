from fastapi import APIRouter

from batepapo.schemas.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Simple health check endpoint."""
    return HealthResponse()
