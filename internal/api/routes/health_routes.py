"""
Health Check API Routes.
"""

from fastapi import APIRouter

from internal.api.schemas import HealthResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Liveness probe; does not contact any provider",
    operation_id="health_check",
)
async def health_check():
    """Return {"status": "ok"} while the process is serving requests."""
    return HealthResponse(status="ok").model_dump()
