from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, status

from straymap.core.config import settings
from straymap.core.range_policy import range_policy
from straymap.schemas.health import HealthCheckResponse, ServiceHealth
from straymap.services import animal_registry_service

router = APIRouter()


@router.get("/health")
async def health_check() -> HealthCheckResponse:
    """
    Comprehensive health check endpoint that verifies:
    - Roaming range table is loaded
    - Animal registry API availability

    Returns 200 if all services are healthy, 503 if any service is down.
    """
    range_policy_health = ServiceHealth(
        healthy=True,
        message=f"Roaming ranges loaded for {len(range_policy.ranges)} animal types",
    )
    registry_health = await animal_registry_service.animal_registry_service.health_check()

    overall_healthy = all([range_policy_health.healthy, registry_health.healthy])

    response = HealthCheckResponse(
        service="stray-map-backend",
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        healthy=overall_healthy,
        range_policy=range_policy_health,
        animal_registry=registry_health,
    )

    if overall_healthy:
        return response
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=response.model_dump()
    )
