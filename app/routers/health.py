"""Health check endpoint."""
from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from app.config import get_settings
from app.models import HealthResponse
from app.services import get_redis_cache, get_audit_client

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check health status of the API and all dependencies."
)
async def health_check():
    """
    Check health of all dependencies.

    Returns 200 if all healthy, 503 if any unhealthy. Scoring itself has no
    dependencies, so a degraded service still answers score requests.
    """
    settings = get_settings()
    dependencies: dict[str, str] = {}

    # Check Redis
    try:
        redis = get_redis_cache()
        redis_healthy, redis_error = await redis.health_check()
        dependencies["redis"] = "healthy" if redis_healthy else f"unhealthy: {redis_error}"
    except Exception as e:
        dependencies["redis"] = f"unhealthy: {str(e)}"

    # Check audit service
    try:
        audit = get_audit_client()
        audit_healthy, audit_error = await audit.ping()
        dependencies["audit_service"] = "healthy" if audit_healthy else f"unhealthy: {audit_error}"
    except Exception as e:
        dependencies["audit_service"] = f"unhealthy: {str(e)}"

    # Determine overall status
    all_healthy = all(v == "healthy" for v in dependencies.values())
    overall_status = "healthy" if all_healthy else "degraded"

    response = HealthResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
        dependencies=dependencies
    )

    # Return 503 if degraded
    if not all_healthy:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump()
        )

    return response
