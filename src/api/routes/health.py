"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from src.application.dto.responses import ComponentHealthResponse, HealthResponse

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version="1.0.0",
        uptime_seconds=time.time() - _start_time,
    )


async def _db_status() -> ComponentHealthResponse:
    from src.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        latency_ms = await pool.ping()
        return ComponentHealthResponse(name="sqlite", available=True, latency_ms=latency_ms)
    except Exception as e:
        return ComponentHealthResponse(name="sqlite", available=False, error=str(e))


def _scheduler_status() -> ComponentHealthResponse:
    from src.application.services import get_scheduler

    try:
        scheduler = get_scheduler()
        return ComponentHealthResponse(
            name="apscheduler",
            available=scheduler.running,
            error=None if scheduler.running else "scheduler is not running",
        )
    except Exception as e:
        return ComponentHealthResponse(name="apscheduler", available=False, error=str(e))


@router.get("/full", response_model=HealthResponse)
async def full_health_check() -> HealthResponse:
    """
    Full system health check.

    Tests the records database, the notification scheduler and reports
    the background task state.
    """
    from src.application.background import get_background_runner

    db_status = await _db_status()
    scheduler_status = _scheduler_status()

    if not db_status.available:
        status_str = "unhealthy"
    elif not scheduler_status.available:
        status_str = "degraded"
    else:
        status_str = "healthy"

    return HealthResponse(
        status=status_str,
        version="1.0.0",
        uptime_seconds=time.time() - _start_time,
        database=db_status,
        scheduler=scheduler_status,
        background_task=get_background_runner().state.value,
    )
