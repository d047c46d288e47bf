"""
Pending notification and rescan endpoints.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from src.api.dependencies import get_notifications, get_runner
from src.application.background import BackgroundTaskRunner, TriggerSource
from src.application.dto.responses import (
    NotificationListResponse,
    PendingNotificationResponse,
    RescanResponse,
)
from src.core.services import NotificationStore

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
async def list_pending_notifications(
    notifications: NotificationStore = Depends(get_notifications),
) -> NotificationListResponse:
    """List notifications waiting to be delivered, soonest first."""
    pending = await notifications.pending()
    return NotificationListResponse(
        notifications=[PendingNotificationResponse.from_entity(p) for p in pending],
        total=len(pending),
    )


@router.post("/rescan", response_model=RescanResponse)
async def trigger_rescan(
    runner: BackgroundTaskRunner = Depends(get_runner),
) -> RescanResponse:
    """
    Run the background rescan now.

    Returns status `deferred` without scanning if a run is already in
    progress.
    """
    result = await runner.on_event(source=TriggerSource.MANUAL)
    payload = asdict(result)
    payload["status"] = result.status.value
    payload.pop("error", None)
    return RescanResponse(**payload)
