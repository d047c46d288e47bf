"""
Full data reset endpoint.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_reset_use_case
from src.application.dto.responses import ResetResponse
from src.application.use_cases import ResetDataUseCase

router = APIRouter(prefix="/api/reset", tags=["reset"])


@router.post("", response_model=ResetResponse)
async def reset_all_data(
    use_case: ResetDataUseCase = Depends(get_reset_use_case),
) -> ResetResponse:
    """Delete every record and cancel every pending notification."""
    result = await use_case.execute()
    return ResetResponse(
        tasks=result.tasks,
        events=result.events,
        appointments=result.appointments,
        notifications=result.notifications,
    )
