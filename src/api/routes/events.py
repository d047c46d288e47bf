"""
Calendar event endpoints.
"""

from datetime import date

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_event_use_case
from src.application.dto.requests import CreateEventRequest, UpdateEventRequest
from src.application.dto.responses import ErrorResponse, EventListResponse, EventResponse
from src.application.use_cases import ManageEventsUseCase

router = APIRouter(prefix="/api/events", tags=["events"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_event(
    request: CreateEventRequest,
    use_case: ManageEventsUseCase = Depends(get_event_use_case),
) -> EventResponse:
    event = await use_case.create(request)
    return EventResponse.from_entity(event)


@router.get("", response_model=EventListResponse)
async def list_events(
    day: date | None = None,
    use_case: ManageEventsUseCase = Depends(get_event_use_case),
) -> EventListResponse:
    """List all events, or only those overlapping `day` (local calendar day)."""
    if day is not None:
        events = await use_case.list_for_day(day)
    else:
        events = await use_case.list_all()
    return EventListResponse(
        events=[EventResponse.from_entity(e) for e in events],
        total=len(events),
    )


@router.get("/{event_id}", response_model=EventResponse, responses=NOT_FOUND)
async def get_event(
    event_id: str,
    use_case: ManageEventsUseCase = Depends(get_event_use_case),
) -> EventResponse:
    return EventResponse.from_entity(await use_case.get(event_id))


@router.put("/{event_id}", response_model=EventResponse, responses=NOT_FOUND)
async def update_event(
    event_id: str,
    request: UpdateEventRequest,
    use_case: ManageEventsUseCase = Depends(get_event_use_case),
) -> EventResponse:
    event = await use_case.update(event_id, request)
    return EventResponse.from_entity(event)


@router.delete(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
)
async def delete_event(
    event_id: str,
    use_case: ManageEventsUseCase = Depends(get_event_use_case),
) -> None:
    await use_case.delete(event_id)
