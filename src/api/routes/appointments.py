"""
Appointment endpoints.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_appointment_use_case
from src.application.dto.requests import CreateAppointmentRequest, UpdateAppointmentRequest
from src.application.dto.responses import (
    AppointmentListResponse,
    AppointmentResponse,
    ErrorResponse,
)
from src.application.use_cases import ManageAppointmentsUseCase

router = APIRouter(prefix="/api/appointments", tags=["appointments"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_appointment(
    request: CreateAppointmentRequest,
    use_case: ManageAppointmentsUseCase = Depends(get_appointment_use_case),
) -> AppointmentResponse:
    """Create an appointment; its reminder fires 30 minutes before."""
    appointment = await use_case.create(request)
    return AppointmentResponse.from_entity(appointment)


@router.get("", response_model=AppointmentListResponse)
async def list_appointments(
    use_case: ManageAppointmentsUseCase = Depends(get_appointment_use_case),
) -> AppointmentListResponse:
    appointments = await use_case.list_all()
    return AppointmentListResponse(
        appointments=[AppointmentResponse.from_entity(a) for a in appointments],
        total=len(appointments),
    )


@router.get("/{appointment_id}", response_model=AppointmentResponse, responses=NOT_FOUND)
async def get_appointment(
    appointment_id: str,
    use_case: ManageAppointmentsUseCase = Depends(get_appointment_use_case),
) -> AppointmentResponse:
    return AppointmentResponse.from_entity(await use_case.get(appointment_id))


@router.put("/{appointment_id}", response_model=AppointmentResponse, responses=NOT_FOUND)
async def update_appointment(
    appointment_id: str,
    request: UpdateAppointmentRequest,
    use_case: ManageAppointmentsUseCase = Depends(get_appointment_use_case),
) -> AppointmentResponse:
    appointment = await use_case.update(appointment_id, request)
    return AppointmentResponse.from_entity(appointment)


@router.delete(
    "/{appointment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
)
async def delete_appointment(
    appointment_id: str,
    use_case: ManageAppointmentsUseCase = Depends(get_appointment_use_case),
) -> None:
    await use_case.delete(appointment_id)
