"""Application use cases."""

from src.application.use_cases.manage_appointments import ManageAppointmentsUseCase
from src.application.use_cases.manage_events import ManageEventsUseCase
from src.application.use_cases.manage_tasks import ManageTasksUseCase
from src.application.use_cases.rescan_reminders import (
    RescanRemindersUseCase,
    RescanResult,
    RescanStatus,
)
from src.application.use_cases.reset_data import ResetDataUseCase, ResetResult

__all__ = [
    "ManageTasksUseCase",
    "ManageEventsUseCase",
    "ManageAppointmentsUseCase",
    "RescanRemindersUseCase",
    "RescanResult",
    "RescanStatus",
    "ResetDataUseCase",
    "ResetResult",
]
