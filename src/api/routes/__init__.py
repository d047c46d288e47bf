"""API route modules."""

from src.api.routes.appointments import router as appointments_router
from src.api.routes.events import router as events_router
from src.api.routes.health import router as health_router
from src.api.routes.notifications import router as notifications_router
from src.api.routes.reset import router as reset_router
from src.api.routes.tasks import router as tasks_router

__all__ = [
    "health_router",
    "tasks_router",
    "events_router",
    "appointments_router",
    "notifications_router",
    "reset_router",
]
