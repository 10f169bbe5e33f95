"""API router definitions."""

from fastapi import APIRouter

from .appointments import router as appointments_router
from .dashboard import router as dashboard_router
from .leads import router as leads_router
from .logs import router as logs_router
from .metrics import router as metrics_router
from .notifications import router as notifications_router
from .routes import health_router
from .tasks import router as tasks_router
from .weather import router as weather_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(leads_router)
api_router.include_router(appointments_router)
api_router.include_router(tasks_router)
api_router.include_router(weather_router)
api_router.include_router(dashboard_router)
api_router.include_router(notifications_router)
api_router.include_router(logs_router)
api_router.include_router(metrics_router)

__all__ = ["api_router"]
