"""Root API routers."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from dronecrm.api.deps import get_db
from dronecrm.core.config import settings

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["system"])


@health_router.get("/health", summary="Service health probe")
def healthcheck(session: Session = Depends(get_db)) -> dict[str, str]:
    """Report database reachability and whether a weather API key is set."""

    try:
        session.connection().execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as exc:
        logger.warning("Health check could not reach the database: %s", exc)
        database = "unavailable"
    return {
        "status": "ok" if database == "ok" else "degraded",
        "version": settings.app_version,
        "database": database,
        "weather_provider": "configured" if settings.openweather_api_key else "missing_api_key",
    }
