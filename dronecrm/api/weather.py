"""Weather conditions and flight advisory endpoints."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict

from dronecrm.api.deps import get_flight_limits, get_weather_dashboard, get_weather_provider
from dronecrm.core.config import settings
from dronecrm.core.errors import NotFound, ProviderUnavailable
from dronecrm.services.advisory import FlightLimits, FlightStatus, classify, spraying_badges
from dronecrm.services.forecast import select_snapshot
from dronecrm.services.notifications import NOTIFICATIONS
from dronecrm.services.weather import WeatherProvider, WeatherSnapshot
from dronecrm.services.weather_dashboard import DashboardState, WeatherDashboard

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather", tags=["weather"])


class SnapshotRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    timestamp_utc: dt.datetime
    temperature_c: float
    feels_like_c: float
    humidity_pct: int
    wind_speed_ms: float
    cloud_cover_pct: int
    visibility_meters: float
    precipitation_mm_per_hour: float
    location_name: str
    country_code: str
    description: str
    pressure_hpa: Optional[float] = None
    wind_direction_deg: Optional[float] = None


class AdvisoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: FlightStatus
    reasons: list[str]
    message: str


class BadgesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    wind_kmh: int
    visibility_km: int
    spraying_wind: bool
    no_rain: bool
    humidity_in_range: bool
    temperature_in_range: bool
    high_humidity: bool
    good_visibility: bool


class ConditionsResponse(BaseModel):
    snapshot: Optional[SnapshotRead] = None
    advisory: AdvisoryRead
    badges: Optional[BadgesRead] = None


class DashboardResponse(ConditionsResponse):
    location: Optional[str] = None
    target_date: Optional[dt.date] = None
    target_hour: Optional[int] = None
    sequence: int


def _conditions(snapshot: WeatherSnapshot | None, limits: FlightLimits) -> dict:
    return {
        "snapshot": SnapshotRead.model_validate(snapshot) if snapshot else None,
        "advisory": AdvisoryRead.model_validate(classify(snapshot, limits)),
        "badges": BadgesRead.model_validate(spraying_badges(snapshot, limits)) if snapshot else None,
    }


def _dashboard_response(state: DashboardState, limits: FlightLimits) -> DashboardResponse:
    return DashboardResponse(
        location=state.location,
        target_date=state.target_date,
        target_hour=state.target_hour,
        sequence=state.sequence,
        **_conditions(state.snapshot, limits),
    )


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFound):
        return HTTPException(status_code=404, detail=exc.detail)
    return HTTPException(status_code=503, detail="weather_provider_unavailable")


def location_param(
    location: str = Query(default=settings.default_location, description="City name, e.g. \"Campinas\""),
) -> str:
    cleaned = location.strip()
    if not cleaned:
        raise HTTPException(status_code=422, detail="location_required")
    return cleaned


@router.get("/conditions", response_model=ConditionsResponse)
def get_conditions(
    location: str = Depends(location_param),
    date: Optional[dt.date] = Query(default=None, description="Forecast date; omit for current conditions"),
    hour: Optional[int] = Query(default=None, ge=0, le=23),
    provider: WeatherProvider = Depends(get_weather_provider),
    limits: FlightLimits = Depends(get_flight_limits),
) -> ConditionsResponse:
    try:
        snapshot = select_snapshot(
            provider,
            location,
            date,
            hour,
            tz=settings.timezone,
            default_hour=settings.default_forecast_hour,
        )
    except (NotFound, ProviderUnavailable) as exc:
        logger.warning("Weather lookup failed for %s: %s", location, exc)
        NOTIFICATIONS.error(f"Could not load weather data for {location!r}.", context={"error": str(exc)})
        raise _http_error(exc) from exc
    return ConditionsResponse(**_conditions(snapshot, limits))


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    dashboard: WeatherDashboard = Depends(get_weather_dashboard),
) -> DashboardResponse:
    return _dashboard_response(dashboard.state, dashboard.limits)


@router.post("/dashboard/refresh", response_model=DashboardResponse)
def refresh_dashboard(
    location: str = Depends(location_param),
    date: Optional[dt.date] = Query(default=None),
    hour: Optional[int] = Query(default=None, ge=0, le=23),
    dashboard: WeatherDashboard = Depends(get_weather_dashboard),
) -> DashboardResponse:
    try:
        state = dashboard.refresh(location, date, hour)
    except (NotFound, ProviderUnavailable) as exc:
        raise _http_error(exc) from exc
    return _dashboard_response(state, dashboard.limits)


__all__ = ["router"]
