"""API dependencies."""

from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

from fastapi import Depends
from sqlmodel import Session

from dronecrm.core.config import settings
from dronecrm.db.session import get_session
from dronecrm.services.advisory import FlightLimits
from dronecrm.services.notifications import NOTIFICATIONS
from dronecrm.services.store import CRMStore
from dronecrm.services.weather import OpenWeatherProvider, WeatherProvider
from dronecrm.services.weather_dashboard import WeatherDashboard


def get_db() -> Generator[Session, None, None]:
    with get_session() as session:
        yield session


def get_crm_store(session: Session = Depends(get_db)) -> CRMStore:
    return CRMStore(session)


@lru_cache
def get_weather_provider() -> WeatherProvider:
    return OpenWeatherProvider(
        api_key=settings.openweather_api_key,
        base_url=settings.openweather_base_url,
        timeout=settings.weather_api_timeout,
        units=settings.openweather_units,
        lang=settings.openweather_lang,
    )


def get_flight_limits() -> FlightLimits:
    return FlightLimits.from_settings(settings)


@lru_cache
def get_weather_dashboard() -> WeatherDashboard:
    return WeatherDashboard(
        provider=get_weather_provider(),
        limits=get_flight_limits(),
        notifications=NOTIFICATIONS,
        tz=settings.timezone,
        default_hour=settings.default_forecast_hour,
    )
