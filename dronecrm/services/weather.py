"""Remote weather provider integration (OpenWeatherMap)."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Protocol, Sequence

import httpx
from prometheus_client import Counter, Histogram

from dronecrm.core.errors import NotFound, ProviderUnavailable

logger = logging.getLogger(__name__)

# OpenWeatherMap omits visibility above its 10 km cap.
DEFAULT_VISIBILITY_M = 10000.0

PROVIDER_FETCH_SECONDS = Histogram(
    "dronecrm_weather_fetch_seconds",
    "Latency for OpenWeatherMap requests.",
    ["endpoint"],
)
PROVIDER_FAILURES = Counter(
    "dronecrm_weather_fetch_failures_total",
    "OpenWeatherMap requests that failed or returned unusable data.",
    ["endpoint"],
)


@dataclass(frozen=True)
class WeatherSnapshot:
    """Normalized observation or forecast sample for one instant and place."""

    timestamp_utc: datetime
    temperature_c: float
    feels_like_c: float
    humidity_pct: int
    wind_speed_ms: float
    cloud_cover_pct: int
    visibility_meters: float
    precipitation_mm_per_hour: float = 0.0
    location_name: str = ""
    country_code: str = ""
    description: str = ""
    pressure_hpa: float | None = None
    wind_direction_deg: float | None = None


class WeatherProvider(Protocol):
    def get_current(self, location: str) -> WeatherSnapshot: ...

    def get_forecast(self, location: str) -> Sequence[WeatherSnapshot]: ...


class OpenWeatherProvider:
    """Fetch current conditions and the 5 day / 3 hour forecast by city name."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openweathermap.org/data/2.5",
        timeout: float = 10.0,
        units: str = "metric",
        lang: str = "pt_br",
        client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.units = units
        self.lang = lang
        self.client = client or httpx.Client(timeout=timeout)

    def get_current(self, location: str) -> WeatherSnapshot:
        payload = self._request("weather", location)
        try:
            return self._parse_sample(
                payload,
                location_name=payload.get("name") or location,
                country_code=(payload.get("sys") or {}).get("country") or "",
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed current weather payload for %s: %s", location, exc)
            raise ProviderUnavailable(f"malformed current weather payload for {location!r}") from exc

    def get_forecast(self, location: str) -> list[WeatherSnapshot]:
        payload = self._request("forecast", location)
        city = payload.get("city") or {}
        entries = payload.get("list") or []
        try:
            return [
                self._parse_sample(
                    entry,
                    location_name=city.get("name") or location,
                    country_code=city.get("country") or "",
                )
                for entry in entries
            ]
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed forecast payload for %s: %s", location, exc)
            raise ProviderUnavailable(f"malformed forecast payload for {location!r}") from exc

    def _request(self, endpoint: str, location: str) -> dict[str, Any]:
        if not self.api_key:
            raise ProviderUnavailable("OPENWEATHER_API_KEY is not configured")

        url = f"{self.base_url}/{endpoint}"
        params = {
            "q": location,
            "appid": self.api_key,
            "units": self.units,
            "lang": self.lang,
        }
        started = time.perf_counter()
        try:
            logger.debug("Fetching OpenWeatherMap %s for %s", endpoint, location)
            response = self.client.get(url, params=params, timeout=self.timeout)
            PROVIDER_FETCH_SECONDS.labels(endpoint=endpoint).observe(time.perf_counter() - started)
            if response.status_code == 404:
                raise NotFound("location", location)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            PROVIDER_FAILURES.labels(endpoint=endpoint).inc()
            logger.warning("Failed to fetch OpenWeatherMap %s for %s: %s", endpoint, location, exc, exc_info=True)
            raise ProviderUnavailable(f"weather provider request failed: {exc}") from exc
        except ValueError as exc:
            PROVIDER_FAILURES.labels(endpoint=endpoint).inc()
            logger.warning("OpenWeatherMap returned invalid JSON for %s: %s", location, exc)
            raise ProviderUnavailable("weather provider returned invalid JSON") from exc

        if not isinstance(payload, dict):
            PROVIDER_FAILURES.labels(endpoint=endpoint).inc()
            raise ProviderUnavailable("weather provider returned an unexpected payload")
        return payload

    def _parse_sample(self, data: dict[str, Any], location_name: str, country_code: str) -> WeatherSnapshot:
        main = data["main"]
        wind = data.get("wind") or {}
        clouds = data.get("clouds") or {}
        conditions = data.get("weather") or [{}]

        visibility = _coerce_float(data.get("visibility"))
        return WeatherSnapshot(
            timestamp_utc=datetime.fromtimestamp(int(data["dt"]), tz=timezone.utc),
            temperature_c=float(main["temp"]),
            feels_like_c=float(main.get("feels_like", main["temp"])),
            humidity_pct=int(main["humidity"]),
            wind_speed_ms=_coerce_float(wind.get("speed")) or 0.0,
            cloud_cover_pct=int(clouds.get("all") or 0),
            visibility_meters=DEFAULT_VISIBILITY_M if visibility is None else visibility,
            precipitation_mm_per_hour=_hourly_rain(data.get("rain")),
            location_name=location_name,
            country_code=country_code,
            description=conditions[0].get("description") or "",
            pressure_hpa=_coerce_float(main.get("pressure")),
            wind_direction_deg=_coerce_float(wind.get("deg")),
        )


def _hourly_rain(rain: Any) -> float:
    """Rain volume as mm/h; forecast samples only report 3 h accumulations."""

    if not isinstance(rain, dict):
        return 0.0
    one_hour = _coerce_float(rain.get("1h"))
    if one_hour is not None:
        return one_hour
    three_hours = _coerce_float(rain.get("3h"))
    if three_hours is not None:
        return three_hours / 3.0
    return 0.0


def _coerce_float(value: Any) -> float | None:
    try:
        if value is None:
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


__all__ = ["WeatherSnapshot", "WeatherProvider", "OpenWeatherProvider", "DEFAULT_VISIBILITY_M"]
