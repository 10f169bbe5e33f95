"""Flight and spraying advisory derived from a weather snapshot.

The classifier runs a fixed, ordered list of independent rules over the
snapshot. Every violated rule contributes its reason; the number of reasons
decides the status:

* no reasons      -> good
* one or two      -> warning
* three or more   -> bad

Wind and visibility are converted (m/s to km/h, metres to km) and rounded by
the helpers below before any comparison, and the display badges reuse the
same helpers so both always agree on the numbers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from dronecrm.services.weather import WeatherSnapshot


class FlightStatus(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    BAD = "bad"
    UNKNOWN = "unknown"


GOOD_MESSAGE = "Ideal conditions for flight and spraying"
UNKNOWN_MESSAGE = "Loading weather data..."
WARNING_PREFIX = "Attention: "
BAD_PREFIX = "Unfavorable conditions: "
# At or above this many violations the advisory is BAD.
BAD_THRESHOLD = 3


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def wind_speed_kmh(wind_speed_ms: float) -> int:
    return _round_half_up(wind_speed_ms * 3.6)


def visibility_km(visibility_meters: float) -> int:
    return _round_half_up(visibility_meters / 1000)


@dataclass(frozen=True)
class FlightLimits:
    """Thresholds used by the classifier and the spraying badges."""

    max_wind_kmh: int = 6
    max_precipitation_mm: float = 0.0
    min_visibility_km: int = 3
    max_cloud_cover_pct: int = 80
    min_humidity_pct: int = 50
    max_humidity_pct: int = 90
    min_temperature_c: float = 10.0
    max_temperature_c: float = 35.0

    @classmethod
    def from_settings(cls, settings) -> "FlightLimits":
        return cls(
            max_wind_kmh=settings.advisory_max_wind_kmh,
            max_precipitation_mm=settings.advisory_max_precipitation_mm,
            min_visibility_km=settings.advisory_min_visibility_km,
            max_cloud_cover_pct=settings.advisory_max_cloud_cover_pct,
            min_humidity_pct=settings.advisory_min_humidity_pct,
            max_humidity_pct=settings.advisory_max_humidity_pct,
            min_temperature_c=settings.advisory_min_temperature_c,
            max_temperature_c=settings.advisory_max_temperature_c,
        )


DEFAULT_LIMITS = FlightLimits()


@dataclass(frozen=True)
class FlightAdvisory:
    status: FlightStatus
    reasons: tuple[str, ...]
    message: str


Rule = tuple[str, Callable[[WeatherSnapshot, FlightLimits], bool]]

# Evaluation order is part of the contract: reasons are reported in this order.
RULES: list[Rule] = [
    (
        "wind too strong for spraying",
        lambda s, lim: wind_speed_kmh(s.wind_speed_ms) > lim.max_wind_kmh,
    ),
    (
        "rain detected",
        lambda s, lim: (s.precipitation_mm_per_hour or 0.0) > lim.max_precipitation_mm,
    ),
    (
        "low visibility",
        lambda s, lim: visibility_km(s.visibility_meters) < lim.min_visibility_km,
    ),
    (
        "sky too overcast",
        lambda s, lim: s.cloud_cover_pct > lim.max_cloud_cover_pct,
    ),
]


def classify(snapshot: WeatherSnapshot | None, limits: FlightLimits = DEFAULT_LIMITS) -> FlightAdvisory:
    """Classify flight/spraying suitability; ``None`` means not fetched yet."""

    if snapshot is None:
        return FlightAdvisory(status=FlightStatus.UNKNOWN, reasons=(), message=UNKNOWN_MESSAGE)

    reasons = tuple(reason for reason, violated in RULES if violated(snapshot, limits))
    if not reasons:
        return FlightAdvisory(status=FlightStatus.GOOD, reasons=(), message=GOOD_MESSAGE)
    if len(reasons) < BAD_THRESHOLD:
        return FlightAdvisory(
            status=FlightStatus.WARNING,
            reasons=reasons,
            message=WARNING_PREFIX + ", ".join(reasons),
        )
    return FlightAdvisory(
        status=FlightStatus.BAD,
        reasons=reasons,
        message=BAD_PREFIX + ", ".join(reasons),
    )


@dataclass(frozen=True)
class SprayingBadges:
    """Per-field display flags; not aggregated into the advisory status."""

    wind_kmh: int
    visibility_km: int
    spraying_wind: bool
    no_rain: bool
    humidity_in_range: bool
    temperature_in_range: bool
    high_humidity: bool
    good_visibility: bool


def spraying_badges(snapshot: WeatherSnapshot, limits: FlightLimits = DEFAULT_LIMITS) -> SprayingBadges:
    wind = wind_speed_kmh(snapshot.wind_speed_ms)
    visibility = visibility_km(snapshot.visibility_meters)
    return SprayingBadges(
        wind_kmh=wind,
        visibility_km=visibility,
        spraying_wind=wind <= limits.max_wind_kmh,
        no_rain=(snapshot.precipitation_mm_per_hour or 0.0) == 0,
        humidity_in_range=limits.min_humidity_pct <= snapshot.humidity_pct <= limits.max_humidity_pct,
        temperature_in_range=limits.min_temperature_c <= snapshot.temperature_c <= limits.max_temperature_c,
        high_humidity=snapshot.humidity_pct > 70,
        good_visibility=visibility > 5,
    )


__all__ = [
    "FlightStatus",
    "FlightAdvisory",
    "FlightLimits",
    "SprayingBadges",
    "DEFAULT_LIMITS",
    "RULES",
    "classify",
    "spraying_badges",
    "visibility_km",
    "wind_speed_kmh",
]
