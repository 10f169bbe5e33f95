"""Resolve a requested date/hour to a single weather snapshot."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, tzinfo
from typing import Sequence
from zoneinfo import ZoneInfo

from dronecrm.core.errors import ProviderUnavailable
from dronecrm.services.weather import WeatherProvider, WeatherSnapshot

logger = logging.getLogger(__name__)

DEFAULT_FORECAST_HOUR = 12


def resolve_zone(tz: tzinfo | str | None) -> tzinfo:
    if tz is None:
        return ZoneInfo("UTC")
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def is_current_request(target_date: date | None, target_hour: int | None, now: datetime) -> bool:
    """True when the request means "now": no date, or today at the current hour."""

    if target_date is None:
        return True
    if target_date != now.date():
        return False
    return target_hour is None or target_hour == now.hour


def target_instant(
    target_date: date,
    target_hour: int | None,
    tz: tzinfo | str | None = None,
    default_hour: int = DEFAULT_FORECAST_HOUR,
) -> datetime:
    hour = default_hour if target_hour is None else target_hour
    return datetime.combine(target_date, time(hour=hour), tzinfo=resolve_zone(tz))


def nearest_snapshot(snapshots: Sequence[WeatherSnapshot], target: datetime) -> WeatherSnapshot:
    """Return the sample closest to ``target``; the earliest index wins a tie."""

    if not snapshots:
        raise ProviderUnavailable("forecast returned no samples")

    best = snapshots[0]
    best_diff = abs(best.timestamp_utc - target)
    for snapshot in snapshots[1:]:
        diff = abs(snapshot.timestamp_utc - target)
        if diff < best_diff:
            best, best_diff = snapshot, diff
    return best


def select_snapshot(
    provider: WeatherProvider,
    location: str,
    target_date: date | None = None,
    target_hour: int | None = None,
    *,
    now: datetime | None = None,
    tz: tzinfo | str | None = None,
    default_hour: int = DEFAULT_FORECAST_HOUR,
) -> WeatherSnapshot:
    """Current conditions for "now", otherwise the nearest forecast sample.

    Provider errors (``NotFound``, ``ProviderUnavailable``) propagate to the
    caller unchanged.
    """

    zone = resolve_zone(tz)
    current = now.astimezone(zone) if now is not None else datetime.now(zone)

    if is_current_request(target_date, target_hour, current):
        return provider.get_current(location)

    target = target_instant(target_date, target_hour, zone, default_hour)
    forecast = provider.get_forecast(location)
    logger.debug("Selecting forecast sample for %s at %s from %d samples", location, target, len(forecast))
    return nearest_snapshot(forecast, target)


__all__ = ["is_current_request", "nearest_snapshot", "resolve_zone", "select_snapshot", "target_instant"]
