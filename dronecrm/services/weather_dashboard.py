"""Latest-request-wins state behind the weather dashboard."""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from dronecrm.core.errors import DroneCRMError, NotFound
from dronecrm.services.advisory import DEFAULT_LIMITS, FlightAdvisory, FlightLimits, classify
from dronecrm.services.forecast import DEFAULT_FORECAST_HOUR, is_current_request, resolve_zone, select_snapshot
from dronecrm.services.notifications import NotificationLog
from dronecrm.services.weather import WeatherProvider, WeatherSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardState:
    location: str | None
    target_date: date | None
    target_hour: int | None
    snapshot: WeatherSnapshot | None
    advisory: FlightAdvisory
    sequence: int


class WeatherDashboard:
    """Holds the snapshot currently on display.

    Every refresh takes a ticket from an increasing sequence. A result is
    only applied while its ticket is the newest one issued, so a slow
    request that finishes after a newer one is discarded. Failed refreshes
    keep the previous snapshot on display.
    """

    def __init__(
        self,
        provider: WeatherProvider,
        limits: FlightLimits = DEFAULT_LIMITS,
        notifications: NotificationLog | None = None,
        tz: tzinfo | str | None = None,
        default_hour: int = DEFAULT_FORECAST_HOUR,
    ) -> None:
        self.provider = provider
        self.limits = limits
        self.notifications = notifications or NotificationLog()
        self.tz = tz
        self.default_hour = default_hour
        self._tickets = itertools.count(1)
        self._latest_ticket = 0
        self._lock = threading.Lock()
        self._state = DashboardState(
            location=None,
            target_date=None,
            target_hour=None,
            snapshot=None,
            advisory=classify(None),
            sequence=0,
        )

    @property
    def state(self) -> DashboardState:
        return self._state

    def begin_request(self) -> int:
        with self._lock:
            ticket = next(self._tickets)
            self._latest_ticket = ticket
            return ticket

    def complete_request(
        self,
        ticket: int,
        location: str,
        snapshot: WeatherSnapshot,
        target_date: date | None = None,
        target_hour: int | None = None,
    ) -> bool:
        """Apply a finished request; returns False when a newer one superseded it."""

        with self._lock:
            if ticket != self._latest_ticket:
                logger.info("Dropping stale weather result %s for %s (latest is %s)", ticket, location, self._latest_ticket)
                return False
            self._state = DashboardState(
                location=location,
                target_date=target_date,
                target_hour=target_hour,
                snapshot=snapshot,
                advisory=classify(snapshot, self.limits),
                sequence=ticket,
            )
            return True

    def refresh(
        self,
        location: str,
        target_date: date | None = None,
        target_hour: int | None = None,
        now: datetime | None = None,
    ) -> DashboardState:
        zone = resolve_zone(self.tz)
        current = now.astimezone(zone) if now is not None else datetime.now(zone)
        ticket = self.begin_request()
        try:
            snapshot = select_snapshot(
                self.provider,
                location,
                target_date,
                target_hour,
                now=current,
                tz=self.tz,
                default_hour=self.default_hour,
            )
        except DroneCRMError as exc:
            self._report_failure(ticket, location, exc)
            raise

        if self.complete_request(ticket, location, snapshot, target_date, target_hour):
            self.notifications.info(
                f"Weather {self._describe(target_date, target_hour, current)} for {snapshot.location_name or location} loaded.",
                context={"location": location, "sequence": ticket},
            )
        return self._state

    def is_latest(self, ticket: int) -> bool:
        with self._lock:
            return ticket == self._latest_ticket

    def _report_failure(self, ticket: int, location: str, exc: DroneCRMError) -> None:
        if not self.is_latest(ticket):
            logger.info("Superseded weather request %s for %s failed: %s", ticket, location, exc)
            return
        if isinstance(exc, NotFound):
            logger.warning("Weather location not found: %s", location)
            message = f"Could not load weather data for {location!r}. Check the city name."
        else:
            logger.warning("Weather refresh failed for %s: %s", location, exc, exc_info=True)
            message = "Could not load weather data. Try again."
        self.notifications.error(message, context={"location": location, "error": str(exc)})

    def _describe(self, target_date: date | None, target_hour: int | None, current: datetime) -> str:
        if is_current_request(target_date, target_hour, current):
            return "conditions"
        hour = self.default_hour if target_hour is None else target_hour
        return f"forecast for {target_date:%d/%m/%Y} at {hour:02d}:00"


__all__ = ["DashboardState", "WeatherDashboard"]
