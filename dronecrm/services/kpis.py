"""Dashboard KPI aggregation helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from decimal import Decimal, InvalidOperation

from dronecrm.core.config import settings
from dronecrm.models import CLOSED_LEAD_STATUSES, TASK_DONE, Appointment
from dronecrm.services.forecast import resolve_zone
from dronecrm.services.store import CRMStore

_CURRENCY_NOISE = re.compile(r"[^\d,.\-]")


def parse_currency(text: str | None) -> Decimal:
    """Parse Brazilian-formatted amounts such as ``"R$ 1.234,56"``."""

    if not text:
        return Decimal(0)
    cleaned = _CURRENCY_NOISE.sub("", text)
    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    else:
        # "15.000" uses the dot as a thousands separator.
        cleaned = cleaned.replace(".", "")
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return Decimal(0)


@dataclass(frozen=True)
class DashboardKPIs:
    appointments_today: int
    pending_tasks: int
    active_leads: int
    pipeline_value: Decimal


class KPIService:
    """Counts for the home dashboard.

    "Today" and "now" are taken in the business timezone (``settings.timezone``
    unless ``tz`` is given), the same zone appointment dates are entered in.
    """

    def __init__(self, store: CRMStore, tz: tzinfo | str | None = None) -> None:
        self.store = store.ensure_loaded()
        self.zone = resolve_zone(settings.timezone if tz is None else tz)

    def _now(self) -> datetime:
        return datetime.now(self.zone)

    def summary(self, today: date | None = None) -> DashboardKPIs:
        day = today or self._now().date()
        active = [lead for lead in self.store.leads if lead.status not in CLOSED_LEAD_STATUSES]
        return DashboardKPIs(
            appointments_today=sum(1 for appt in self.store.appointments if appt.date == day),
            pending_tasks=sum(1 for task in self.store.tasks if task.status != TASK_DONE),
            active_leads=len(active),
            pipeline_value=sum((parse_currency(lead.potential_value) for lead in active), Decimal(0)),
        )

    def upcoming_appointments(self, limit: int = 5, now: datetime | None = None) -> list[Appointment]:
        if now is None:
            current = self._now()
        elif now.tzinfo is not None:
            current = now.astimezone(self.zone)
        else:
            # naive values are already local
            current = now
        stamp = (current.date(), current.strftime("%H:%M"))
        upcoming = [appt for appt in self.store.appointments if (appt.date, appt.time) >= stamp]
        upcoming.sort(key=lambda appt: (appt.date, appt.time))
        return upcoming[:limit]


__all__ = ["DashboardKPIs", "KPIService", "parse_currency"]
