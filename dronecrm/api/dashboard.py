"""Business overview endpoints for the home dashboard."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from dronecrm.api.deps import get_crm_store
from dronecrm.core.config import settings
from dronecrm.models import Appointment
from dronecrm.services.kpis import KPIService
from dronecrm.services.store import CRMStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class KPIRead(BaseModel):
    appointments_today: int
    pending_tasks: int
    active_leads: int
    pipeline_value: Decimal


def get_kpi_service(store: CRMStore = Depends(get_crm_store)) -> KPIService:
    return KPIService(store, tz=settings.timezone)


@router.get("/kpis", response_model=KPIRead)
def get_kpis(service: KPIService = Depends(get_kpi_service)) -> Any:
    summary = service.summary()
    return KPIRead(
        appointments_today=summary.appointments_today,
        pending_tasks=summary.pending_tasks,
        active_leads=summary.active_leads,
        pipeline_value=summary.pipeline_value,
    )


@router.get("/upcoming", response_model=List[Appointment])
def get_upcoming(
    limit: int = Query(5, ge=1, le=50),
    service: KPIService = Depends(get_kpi_service),
) -> Any:
    return service.upcoming_appointments(limit=limit)


__all__ = ["router"]
