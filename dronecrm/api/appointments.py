"""Appointment CRUD endpoints."""

from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException

from dronecrm.api.deps import get_crm_store
from dronecrm.core.errors import NotFound
from dronecrm.models import Appointment, AppointmentCreate, AppointmentUpdate
from dronecrm.services.store import CRMStore

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.get("", response_model=List[Appointment])
def list_appointments(store: CRMStore = Depends(get_crm_store)) -> Any:
    return list(store.ensure_loaded().appointments)


@router.post("", response_model=Appointment, status_code=201)
def create_appointment(payload: AppointmentCreate, store: CRMStore = Depends(get_crm_store)) -> Any:
    return store.add_appointment(payload)


@router.get("/{appointment_id}", response_model=Appointment)
def get_appointment(appointment_id: int, store: CRMStore = Depends(get_crm_store)) -> Any:
    try:
        return store.get_appointment(appointment_id)
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=exc.detail) from exc


@router.patch("/{appointment_id}", response_model=Appointment)
def update_appointment(appointment_id: int, payload: AppointmentUpdate, store: CRMStore = Depends(get_crm_store)) -> Any:
    try:
        return store.update_appointment(appointment_id, payload)
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=exc.detail) from exc


@router.delete("/{appointment_id}")
def delete_appointment(appointment_id: int, store: CRMStore = Depends(get_crm_store)) -> Any:
    store.delete_appointment(appointment_id)
    return {"deleted": appointment_id}


__all__ = ["router"]
