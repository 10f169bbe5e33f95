"""Lead CRUD endpoints."""

from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException

from dronecrm.api.deps import get_crm_store
from dronecrm.core.errors import NotFound
from dronecrm.models import Lead, LeadCreate, LeadUpdate
from dronecrm.services.store import CRMStore

router = APIRouter(prefix="/leads", tags=["leads"])


@router.get("", response_model=List[Lead])
def list_leads(store: CRMStore = Depends(get_crm_store)) -> Any:
    return list(store.ensure_loaded().leads)


@router.post("", response_model=Lead, status_code=201)
def create_lead(payload: LeadCreate, store: CRMStore = Depends(get_crm_store)) -> Any:
    return store.add_lead(payload)


@router.get("/{lead_id}", response_model=Lead)
def get_lead(lead_id: int, store: CRMStore = Depends(get_crm_store)) -> Any:
    try:
        return store.get_lead(lead_id)
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=exc.detail) from exc


@router.patch("/{lead_id}", response_model=Lead)
def update_lead(lead_id: int, payload: LeadUpdate, store: CRMStore = Depends(get_crm_store)) -> Any:
    try:
        return store.update_lead(lead_id, payload)
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=exc.detail) from exc


@router.delete("/{lead_id}")
def delete_lead(lead_id: int, store: CRMStore = Depends(get_crm_store)) -> Any:
    store.delete_lead(lead_id)
    return {"deleted": lead_id}


__all__ = ["router"]
