"""Task CRUD endpoints."""

from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException

from dronecrm.api.deps import get_crm_store
from dronecrm.core.errors import NotFound
from dronecrm.models import Task, TaskCreate, TaskUpdate
from dronecrm.services.store import CRMStore

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[Task])
def list_tasks(store: CRMStore = Depends(get_crm_store)) -> Any:
    return list(store.ensure_loaded().tasks)


@router.post("", response_model=Task, status_code=201)
def create_task(payload: TaskCreate, store: CRMStore = Depends(get_crm_store)) -> Any:
    return store.add_task(payload)


@router.get("/{task_id}", response_model=Task)
def get_task(task_id: int, store: CRMStore = Depends(get_crm_store)) -> Any:
    try:
        return store.get_task(task_id)
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=exc.detail) from exc


@router.patch("/{task_id}", response_model=Task)
def update_task(task_id: int, payload: TaskUpdate, store: CRMStore = Depends(get_crm_store)) -> Any:
    try:
        return store.update_task(task_id, payload)
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=exc.detail) from exc


@router.delete("/{task_id}")
def delete_task(task_id: int, store: CRMStore = Depends(get_crm_store)) -> Any:
    store.delete_task(task_id)
    return {"deleted": task_id}


__all__ = ["router"]
