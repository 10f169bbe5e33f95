"""User-facing notices raised by weather lookups."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Query

from dronecrm.services.notifications import NOTIFICATIONS, NoticeLevel

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("")
def list_notifications(
    limit: int = Query(20, ge=1, le=100),
    level: Optional[NoticeLevel] = Query(default=None),
) -> dict[str, list[dict[str, Any]]]:
    return {"notifications": [note.as_dict() for note in NOTIFICATIONS.recent(limit, level=level)]}


__all__ = ["router"]
