"""Recent application log lines for the dashboard."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from dronecrm.core.logging_config import get_log_buffer

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("")
def list_logs(
    limit: int = Query(100, ge=1, le=200),
    level: Optional[str] = Query(default=None, description="Minimum level, e.g. WARNING"),
) -> dict[str, list[dict[str, str]]]:
    threshold = logging.NOTSET
    if level is not None:
        threshold = logging.getLevelName(level.upper())
        if not isinstance(threshold, int):
            raise HTTPException(status_code=422, detail="unknown_log_level")
    return {"logs": get_log_buffer(limit=limit, min_level=threshold)}


__all__ = ["router"]
