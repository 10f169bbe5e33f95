"""Shared column helpers for the CRM tables."""

from __future__ import annotations

import datetime as dt
from zoneinfo import ZoneInfo

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from dronecrm.core.config import settings


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def local_today() -> dt.date:
    """Today's date in the business timezone, not the server's."""

    return dt.datetime.now(ZoneInfo(settings.timezone)).date()


class Timestamps(SQLModel):
    created_at: dt.datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    updated_at: dt.datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        nullable=False,
    )


__all__ = ["Timestamps", "local_today", "utcnow"]
