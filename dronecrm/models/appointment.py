"""Scheduled drone service appointments."""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from dronecrm.models.base import Timestamps

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _check_time(value: Optional[str]) -> Optional[str]:
    if value is not None and not _TIME_RE.match(value):
        raise ValueError("time must be HH:MM")
    return value


class AppointmentBase(SQLModel):
    client: str = Field(min_length=2, max_length=255)
    service: str = Field(min_length=2, max_length=128, description="e.g. crop spraying, mapping")
    date: dt.date = Field(index=True)
    time: str = Field(max_length=5, description="Local time, HH:MM")
    status: str = Field(default="pending", max_length=32, description="scheduled, confirmed, pending, done...")
    notes: Optional[str] = None
    address: Optional[str] = Field(default=None, min_length=5, max_length=512)
    value: Optional[str] = Field(default=None, max_length=64)

    @field_validator("time")
    @classmethod
    def _valid_time(cls, value: str) -> str:
        return _check_time(value)


class Appointment(AppointmentBase, Timestamps, table=True):
    __tablename__ = "appointments"

    id: Optional[int] = Field(default=None, primary_key=True)


class AppointmentCreate(AppointmentBase):
    pass


class AppointmentUpdate(SQLModel):
    client: Optional[str] = Field(default=None, min_length=2, max_length=255)
    service: Optional[str] = Field(default=None, min_length=2, max_length=128)
    date: Optional[dt.date] = None
    time: Optional[str] = None
    status: Optional[str] = Field(default=None, min_length=1, max_length=32)
    notes: Optional[str] = None
    address: Optional[str] = Field(default=None, min_length=5, max_length=512)
    value: Optional[str] = Field(default=None, max_length=64)

    @field_validator("client", "service", "date", "time", "status")
    @classmethod
    def _required_not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value

    @field_validator("time")
    @classmethod
    def _valid_time(cls, value: Optional[str]) -> Optional[str]:
        return _check_time(value)


__all__ = ["Appointment", "AppointmentBase", "AppointmentCreate", "AppointmentUpdate"]
