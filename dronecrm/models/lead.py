"""Sales leads (prospective farm clients)."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import EmailStr, field_validator
from sqlmodel import Field, SQLModel

from dronecrm.models.base import Timestamps, local_today


class LeadStatus(str, Enum):
    NEW = "new"
    QUALIFIED = "qualified"
    PROPOSAL = "proposal"
    WON = "won"
    LOST = "lost"


CLOSED_LEAD_STATUSES = frozenset({LeadStatus.WON, LeadStatus.LOST})


class LeadBase(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    company: str = Field(min_length=1, max_length=255)
    email: str = Field(max_length=255)
    phone: str = Field(min_length=1, max_length=64)
    status: LeadStatus = Field(default=LeadStatus.NEW, index=True)
    potential_value: str = Field(
        min_length=1, max_length=64, description="Currency-formatted text, e.g. 'R$ 15.000'"
    )
    source: str = Field(min_length=1, max_length=128, description="Acquisition channel (site, referral...)")
    notes: Optional[str] = None
    hectares: Optional[float] = Field(default=None, ge=0, description="Farm area in hectares")
    crop_type: Optional[str] = Field(default=None, max_length=128)
    city: Optional[str] = Field(default=None, max_length=128)
    location: Optional[str] = Field(default=None, max_length=255)
    last_contact: dt.date = Field(default_factory=local_today)


class Lead(LeadBase, Timestamps, table=True):
    __tablename__ = "leads"

    id: Optional[int] = Field(default=None, primary_key=True)


class LeadCreate(LeadBase):
    email: EmailStr


class LeadUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    company: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=1, max_length=64)
    status: Optional[LeadStatus] = None
    potential_value: Optional[str] = Field(default=None, min_length=1, max_length=64)
    source: Optional[str] = Field(default=None, min_length=1, max_length=128)
    notes: Optional[str] = None
    hectares: Optional[float] = Field(default=None, ge=0)
    crop_type: Optional[str] = Field(default=None, max_length=128)
    city: Optional[str] = Field(default=None, max_length=128)
    location: Optional[str] = Field(default=None, max_length=255)
    last_contact: Optional[dt.date] = None

    @field_validator(
        "name", "company", "email", "phone", "status", "potential_value", "source", "last_contact"
    )
    @classmethod
    def _required_not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value


__all__ = ["Lead", "LeadBase", "LeadCreate", "LeadStatus", "LeadUpdate", "CLOSED_LEAD_STATUSES"]
