"""Cached collections of leads, appointments and tasks.

``CRMStore`` is the write path for every record: the CRUD routers and the
dashboard receive one per request through ``dronecrm.api.deps``. Once
``load()`` has run, the store keeps read-only tuples of the three collections
and patches them after each successful write. Before that, writes go straight
to the database and the cache stays empty. A failed write leaves the cache as
it was.
"""

from __future__ import annotations

import logging
from typing import Sequence, TypeVar

from sqlmodel import Session, SQLModel

from dronecrm.models import (
    Appointment,
    AppointmentCreate,
    AppointmentUpdate,
    Lead,
    LeadCreate,
    LeadUpdate,
    Task,
    TaskCreate,
    TaskUpdate,
)
from dronecrm.services.records import RecordStore

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=SQLModel)


def _prepend(items: Sequence[RecordT], record: RecordT) -> tuple[RecordT, ...]:
    return (record, *items)


def _replace(items: Sequence[RecordT], record: RecordT) -> tuple[RecordT, ...]:
    return tuple(record if item.id == record.id else item for item in items)


def _remove(items: Sequence[RecordT], record_id: int) -> tuple[RecordT, ...]:
    return tuple(item for item in items if item.id != record_id)


class CRMStore:
    def __init__(self, session: Session) -> None:
        self._leads_store = RecordStore(Lead, session, resource="lead")
        self._appointments_store = RecordStore(Appointment, session, resource="appointment")
        self._tasks_store = RecordStore(Task, session, resource="task")
        self._leads: tuple[Lead, ...] = ()
        self._appointments: tuple[Appointment, ...] = ()
        self._tasks: tuple[Task, ...] = ()
        self.loaded = False

    @property
    def leads(self) -> tuple[Lead, ...]:
        return self._leads

    @property
    def appointments(self) -> tuple[Appointment, ...]:
        return self._appointments

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    def load(self) -> "CRMStore":
        """Replace every cached collection with a fresh fetch."""

        self._leads = tuple(self._leads_store.list())
        self._appointments = tuple(self._appointments_store.list())
        self._tasks = tuple(self._tasks_store.list())
        self.loaded = True
        logger.debug(
            "Loaded %d leads, %d appointments, %d tasks",
            len(self._leads),
            len(self._appointments),
            len(self._tasks),
        )
        return self

    def ensure_loaded(self) -> "CRMStore":
        return self if self.loaded else self.load()

    # Leads
    def get_lead(self, lead_id: int) -> Lead:
        return self._leads_store.get(lead_id)

    def add_lead(self, payload: LeadCreate) -> Lead:
        record = self._leads_store.create(payload)
        if self.loaded:
            self._leads = _prepend(self._leads, record)
        return record

    def update_lead(self, lead_id: int, payload: LeadUpdate) -> Lead:
        record = self._leads_store.update(lead_id, payload)
        if self.loaded:
            self._leads = _replace(self._leads, record)
        return record

    def delete_lead(self, lead_id: int) -> bool:
        removed = self._leads_store.delete(lead_id)
        self._leads = _remove(self._leads, lead_id)
        return removed

    # Appointments
    def get_appointment(self, appointment_id: int) -> Appointment:
        return self._appointments_store.get(appointment_id)

    def add_appointment(self, payload: AppointmentCreate) -> Appointment:
        record = self._appointments_store.create(payload)
        if self.loaded:
            self._appointments = _prepend(self._appointments, record)
        return record

    def update_appointment(self, appointment_id: int, payload: AppointmentUpdate) -> Appointment:
        record = self._appointments_store.update(appointment_id, payload)
        if self.loaded:
            self._appointments = _replace(self._appointments, record)
        return record

    def delete_appointment(self, appointment_id: int) -> bool:
        removed = self._appointments_store.delete(appointment_id)
        self._appointments = _remove(self._appointments, appointment_id)
        return removed

    # Tasks
    def get_task(self, task_id: int) -> Task:
        return self._tasks_store.get(task_id)

    def add_task(self, payload: TaskCreate) -> Task:
        record = self._tasks_store.create(payload)
        if self.loaded:
            self._tasks = _prepend(self._tasks, record)
        return record

    def update_task(self, task_id: int, payload: TaskUpdate) -> Task:
        record = self._tasks_store.update(task_id, payload)
        if self.loaded:
            self._tasks = _replace(self._tasks, record)
        return record

    def delete_task(self, task_id: int) -> bool:
        removed = self._tasks_store.delete(task_id)
        self._tasks = _remove(self._tasks, task_id)
        return removed


__all__ = ["CRMStore"]
