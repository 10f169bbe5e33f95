# tests/services/test_records.py
from datetime import date, timezone

import pytest
from pydantic import ValidationError

from dronecrm.core.errors import NotFound
from dronecrm.models import (
    Appointment,
    AppointmentCreate,
    AppointmentUpdate,
    Lead,
    LeadCreate,
    LeadStatus,
    LeadUpdate,
    Task,
    TaskCreate,
    TaskPriority,
    TaskUpdate,
)
from dronecrm.models.base import local_today
from dronecrm.services.records import RecordStore


def lead_payload(**overrides) -> LeadCreate:
    values = {
        "name": "Carlos Mendes",
        "company": "Fazenda Boa Vista",
        "email": "carlos@boavista.com.br",
        "phone": "(16) 99999-0000",
        "potential_value": "R$ 15.000",
        "source": "site",
        "hectares": 120,
        "crop_type": "soja",
        "city": "Ribeirão Preto",
    }
    values.update(overrides)
    return LeadCreate(**values)


def test_create_assigns_identity_and_defaults(session):
    store = RecordStore(Lead, session, resource="lead")

    lead = store.create(lead_payload())

    assert lead.id is not None
    assert lead.status == LeadStatus.NEW
    assert lead.last_contact == local_today()
    assert lead.created_at is not None
    assert store.get(lead.id).email == "carlos@boavista.com.br"


def test_list_returns_newest_first(session):
    store = RecordStore(Lead, session, resource="lead")
    first = store.create(lead_payload(name="First"))
    second = store.create(lead_payload(name="Second"))

    names = [lead.name for lead in store.list()]

    assert names == ["Second", "First"]
    assert second.id > first.id


def test_get_unknown_identity_raises_not_found(session):
    store = RecordStore(Task, session, resource="task")

    with pytest.raises(NotFound) as excinfo:
        store.get(999)

    assert excinfo.value.detail == "task_not_found"


def test_update_changes_only_supplied_fields(session):
    store = RecordStore(Lead, session, resource="lead")
    lead = store.create(lead_payload())
    created_at = lead.created_at

    updated = store.update(lead.id, LeadUpdate(status=LeadStatus.QUALIFIED))

    assert updated.status == LeadStatus.QUALIFIED
    assert updated.name == "Carlos Mendes"
    assert updated.created_at == created_at
    assert updated.updated_at >= created_at


def test_update_unknown_identity_raises_not_found(session):
    store = RecordStore(Lead, session, resource="lead")

    with pytest.raises(NotFound):
        store.update(42, LeadUpdate(notes="call back"))


def test_delete_is_idempotent(session):
    store = RecordStore(Appointment, session, resource="appointment")
    appointment = store.create(
        AppointmentCreate(client="Fazenda Sol", service="pulverização", date=date(2026, 10, 21), time="07:30")
    )

    assert store.delete(appointment.id) is True
    assert store.delete(appointment.id) is False
    assert store.list() == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"email": "not-an-email"},
        {"name": ""},
        {"hectares": -1},
    ],
)
def test_invalid_lead_is_rejected(overrides):
    with pytest.raises(ValidationError):
        lead_payload(**overrides)


@pytest.mark.parametrize("bad_time", ["7:30", "24:00", "12:60", "noon"])
def test_appointment_time_must_be_hh_mm(bad_time):
    with pytest.raises(ValidationError):
        AppointmentCreate(client="Fazenda Sol", service="mapeamento", date=date(2026, 10, 21), time=bad_time)


def test_appointment_short_fields_are_rejected():
    with pytest.raises(ValidationError):
        AppointmentCreate(client="X", service="mapeamento", date=date(2026, 10, 21), time="08:00")
    with pytest.raises(ValidationError):
        AppointmentCreate(
            client="Fazenda Sol", service="mapeamento", date=date(2026, 10, 21), time="08:00", address="Rua"
        )


def test_update_rejects_null_for_required_fields():
    with pytest.raises(ValidationError):
        LeadUpdate(name=None)
    with pytest.raises(ValidationError):
        AppointmentUpdate(time=None)
    with pytest.raises(ValidationError):
        TaskUpdate(due_date=None)
    # optional fields may be cleared
    assert LeadUpdate(notes=None).model_dump(exclude_unset=True) == {"notes": None}


def test_task_defaults(session):
    store = RecordStore(Task, session, resource="task")

    task = store.create(TaskCreate(title="Calibrar bicos", due_date=date(2026, 10, 20), assignee="Ana"))

    assert task.priority == TaskPriority.MEDIUM
    assert task.status == "pending"
    assert task.description == ""


@pytest.mark.parametrize("model", [Lead, Appointment, Task])
def test_timestamps_are_timezone_aware(model):
    assert model.__table__.c.created_at.type.timezone is True
    assert model.__table__.c.updated_at.type.timezone is True


def test_new_records_carry_utc_timestamps():
    lead = Lead.model_validate(lead_payload().model_dump())

    assert lead.created_at.tzinfo is not None
    assert lead.created_at.utcoffset() == timezone.utc.utcoffset(None)
    assert lead.updated_at.tzinfo is not None


def test_update_stamps_an_aware_updated_at(session, monkeypatch):
    store = RecordStore(Task, session, resource="task")
    task = store.create(TaskCreate(title="Trocar hélices", due_date=date(2026, 10, 20), assignee="Ana"))

    captured = {}
    real_commit = session.commit

    def commit():
        captured["updated_at"] = task.updated_at
        real_commit()

    monkeypatch.setattr(session, "commit", commit)
    store.update(task.id, TaskUpdate(status="done"))

    assert captured["updated_at"].tzinfo is not None
