"""Generic CRUD over the Lead, Appointment and Task tables."""

from __future__ import annotations

import logging
from typing import Generic, Type, TypeVar

from sqlmodel import Session, SQLModel, select

from dronecrm.core.errors import NotFound
from dronecrm.models.base import utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


class RecordStore(Generic[ModelT]):
    """Persistence boundary for one record type.

    Identities are assigned by the database. ``list`` returns the newest
    records first; ``delete`` does not fail for unknown identities.
    """

    def __init__(self, model: Type[ModelT], session: Session, resource: str | None = None) -> None:
        self.model = model
        self.session = session
        self.resource = resource or model.__name__.lower()

    def list(self) -> list[ModelT]:
        stmt = select(self.model).order_by(self.model.created_at.desc(), self.model.id.desc())
        return list(self.session.exec(stmt).all())

    def get(self, record_id: int) -> ModelT:
        record = self.session.get(self.model, record_id)
        if record is None:
            raise NotFound(self.resource, record_id)
        return record

    def create(self, payload: SQLModel) -> ModelT:
        record = self.model.model_validate(payload.model_dump())
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        logger.info("Created %s %s", self.resource, record.id)
        return record

    def update(self, record_id: int, payload: SQLModel) -> ModelT:
        record = self.get(record_id)
        record.sqlmodel_update(payload.model_dump(exclude_unset=True))
        record.updated_at = utcnow()
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        logger.info("Updated %s %s", self.resource, record_id)
        return record

    def delete(self, record_id: int) -> bool:
        record = self.session.get(self.model, record_id)
        if record is None:
            logger.info("Delete of missing %s %s ignored", self.resource, record_id)
            return False
        self.session.delete(record)
        self.session.commit()
        logger.info("Deleted %s %s", self.resource, record_id)
        return True


__all__ = ["RecordStore"]
