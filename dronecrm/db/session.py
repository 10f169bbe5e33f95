"""SQLModel session management."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlmodel import Session, SQLModel, create_engine

from dronecrm.core.config import settings


def _connect_args(url: str) -> dict:
    # SQLite connections are shared with FastAPI's worker threads.
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.database_url,
    echo=settings.database_echo,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.database_url),
)


def init_db() -> None:
    # Register the table models on SQLModel.metadata before creating them.
    import dronecrm.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


@contextmanager
def get_session() -> Iterator[Session]:
    """Get a database session as a context manager (for use with 'with' statement).

    For FastAPI dependency injection, use ``dronecrm.api.deps.get_db`` instead.
    """
    session = Session(engine)
    try:
        yield session
    finally:
        session.close()


__all__ = ["engine", "init_db", "get_session"]
