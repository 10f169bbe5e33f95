# tests/conftest.py
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import dronecrm.models  # noqa: F401  (registers the tables on SQLModel.metadata)
from dronecrm import app
from dronecrm.api.deps import get_db
from dronecrm.services.notifications import NOTIFICATIONS
from dronecrm.services.weather import WeatherSnapshot


def make_snapshot(**overrides) -> WeatherSnapshot:
    """A calm, clear reading; override only the fields a test cares about."""
    values = {
        "timestamp_utc": datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc),
        "temperature_c": 24.0,
        "feels_like_c": 25.0,
        "humidity_pct": 65,
        "wind_speed_ms": 1.0,
        "cloud_cover_pct": 10,
        "visibility_meters": 10000.0,
        "precipitation_mm_per_hour": 0.0,
        "location_name": "Ribeirão Preto",
        "country_code": "BR",
        "description": "céu limpo",
    }
    values.update(overrides)
    return WeatherSnapshot(**values)


@pytest.fixture
def snapshot_factory():
    return make_snapshot


@pytest.fixture(autouse=True)
def clear_notifications():
    NOTIFICATIONS.clear()
    yield
    NOTIFICATIONS.clear()


@pytest.fixture
def engine():
    # Single shared in-memory SQLite database for the whole test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
