# tests/services/test_weather_dashboard.py
from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from dronecrm.core.errors import NotFound, ProviderUnavailable
from dronecrm.services.advisory import FlightStatus
from dronecrm.services.notifications import NotificationLog
from dronecrm.services.weather_dashboard import WeatherDashboard

NOW = datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def provider(snapshot_factory):
    provider = MagicMock()
    provider.get_current.return_value = snapshot_factory(location_name="Campinas")
    provider.get_forecast.return_value = [
        snapshot_factory(
            timestamp_utc=datetime(2026, 10, 21, 9, 0, tzinfo=timezone.utc),
            wind_speed_ms=3.0,
            cloud_cover_pct=90,
            location_name="Campinas",
        )
    ]
    return provider


@pytest.fixture
def dashboard(provider):
    return WeatherDashboard(provider, notifications=NotificationLog())


def test_initial_state_is_unknown(dashboard):
    state = dashboard.state

    assert state.snapshot is None
    assert state.advisory.status == FlightStatus.UNKNOWN
    assert state.sequence == 0


def test_refresh_current_conditions(dashboard):
    state = dashboard.refresh("Campinas", now=NOW)

    assert state.location == "Campinas"
    assert state.advisory.status == FlightStatus.GOOD
    assert state.sequence == 1
    notes = dashboard.notifications.recent()
    assert notes[0].level == "info"
    assert notes[0].message == "Weather conditions for Campinas loaded."


def test_refresh_forecast(dashboard):
    state = dashboard.refresh("Campinas", date(2026, 10, 21), 9, now=NOW)

    assert state.target_date == date(2026, 10, 21)
    assert state.target_hour == 9
    assert state.advisory.status == FlightStatus.WARNING
    assert dashboard.notifications.recent()[0].message == (
        "Weather forecast for 21/10/2026 at 09:00 for Campinas loaded."
    )


def test_stale_result_is_discarded(dashboard, snapshot_factory):
    slow = dashboard.begin_request()
    fast = dashboard.begin_request()

    assert dashboard.complete_request(fast, "Sorocaba", snapshot_factory(location_name="Sorocaba")) is True
    assert dashboard.complete_request(slow, "Piracicaba", snapshot_factory(location_name="Piracicaba")) is False

    assert dashboard.state.location == "Sorocaba"
    assert dashboard.state.sequence == fast


def test_not_found_keeps_previous_state_and_notifies(dashboard, provider):
    dashboard.refresh("Campinas", now=NOW)
    before = dashboard.state
    provider.get_current.side_effect = NotFound("location", "Atlantis")

    with pytest.raises(NotFound):
        dashboard.refresh("Atlantis", now=NOW)

    assert dashboard.state == before
    note = dashboard.notifications.recent()[0]
    assert note.level == "error"
    assert "Atlantis" in note.message


def test_provider_failure_keeps_previous_state_and_notifies(dashboard, provider):
    dashboard.refresh("Campinas", now=NOW)
    before = dashboard.state
    provider.get_forecast.side_effect = ProviderUnavailable("timeout")

    with pytest.raises(ProviderUnavailable):
        dashboard.refresh("Campinas", date(2026, 10, 21), 9, now=NOW)

    assert dashboard.state == before
    assert dashboard.notifications.recent()[0].message == "Could not load weather data. Try again."


def test_failed_request_still_supersedes_older_pending_ones(dashboard, provider, snapshot_factory):
    pending = dashboard.begin_request()
    provider.get_current.side_effect = ProviderUnavailable("down")

    with pytest.raises(ProviderUnavailable):
        dashboard.refresh("Campinas", now=NOW)

    assert dashboard.complete_request(pending, "Campinas", snapshot_factory()) is False


def test_superseded_failure_is_not_notified(dashboard, provider):
    def fail_after_newer_request(location):
        dashboard.begin_request()
        raise ProviderUnavailable("timeout")

    provider.get_current.side_effect = fail_after_newer_request

    with pytest.raises(ProviderUnavailable):
        dashboard.refresh("Campinas", now=NOW)

    assert dashboard.notifications.recent() == []


def test_superseded_success_is_neither_applied_nor_notified(dashboard, provider, snapshot_factory):
    def succeed_after_newer_request(location):
        dashboard.begin_request()
        return snapshot_factory(location_name="Campinas")

    provider.get_current.side_effect = succeed_after_newer_request

    state = dashboard.refresh("Campinas", now=NOW)

    assert state.snapshot is None
    assert dashboard.notifications.recent() == []
