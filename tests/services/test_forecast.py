# tests/services/test_forecast.py
from datetime import date, datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from dronecrm.core.errors import NotFound, ProviderUnavailable
from dronecrm.services.forecast import (
    is_current_request,
    nearest_snapshot,
    select_snapshot,
    target_instant,
)

NOW = datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)


def _at(snapshot_factory, day, hour, **overrides):
    return snapshot_factory(timestamp_utc=datetime(2026, 10, day, hour, 0, tzinfo=timezone.utc), **overrides)


@pytest.fixture
def provider(snapshot_factory):
    provider = MagicMock()
    provider.get_current.return_value = snapshot_factory(description="current")
    provider.get_forecast.return_value = [
        _at(snapshot_factory, 21, 12, description="12h"),
        _at(snapshot_factory, 21, 15, description="15h"),
        _at(snapshot_factory, 21, 18, description="18h"),
    ]
    return provider


def test_scenario_d_picks_the_closest_sample(provider):
    snapshot = select_snapshot(provider, "Campinas", date(2026, 10, 21), 16, now=NOW)

    assert snapshot.description == "15h"
    provider.get_forecast.assert_called_once_with("Campinas")
    provider.get_current.assert_not_called()


def test_tie_goes_to_the_earlier_sample(snapshot_factory):
    samples = [_at(snapshot_factory, 21, 12, description="first"), _at(snapshot_factory, 21, 18, description="second")]

    chosen = nearest_snapshot(samples, datetime(2026, 10, 21, 15, 0, tzinfo=timezone.utc))

    assert chosen.description == "first"


def test_order_of_samples_does_not_matter(snapshot_factory):
    samples = [
        _at(snapshot_factory, 22, 0, description="late"),
        _at(snapshot_factory, 21, 9, description="early"),
        _at(snapshot_factory, 21, 21, description="close"),
    ]

    chosen = nearest_snapshot(samples, datetime(2026, 10, 21, 22, 0, tzinfo=timezone.utc))

    assert chosen.description == "close"


def test_no_date_is_a_current_request(provider):
    snapshot = select_snapshot(provider, "Campinas", now=NOW)

    assert snapshot.description == "current"
    provider.get_current.assert_called_once_with("Campinas")
    provider.get_forecast.assert_not_called()


def test_today_at_the_current_hour_is_a_current_request(provider):
    snapshot = select_snapshot(provider, "Campinas", date(2026, 10, 19), 15, now=NOW)

    assert snapshot.description == "current"
    provider.get_forecast.assert_not_called()


def test_today_without_hour_is_a_current_request(provider):
    select_snapshot(provider, "Campinas", date(2026, 10, 19), None, now=NOW)

    provider.get_forecast.assert_not_called()


def test_today_at_another_hour_uses_the_forecast(provider):
    select_snapshot(provider, "Campinas", date(2026, 10, 19), 18, now=NOW)

    provider.get_current.assert_not_called()
    provider.get_forecast.assert_called_once_with("Campinas")


def test_date_without_hour_targets_midday(provider):
    snapshot = select_snapshot(provider, "Campinas", date(2026, 10, 21), None, now=NOW)

    assert snapshot.description == "12h"


def test_local_timezone_decides_current_hour_and_target(provider):
    # 15:00 UTC is 12:00 in São Paulo (UTC-3).
    select_snapshot(provider, "Campinas", date(2026, 10, 19), 12, now=NOW, tz="America/Sao_Paulo")
    provider.get_forecast.assert_not_called()

    # Noon local on the 21st is 15:00 UTC.
    snapshot = select_snapshot(provider, "Campinas", date(2026, 10, 21), None, now=NOW, tz="America/Sao_Paulo")
    assert snapshot.description == "15h"


def test_target_instant_uses_zone_and_default_hour():
    instant = target_instant(date(2026, 10, 21), None, "America/Sao_Paulo", default_hour=9)

    assert instant.astimezone(timezone.utc) == datetime(2026, 10, 21, 12, 0, tzinfo=timezone.utc)
    assert instant.utcoffset() == timedelta(hours=-3)


def test_is_current_request():
    assert is_current_request(None, 7, NOW)
    assert is_current_request(date(2026, 10, 19), None, NOW)
    assert not is_current_request(date(2026, 10, 20), 15, NOW)
    assert not is_current_request(date(2026, 10, 19), 14, NOW)


def test_empty_forecast_is_provider_unavailable(provider):
    provider.get_forecast.return_value = []

    with pytest.raises(ProviderUnavailable):
        select_snapshot(provider, "Campinas", date(2026, 10, 21), 9, now=NOW)


@pytest.mark.parametrize("error", [NotFound("location", "Atlantis"), ProviderUnavailable("down")])
def test_provider_errors_propagate(provider, error):
    provider.get_current.side_effect = error
    provider.get_forecast.side_effect = error

    with pytest.raises(type(error)):
        select_snapshot(provider, "Atlantis", now=NOW)
    with pytest.raises(type(error)):
        select_snapshot(provider, "Atlantis", date(2026, 10, 21), 9, now=NOW)
