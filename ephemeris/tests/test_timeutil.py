"""Tests for civil time and timezone resolution."""

from datetime import UTC, datetime

import pytest
from ephemeris.timeutil import (
    datetime_to_jd,
    infer_timezone,
    resolve_timezone,
    resolve_utc_instant,
    timezone_label,
)
from shefa.errors import ErrorKind, InvalidInputError


def test_daylight_saving_applied_for_summer_date():
    result = resolve_utc_instant("2024-07-01", "12:00", "America/New_York")
    assert result.ok
    assert result.value == datetime(2024, 7, 1, 16, 0, tzinfo=UTC)


def test_standard_time_applied_for_winter_date():
    result = resolve_utc_instant("2024-01-15", "12:00", "America/New_York")
    assert result.value == datetime(2024, 1, 15, 17, 0, tzinfo=UTC)


def test_historical_rules_are_used():
    """Britain kept UTC+1 all year between 1968 and 1971."""
    result = resolve_utc_instant("1970-01-15", "12:00", "Europe/London")
    assert result.value == datetime(1970, 1, 15, 11, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    ("label", "expected_hour", "expected_minute"),
    [
        ("EST", 17, 0),
        ("pdt", 19, 0),
        ("+05:30", 6, 30),
        ("UTC-3", 15, 0),
        ("GMT+1", 11, 0),
        ("UTC", 12, 0),
    ],
)
def test_abbreviations_and_offsets(label, expected_hour, expected_minute):
    result = resolve_utc_instant("2024-03-01", "12:00", label)
    assert result.ok
    assert result.value == datetime(2024, 3, 1, expected_hour, expected_minute, tzinfo=UTC)


def test_unknown_timezone_falls_back_to_utc():
    result = resolve_utc_instant("2024-03-01", "12:00", "Mars/Olympus_Mons")
    assert result.value == datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
    assert not result.ok
    assert result.issues[0].kind == ErrorKind.UNSUPPORTED_TIMEZONE


def test_missing_time_means_noon():
    result = resolve_utc_instant("2024-03-01", None, "UTC")
    assert result.value == datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
    assert resolve_utc_instant("2024-03-01", "  ", "UTC").value.hour == 12


def test_seconds_are_kept():
    result = resolve_utc_instant("2024-03-01", "08:15:30", "UTC")
    assert result.value == datetime(2024, 3, 1, 8, 15, 30, tzinfo=UTC)


def test_missing_date_names_the_field():
    with pytest.raises(InvalidInputError) as exc_info:
        resolve_utc_instant("", "12:00", "UTC")
    assert exc_info.value.field == "birth_date"
    assert exc_info.value.kind == ErrorKind.INVALID_INPUT


def test_malformed_time_names_the_field():
    with pytest.raises(InvalidInputError) as exc_info:
        resolve_utc_instant("2024-03-01", "25:99", "UTC")
    assert exc_info.value.field == "birth_time"


def test_timezone_label():
    assert timezone_label(resolve_timezone("Europe/Paris").value) == "Europe/Paris"
    assert timezone_label(resolve_timezone("UTC").value) == "UTC"
    assert timezone_label(resolve_timezone("+05:30").value) == "UTC+05:30"


def test_infer_timezone_for_new_york():
    assert infer_timezone(40.7128, -74.0060) == "America/New_York"


def test_julian_day_of_j2000():
    assert datetime_to_jd(datetime(2000, 1, 1, 12, 0, tzinfo=UTC)) == pytest.approx(2451545.0)
    # Naive datetimes are taken as UTC
    assert datetime_to_jd(datetime(2000, 1, 2, 0, 0)) == pytest.approx(2451545.5)
