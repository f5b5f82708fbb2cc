from datetime import date, datetime, timedelta, timezone

import pytest

from eventdocs.core.dates import calendar_key, parse_date_input, timestamp_sort_key

CDMX = timezone(timedelta(hours=-6))


def test_date_only_is_read_from_components():
    parsed = parse_date_input("2025-06-14")
    assert parsed.status == "ok"
    assert parsed.value == date(2025, 6, 14)


def test_date_only_is_not_shifted_by_timezone():
    # an instant parser would turn midnight UTC into the 13th in Mexico City
    assert parse_date_input("2025-06-14", CDMX).value == date(2025, 6, 14)


def test_zero_month_and_day_read_as_first():
    assert parse_date_input("2025-00-00").value == date(2025, 1, 1)


def test_out_of_range_date_only_rolls_over():
    assert parse_date_input("2025-02-30").value == date(2025, 3, 2)
    assert parse_date_input("2025-13-01").value == date(2026, 1, 1)
    assert parse_date_input("2025-12-32").value == date(2026, 1, 1)


def test_year_zero_is_invalid():
    parsed = parse_date_input("0000-06-14")
    assert parsed.status == "invalid"
    assert parsed.value is None
    assert parsed.is_invalid


@pytest.mark.parametrize(
    "raw",
    ["2025/06/14", "June 14, 2025", "Sat, 14 Jun 2025 18:30:00 GMT", "2025-06-14 18:30:00+00"],
)
def test_general_date_forms(raw):
    parsed = parse_date_input(raw, timezone.utc)
    assert parsed.status == "ok"
    assert parsed.value == date(2025, 6, 14)


def test_empty_input_is_today():
    for value in (None, ""):
        parsed = parse_date_input(value)
        assert parsed.status == "empty"
        assert parsed.value == datetime.now().date()


def test_aware_timestamp_is_converted_before_taking_the_date():
    parsed = parse_date_input("2025-06-15T03:00:00Z", CDMX)
    assert parsed.value == date(2025, 6, 14)


def test_naive_timestamp_keeps_its_own_date():
    assert parse_date_input("2025-06-14T23:30:00", CDMX).value == date(2025, 6, 14)


def test_garbage_is_invalid_not_an_error():
    parsed = parse_date_input("sometime in spring")
    assert parsed.status == "invalid"
    assert not parsed.ok


def test_date_and_datetime_objects():
    assert parse_date_input(date(2025, 6, 14)).value == date(2025, 6, 14)
    assert parse_date_input(datetime(2025, 6, 14, 22, 0)).value == date(2025, 6, 14)
    aware = datetime(2025, 6, 15, 2, 0, tzinfo=timezone.utc)
    assert parse_date_input(aware, CDMX).value == date(2025, 6, 14)


def test_calendar_key():
    assert calendar_key("2025-06-14") == "2025-06-14"
    assert calendar_key("2025-06-14T10:00:00") == "2025-06-14"
    assert calendar_key("") is None
    assert calendar_key(None) is None
    assert calendar_key("garbage") is None


def test_timestamp_sort_key_orders_and_puts_missing_last():
    values = ["2025-01-02T00:00:00Z", None, "2025-01-01T12:00:00", "bad", "2025-01-01T13:00:00+00:00"]
    ordered = sorted(values, key=timestamp_sort_key)
    assert ordered[:3] == ["2025-01-01T12:00:00", "2025-01-01T13:00:00+00:00", "2025-01-02T00:00:00Z"]
    assert set(ordered[3:]) == {None, "bad"}
