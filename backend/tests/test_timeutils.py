from datetime import date, datetime, timedelta, timezone

import pytest

from fittrack.errors import ValidationError
from fittrack.timeutils import local_date, normalize_day, parse_instant

IST = 330


def test_normalize_day_maps_to_local_midnight_in_utc():
    # 2024-01-10 20:00 UTC is already 2024-01-11 01:30 in IST
    day = normalize_day(datetime(2024, 1, 10, 20, 0), IST)
    assert day == datetime(2024, 1, 10, 18, 30)
    assert local_date(day, IST) == date(2024, 1, 11)


def test_normalize_day_is_idempotent():
    for instant in (
        datetime(2024, 1, 10, 0, 0),
        datetime(2024, 1, 10, 18, 29, 59),
        datetime(2024, 1, 10, 18, 30),
        datetime(2024, 2, 29, 23, 59),
    ):
        once = normalize_day(instant, IST)
        assert normalize_day(once, IST) == once


def test_normalize_day_with_negative_offset():
    day = normalize_day(datetime(2024, 1, 10, 3, 0), -300)
    # 03:00 UTC is 22:00 the previous evening at UTC-5
    assert day == datetime(2024, 1, 9, 5, 0)
    assert normalize_day(day, -300) == day


def test_aware_datetimes_are_converted_to_utc():
    aware = datetime(2024, 1, 10, 23, 0, tzinfo=timezone(timedelta(hours=5, minutes=30)))
    assert normalize_day(aware, IST) == datetime(2024, 1, 9, 18, 30)


def test_calendar_dates_and_date_strings_name_the_local_day():
    expected = datetime(2024, 1, 9, 18, 30)
    assert normalize_day(date(2024, 1, 10), IST) == expected
    assert normalize_day("2024-01-10", IST) == expected
    assert normalize_day("2024-01-10T12:00:00Z", IST) == expected


def test_default_is_today():
    today = normalize_day(None, IST)
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    assert today <= now < today + timedelta(days=1)


def test_parse_instant_rejects_garbage():
    with pytest.raises(ValidationError) as exc:
        parse_instant("not-a-date", field="start_time")
    assert exc.value.field == "start_time"

    with pytest.raises(ValidationError):
        normalize_day("yesterday", IST)
