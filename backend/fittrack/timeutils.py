"""Day-boundary helpers for the fixed reporting timezone.

All timestamps are stored as naive UTC datetimes. A reporting "day" is the
UTC instant of local midnight in the configured fixed offset, so a record for
2024-01-10 in IST (+05:30) is keyed on ``2024-01-09 18:30:00``.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from fittrack.config import get_settings
from fittrack.errors import ValidationError

Instant = Union[datetime, date, str, None]


def utcnow() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Aware datetimes are converted to UTC; naive ones are assumed UTC."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_instant(value: Instant, field: str = "date") -> datetime:
    """Turn a datetime, date or ISO-8601 string into a naive UTC datetime."""
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return to_naive_utc(datetime.fromisoformat(text))
        except ValueError:
            pass
    raise ValidationError(f"{field} must be a valid ISO-8601 timestamp", field=field)


def _calendar_date(value: str) -> Optional[date]:
    text = value.strip()
    if len(text) != 10:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def normalize_day(instant: Instant = None, offset_minutes: Optional[int] = None) -> datetime:
    """
    Map an instant to the start of its day in a fixed UTC offset.

    Returns the UTC-equivalent (naive) instant of local midnight for the
    calendar date ``instant`` falls on at ``offset_minutes``. ``None`` means
    now. Plain dates and ``YYYY-MM-DD`` strings name a local calendar date
    directly.
    """
    if offset_minutes is None:
        offset_minutes = get_settings().reporting_tz_offset_minutes
    offset = timedelta(minutes=offset_minutes)

    if instant is None:
        instant = utcnow()
    elif isinstance(instant, str):
        instant = _calendar_date(instant) or instant

    if isinstance(instant, date) and not isinstance(instant, datetime):
        local_date = instant
    else:
        local_date = (parse_instant(instant) + offset).date()

    return datetime.combine(local_date, time.min) - offset


def local_date(day: datetime, offset_minutes: Optional[int] = None) -> date:
    """Calendar date a normalized day stands for in the reporting offset."""
    if offset_minutes is None:
        offset_minutes = get_settings().reporting_tz_offset_minutes
    return (day + timedelta(minutes=offset_minutes)).date()
