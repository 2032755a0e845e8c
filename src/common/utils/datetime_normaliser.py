import math
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from common.utils.constants import HOTEL_TIMEZONE

DateLike = Union[date, datetime, str]

ONE_DAY = timedelta(days=1)


def from_iso_string(value: str) -> datetime:
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        raise ValueError("Stored datetime must be timezone-aware")
    return dt.astimezone(timezone.utc)


def to_date(value: DateLike) -> date:
    """Reduce a date, datetime or ISO string to its calendar day.

    Time-of-day is discarded without timezone conversion, so
    ``2024-01-10T23:00:00+07:00`` is still the 10th.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Date must not be empty")
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        if "T" in text:
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text[:10])
    raise ValueError(f"Unsupported date value: {value!r}")


def count_nights(check_in: DateLike, check_out: DateLike) -> int:
    start = check_in if isinstance(check_in, datetime) else to_date(check_in)
    end = check_out if isinstance(check_out, datetime) else to_date(check_out)
    if isinstance(start, datetime) != isinstance(end, datetime):
        start, end = to_date(start), to_date(end)
    nights = math.ceil((end - start) / ONE_DAY)
    return max(nights, 1)


def iter_nights(check_in: date, check_out: date):
    current = check_in
    while current < check_out:
        yield current
        current += ONE_DAY


def hotel_today(tz_name: Optional[str] = None) -> date:
    return datetime.now(ZoneInfo(tz_name or HOTEL_TIMEZONE)).date()
