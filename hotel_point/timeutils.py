"""
Calendar helpers

Date-only values are naive datetimes at 00:00 in the reference timezone
(settings.TIMEZONE). Aware datetimes are converted to that zone first.
"""
from datetime import date, datetime, time, timedelta
from typing import Iterator, Union
from zoneinfo import ZoneInfo

from hotel_point.config import settings

DateLike = Union[date, datetime]


def reference_zone() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def local_now() -> datetime:
    """Current wall-clock time in the reference timezone (naive)"""
    return datetime.now(reference_zone()).replace(tzinfo=None)


def to_local(value: DateLike) -> datetime:
    """Convert a date or datetime to a naive reference-zone datetime"""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(reference_zone()).replace(tzinfo=None)
        return value
    return datetime.combine(value, time.min)


def start_of_day(value: DateLike) -> datetime:
    return datetime.combine(to_local(value).date(), time.min)


def end_of_day(value: DateLike) -> datetime:
    return datetime.combine(to_local(value).date(), time.max)


def at_hour(value: DateLike, hour: int) -> datetime:
    """Same calendar day as value, at hour:00"""
    return datetime.combine(to_local(value).date(), time(hour=hour))


def iter_days(start: DateLike, end_exclusive: DateLike) -> Iterator[datetime]:
    """Midnights of each day in [start, end_exclusive)"""
    current = start_of_day(start)
    end = start_of_day(end_exclusive)
    while current < end:
        yield current
        current += timedelta(days=1)


def iter_days_inclusive(start: DateLike, end_inclusive: DateLike) -> Iterator[datetime]:
    """Midnights of each day in [start, end_inclusive]"""
    return iter_days(start, start_of_day(end_inclusive) + timedelta(days=1))


def is_weekend(value: DateLike) -> bool:
    return to_local(value).weekday() >= 5  # Saturday(5), Sunday(6)
