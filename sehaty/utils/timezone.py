from datetime import datetime, date, time, timedelta, timezone as dt_timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from sehaty.core.config import settings


def get_zoneinfo() -> Optional[ZoneInfo]:
    tz_name = getattr(settings, "DEFAULT_TIMEZONE", None)
    if not tz_name:
        return None
    try:
        return ZoneInfo(tz_name)
    except Exception:
        return None


def now_local() -> datetime:
    tz = get_zoneinfo()
    return datetime.now(tz) if tz else datetime.now(dt_timezone.utc)


def today_local() -> date:
    return now_local().date()


def utcnow() -> datetime:
    """Current time as UTC-naive, the representation used for storage."""
    return datetime.now(dt_timezone.utc).replace(tzinfo=None)


def to_utc_naive(dt: datetime | None) -> datetime | None:
    """
    Normalize any datetime to UTC-naive (tzinfo=None) for consistent storage/comparison.
    - Aware datetimes are converted to UTC and tzinfo is stripped
    - Naive datetimes are returned as-is (assumed UTC)
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(dt_timezone.utc).replace(tzinfo=None)


def to_calendar_date(value: datetime | date | None) -> date | None:
    """Calendar date of a datetime (after UTC normalization) or a plain date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_utc_naive(value).date()
    return value


def parse_calendar_date(value: str) -> date:
    """Parse a `YYYY-MM-DD` string; raises ValueError on anything else."""
    value = value.strip()
    if len(value) != 10 or value[4] != "-" or value[7] != "-":
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
    return date.fromisoformat(value)


def format_calendar_date(value: datetime | date) -> str:
    """String-normalized form used when matching daily entries to a requested date."""
    return to_calendar_date(value).isoformat()


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """First and last instant (UTC-naive) of a calendar day."""
    start = datetime.combine(day, time.min)
    end = start + timedelta(days=1) - timedelta(microseconds=1)
    return start, end


def combine_day_and_time(day: date, time_of_day: datetime | time) -> datetime:
    """That day at the schedule's hour and minute, seconds dropped."""
    if isinstance(time_of_day, datetime):
        time_of_day = to_utc_naive(time_of_day).time()
    return datetime.combine(day, time(time_of_day.hour, time_of_day.minute))
