from datetime import date, datetime, time, timezone

import pytest

from sehaty.utils.timezone import (
    combine_day_and_time,
    day_bounds,
    format_calendar_date,
    parse_calendar_date,
    to_calendar_date,
)


def test_parse_calendar_date():
    assert parse_calendar_date("2025-03-09") == date(2025, 3, 9)


@pytest.mark.parametrize("value", ["2025-3-9", "09-03-2025", "2025-02-30", "", "2025-03-09T10:00"])
def test_parse_calendar_date_rejects(value):
    with pytest.raises(ValueError):
        parse_calendar_date(value)


def test_day_bounds():
    start, end = day_bounds(date(2024, 2, 29))

    assert start == datetime(2024, 2, 29, 0, 0)
    assert end == datetime(2024, 2, 29, 23, 59, 59, 999999)


def test_aware_datetimes_use_their_utc_calendar_date():
    as_local = datetime(2025, 1, 1, 1, 30, tzinfo=timezone.utc).astimezone()

    assert to_calendar_date(as_local) == date(2025, 1, 1)
    assert format_calendar_date(datetime(2025, 1, 1, 23, 0)) == "2025-01-01"


def test_combine_day_and_time_keeps_hour_and_minute():
    assert combine_day_and_time(date(2025, 1, 1), time(8, 30, 59)) == datetime(2025, 1, 1, 8, 30)
