from __future__ import annotations

from datetime import datetime, time, timedelta, tzinfo
from typing import Optional

from ..domain import AllDaySpan, ParsedTemporal, TemporalRange

DEFAULT_WINDOW_DAYS = 7
END_OF_DAY = time(23, 59, 59)


def start_of_day(instant: datetime, tz: tzinfo) -> datetime:
    local = instant.astimezone(tz)
    return datetime.combine(local.date(), time.min, tzinfo=tz)


def add_days(instant: datetime, days: int, tz: tzinfo) -> datetime:
    """Calendar-day arithmetic: keeps the local wall-clock time across DST changes."""

    local = instant.astimezone(tz)
    return datetime.combine(local.date() + timedelta(days=days), local.time(), tzinfo=tz)


def normalized_start(parsed: ParsedTemporal, tz: tzinfo) -> datetime:
    return start_of_day(parsed.instant, tz) if parsed.is_date_only else parsed.instant


def normalized_end(parsed: ParsedTemporal, tz: tzinfo) -> datetime:
    """A date-only end covers the whole named day, so it moves to the next midnight."""

    if not parsed.is_date_only:
        return parsed.instant
    return add_days(start_of_day(parsed.instant, tz), 1, tz)


def normalize_query_range(
    start: Optional[ParsedTemporal],
    end: Optional[ParsedTemporal],
    now: datetime,
    tz: tzinfo,
) -> TemporalRange:
    start_parsed = start or ParsedTemporal(instant=now, is_date_only=False)
    range_start = normalized_start(start_parsed, tz)

    if end is not None:
        range_end = normalized_end(end, tz)
    elif start_parsed.is_date_only:
        range_end = add_days(range_start, 1, tz)
    else:
        range_end = add_days(range_start, DEFAULT_WINDOW_DAYS, tz)

    return TemporalRange(start=range_start, end=range_end)


def normalize_all_day_span(start: ParsedTemporal, end: ParsedTemporal, tz: tzinfo) -> AllDaySpan:
    first_day = normalized_start(start, tz).astimezone(tz).date()
    last_day = normalized_start(end, tz).astimezone(tz).date()
    return AllDaySpan(
        start_of_day=datetime.combine(first_day, time.min, tzinfo=tz),
        end_of_day=datetime.combine(last_day, END_OF_DAY, tzinfo=tz),
    )


__all__ = [
    "DEFAULT_WINDOW_DAYS",
    "add_days",
    "normalize_all_day_span",
    "normalize_query_range",
    "normalized_end",
    "normalized_start",
    "start_of_day",
]
