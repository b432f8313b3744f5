"""Parsing and normalization of loosely specified dates and times."""

from __future__ import annotations

from .clock import Clock, ClockReading, resolve_timezone
from .parser import has_timezone_suffix, is_date_only, lenient_instant, parse_temporal
from .ranges import (
    add_days,
    normalize_all_day_span,
    normalize_query_range,
    normalized_end,
    normalized_start,
    start_of_day,
)

__all__ = [
    "Clock",
    "ClockReading",
    "add_days",
    "has_timezone_suffix",
    "is_date_only",
    "lenient_instant",
    "normalize_all_day_span",
    "normalize_query_range",
    "normalized_end",
    "normalized_start",
    "parse_temporal",
    "resolve_timezone",
    "start_of_day",
]
