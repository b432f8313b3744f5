"""Lenient ISO 8601 parsing for tool arguments.

Strings are matched against a fixed, ordered list of formats. Zoned formats
are tried first; a string that ends in something that looks like a timezone
but matched none of them is rejected rather than reinterpreted as local time.
Strings without a zone are read in the timezone supplied by the caller.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Pattern, Tuple

from ..domain import AmbiguousTimezoneError, ParsedTemporal, TemporalParseError

_DATE = r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
_TIME = r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
_FRACTION = r"\.(?P<fraction>[0-9]+)"
_ZONE = r"(?P<zone>[Zz]|[+-][0-9]{2}(?::?[0-9]{2})?)"


def _format(*parts: str) -> Pattern[str]:
    return re.compile("".join(parts))


_STRICT_FORMATS: Tuple[Pattern[str], ...] = (
    _format(_DATE, "T", _TIME, _FRACTION, _ZONE),
    _format(_DATE, "T", _TIME, _ZONE),
    _format(_DATE, "T", _TIME, _FRACTION),
    _format(_DATE, "T", _TIME),
    _format(_DATE, " ", _TIME, _FRACTION, _ZONE),
    _format(_DATE, " ", _TIME, _ZONE),
)

_LOCAL_FORMATS: Tuple[Pattern[str], ...] = (
    _format(_DATE, "T", _TIME, _FRACTION),
    _format(_DATE, "T", _TIME),
    _format(_DATE, " ", _TIME, _FRACTION),
    _format(_DATE, " ", _TIME),
    _format(_DATE),
)

_DATE_ONLY = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_ZONE_SUFFIX = re.compile(r"(?:[Zz]|[+-][0-9]{2}(?::?[0-9]{2})?)\Z")


def is_date_only(value: str) -> bool:
    """Return True when ``value`` is exactly ``YYYY-MM-DD``."""

    return _DATE_ONLY.fullmatch(value) is not None


def has_timezone_suffix(value: str) -> bool:
    # The day field of a bare date reads like a "-HH" offset.
    if is_date_only(value):
        return False
    return _ZONE_SUFFIX.search(value) is not None


def _zone_from_text(text: str) -> Optional[tzinfo]:
    if text in ("Z", "z"):
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:4]) if len(digits) > 2 else 0
    if hours > 23 or minutes > 59:
        return None
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def _build_instant(pattern: Pattern[str], value: str, local_tz: tzinfo) -> Optional[datetime]:
    match = pattern.fullmatch(value)
    if match is None:
        return None
    fields = match.groupdict()

    zone_text = fields.get("zone")
    zone = _zone_from_text(zone_text) if zone_text else local_tz
    if zone is None:
        return None

    fraction = fields.get("fraction") or ""
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0
    try:
        return datetime(
            int(fields["year"]),
            int(fields["month"]),
            int(fields["day"]),
            int(fields.get("hour") or 0),
            int(fields.get("minute") or 0),
            int(fields.get("second") or 0),
            microsecond,
            tzinfo=zone,
        )
    except ValueError:
        return None


def lenient_instant(value: str, local_tz: tzinfo) -> datetime:
    """Parse ``value`` into an aware datetime.

    Raises :class:`AmbiguousTimezoneError` when the string carries a zone
    suffix but matches no zoned format, and :class:`TemporalParseError` for
    anything else that cannot be read.
    """

    if not value:
        raise TemporalParseError(value, "Empty date/time string")

    for pattern in _STRICT_FORMATS:
        instant = _build_instant(pattern, value, local_tz)
        if instant is not None:
            return instant

    if has_timezone_suffix(value):
        raise AmbiguousTimezoneError(value)

    for pattern in _LOCAL_FORMATS:
        instant = _build_instant(pattern, value, local_tz)
        if instant is not None:
            return instant

    raise TemporalParseError(value)


def parse_temporal(value: str, local_tz: tzinfo) -> ParsedTemporal:
    return ParsedTemporal(instant=lenient_instant(value, local_tz), is_date_only=is_date_only(value))


__all__ = ["has_timezone_suffix", "is_date_only", "lenient_instant", "parse_temporal"]
