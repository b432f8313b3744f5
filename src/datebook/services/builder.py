from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Any, Optional, Sequence, Tuple

from pydantic import AnyUrl, TypeAdapter, ValidationError

from ..domain import (
    CalendarInfo,
    EventAvailability,
    EventDraft,
    InvalidRangeError,
    MissingRequiredFieldError,
    ParsedTemporal,
    TemporalParseError,
)
from ..temporal import normalize_all_day_span, normalized_start, parse_temporal
from .alarms import build_alarms

logger = logging.getLogger(__name__)

_URL_ADAPTER = TypeAdapter(AnyUrl)


@dataclass(frozen=True, slots=True)
class EventDraftInput:
    title: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    calendar: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    url: Optional[str] = None
    is_all_day: bool = False
    availability: EventAvailability = EventAvailability.BUSY
    alarms: Tuple[Any, ...] = field(default_factory=tuple)


def resolve_calendar(
    name: Optional[str],
    calendars: Sequence[CalendarInfo],
    default: CalendarInfo,
) -> CalendarInfo:
    if name:
        wanted = name.lower()
        for calendar in calendars:
            if calendar.title.lower() == wanted:
                return calendar
        logger.info("No calendar named %r; using default calendar %r", name, default.title)
    return default


def _parse_boundary(value: str, tz: tzinfo) -> ParsedTemporal:
    try:
        return parse_temporal(value, tz)
    except TemporalParseError as exc:
        raise MissingRequiredFieldError(
            "start/end",
            "Invalid start or end date format. Expected ISO 8601 format.",
        ) from exc


def _validated_url(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    try:
        _URL_ADAPTER.validate_python(url)
    except ValidationError:
        logger.warning("Ignoring invalid event URL: %s", url)
        return None
    return url


def build_event_draft(
    draft_input: EventDraftInput,
    *,
    calendars: Sequence[CalendarInfo],
    default_calendar: CalendarInfo,
    tz: tzinfo,
) -> EventDraft:
    """Validate ``draft_input`` and turn it into an :class:`EventDraft`.

    Raises :class:`MissingRequiredFieldError` when the title or either boundary
    is absent or unreadable. Invalid alarms and URLs are dropped, not fatal.
    """

    if draft_input.title is None or not draft_input.title.strip():
        raise MissingRequiredFieldError("title")
    if not draft_input.start:
        raise MissingRequiredFieldError("start")
    if not draft_input.end:
        raise MissingRequiredFieldError("end")

    parsed_start = _parse_boundary(draft_input.start, tz)
    parsed_end = _parse_boundary(draft_input.end, tz)

    if draft_input.is_all_day:
        span = normalize_all_day_span(parsed_start, parsed_end, tz)
        starts_at, ends_at = span.start_of_day, span.end_of_day
    else:
        starts_at = normalized_start(parsed_start, tz)
        ends_at = normalized_start(parsed_end, tz)

    if ends_at < starts_at:
        raise InvalidRangeError(
            f"Event end {ends_at.isoformat()} is before its start {starts_at.isoformat()}"
        )

    return EventDraft(
        title=draft_input.title,
        starts_at=starts_at,
        ends_at=ends_at,
        calendar=resolve_calendar(draft_input.calendar, calendars, default_calendar),
        is_all_day=draft_input.is_all_day,
        location=draft_input.location,
        notes=draft_input.notes,
        url=_validated_url(draft_input.url),
        availability=draft_input.availability,
        alarms=tuple(build_alarms(draft_input.alarms, tz)),
    )


__all__ = ["EventDraftInput", "build_event_draft", "resolve_calendar"]
