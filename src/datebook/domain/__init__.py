"""Domain models for calendar events and temporal values."""

from __future__ import annotations

from .enums import EventAvailability, EventStatus, ProximityTrigger, Sound
from .errors import (
    AmbiguousTimezoneError,
    DatebookError,
    InvalidRangeError,
    MissingRequiredFieldError,
    StoreError,
    TemporalParseError,
    UnauthorizedError,
)
from .models import (
    AbsoluteAlarm,
    AllDaySpan,
    Alarm,
    CalendarEvent,
    CalendarInfo,
    EventDraft,
    ParsedTemporal,
    ProximityAlarm,
    RelativeAlarm,
    StructuredLocation,
    TemporalRange,
)

__all__ = [
    "AbsoluteAlarm",
    "AllDaySpan",
    "Alarm",
    "AmbiguousTimezoneError",
    "CalendarEvent",
    "CalendarInfo",
    "DatebookError",
    "EventAvailability",
    "EventDraft",
    "EventStatus",
    "InvalidRangeError",
    "MissingRequiredFieldError",
    "ParsedTemporal",
    "ProximityAlarm",
    "ProximityTrigger",
    "RelativeAlarm",
    "Sound",
    "StoreError",
    "StructuredLocation",
    "TemporalParseError",
    "TemporalRange",
    "UnauthorizedError",
]
