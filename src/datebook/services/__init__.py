"""Application services orchestrating store access and calendar logic."""

from __future__ import annotations

from .builder import EventDraftInput, build_event_draft, resolve_calendar
from .calendar import CalendarService
from .context import ServiceContext
from .filters import EventFilterCriteria, EventQuery, filter_events, select_calendars

__all__ = [
    "CalendarService",
    "EventDraftInput",
    "EventFilterCriteria",
    "EventQuery",
    "ServiceContext",
    "build_event_draft",
    "filter_events",
    "resolve_calendar",
    "select_calendars",
]
