from __future__ import annotations

from datetime import tzinfo
from typing import Any, Dict

from ..domain import CalendarEvent, CalendarInfo
from .models import CalendarPayload, EventPayload


def serialize_calendar(calendar: CalendarInfo) -> Dict[str, Any]:
    return CalendarPayload.from_domain(calendar).model_dump()


def serialize_event(event: CalendarEvent, tz: tzinfo) -> Dict[str, Any]:
    return EventPayload.from_domain(event, tz).model_dump(exclude_none=True)
