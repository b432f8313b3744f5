from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..domain import EventAvailability, EventStatus
from .models import CreateEventRequest, FetchEventsRequest
from .registry import register_api
from .serializers import serialize_calendar, serialize_event
from .state import api_state


@register_api(
    "calendars_list",
    description="List available calendars.",
    category="calendar",
    tags=("calendar", "read"),
    read_only=True,
)
def calendars_list() -> Dict[str, Any]:
    calendars = api_state.calendar.list_calendars()
    return {"calendars": [serialize_calendar(calendar) for calendar in calendars]}


@register_api(
    "events_fetch",
    description=(
        "Get events from the calendar with flexible filtering options. "
        "start defaults to now; end defaults to one week after start, or one day when start is date-only. "
        "If timezone is omitted, local time is assumed. Date-only values use local midnight, "
        "and a date-only end includes that whole day."
    ),
    category="calendar",
    tags=("events", "read"),
    read_only=True,
)
def events_fetch(
    start: Optional[str] = None,
    end: Optional[str] = None,
    calendars: Optional[List[str]] = None,
    query: Optional[str] = None,
    include_all_day: bool = True,
    status: Optional[EventStatus] = None,
    availability: Optional[EventAvailability] = None,
    has_alarms: Optional[bool] = None,
    is_recurring: Optional[bool] = None,
) -> Dict[str, Any]:
    request = FetchEventsRequest(
        start=start,
        end=end,
        calendars=calendars or [],
        query=query,
        include_all_day=include_all_day,
        status=status,
        availability=availability,
        has_alarms=has_alarms,
        is_recurring=is_recurring,
    )
    service = api_state.calendar
    reading = service.read_clock()
    events = service.fetch_events(request.to_query(), reading=reading)
    return {"events": [serialize_event(event, reading.tz) for event in events]}


@register_api(
    "events_create",
    description=(
        "Create a new calendar event with specified properties. "
        "If timezone is omitted, local time is assumed. Date-only values use local midnight. "
        "Alarms are objects of type relative (minutes before start), absolute (datetime with a time), "
        "or proximity (locationTitle, latitude, longitude, optional radius in meters and enter/leave)."
    ),
    category="calendar",
    tags=("events", "write"),
    destructive=True,
)
def events_create(
    title: str,
    start: str,
    end: str,
    calendar: Optional[str] = None,
    location: Optional[str] = None,
    notes: Optional[str] = None,
    url: Optional[str] = None,
    is_all_day: bool = False,
    availability: EventAvailability = EventAvailability.BUSY,
    alarms: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    request = CreateEventRequest(
        title=title,
        start=start,
        end=end,
        calendar=calendar,
        location=location,
        notes=notes,
        url=url,
        is_all_day=is_all_day,
        availability=availability,
        alarms=alarms or [],
    )
    service = api_state.calendar
    reading = service.read_clock()
    event = service.create_event(request.to_draft_input(), reading=reading)
    return {"event": serialize_event(event, reading.tz)}
