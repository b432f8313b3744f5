from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..domain import (
    AbsoluteAlarm,
    Alarm,
    CalendarEvent,
    CalendarInfo,
    EventAvailability,
    EventStatus,
    ProximityAlarm,
    RelativeAlarm,
)
from ..services import EventDraftInput, EventFilterCriteria, EventQuery


class FetchEventsRequest(BaseModel):
    start: Optional[str] = None
    end: Optional[str] = None
    calendars: List[str] = Field(default_factory=list)
    query: Optional[str] = None
    include_all_day: bool = True
    status: Optional[EventStatus] = None
    availability: Optional[EventAvailability] = None
    has_alarms: Optional[bool] = None
    is_recurring: Optional[bool] = None

    def to_query(self) -> EventQuery:
        criteria = EventFilterCriteria(
            calendars=frozenset(name for name in self.calendars if name),
            query=self.query or None,
            status=self.status,
            availability=self.availability,
            include_all_day=self.include_all_day,
            has_alarms=self.has_alarms,
            is_recurring=self.is_recurring,
        )
        return EventQuery(start=self.start, end=self.end, criteria=criteria)


class CreateEventRequest(BaseModel):
    title: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    calendar: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    url: Optional[str] = None
    is_all_day: bool = False
    availability: EventAvailability = EventAvailability.BUSY
    # Alarm entries are validated one by one when the event is built.
    alarms: List[Any] = Field(default_factory=list)

    def to_draft_input(self) -> EventDraftInput:
        return EventDraftInput(
            title=self.title,
            start=self.start,
            end=self.end,
            calendar=self.calendar,
            location=self.location,
            notes=self.notes,
            url=self.url,
            is_all_day=self.is_all_day,
            availability=self.availability,
            alarms=tuple(self.alarms),
        )


class CalendarPayload(BaseModel):
    title: str
    source: str
    color: Optional[str] = Field(default=None)
    is_editable: bool
    is_subscribed: bool

    @classmethod
    def from_domain(cls, calendar: CalendarInfo) -> "CalendarPayload":
        return cls(
            title=calendar.title,
            source=calendar.source,
            color=calendar.color,
            is_editable=calendar.is_editable,
            is_subscribed=calendar.is_subscribed,
        )


class AlarmPayload(BaseModel):
    type: str
    offset_seconds: Optional[int] = Field(default=None)
    trigger_at: Optional[str] = Field(default=None)
    proximity: Optional[str] = Field(default=None)
    location: Optional[Dict[str, Any]] = Field(default=None)
    sound: Optional[str] = Field(default=None)
    email_address: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, alarm: Alarm, tz: tzinfo) -> "AlarmPayload":
        common = {
            "sound": alarm.sound.value if alarm.sound else None,
            "email_address": alarm.email_address,
        }
        if isinstance(alarm, RelativeAlarm):
            return cls(type="relative", offset_seconds=alarm.offset_seconds, **common)
        if isinstance(alarm, AbsoluteAlarm):
            return cls(type="absolute", trigger_at=_iso(alarm.trigger_at, tz), **common)
        if isinstance(alarm, ProximityAlarm):
            return cls(
                type="proximity",
                proximity=alarm.proximity.value,
                location={
                    "title": alarm.location.title,
                    "latitude": alarm.location.latitude,
                    "longitude": alarm.location.longitude,
                    "radius": alarm.location.radius,
                },
                **common,
            )
        raise TypeError(f"Unsupported alarm: {alarm!r}")


class EventPayload(BaseModel):
    id: str
    title: str
    start: str
    end: str
    is_all_day: bool
    calendar: str
    location: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)
    url: Optional[str] = Field(default=None)
    status: str
    availability: str
    alarms: List[AlarmPayload] = Field(default_factory=list)
    has_recurrence_rules: bool = False

    @classmethod
    def from_domain(cls, event: CalendarEvent, tz: tzinfo) -> "EventPayload":
        return cls(
            id=event.id,
            title=event.title,
            start=_iso(event.starts_at, tz),
            end=_iso(event.ends_at, tz),
            is_all_day=event.is_all_day,
            calendar=event.calendar.title,
            location=event.location,
            notes=event.notes,
            url=event.url,
            status=event.status.value,
            availability=event.availability.value,
            alarms=[AlarmPayload.from_domain(alarm, tz) for alarm in event.alarms],
            has_recurrence_rules=event.has_recurrence_rules,
        )


def _iso(value: datetime, tz: tzinfo) -> str:
    return value.astimezone(tz).isoformat()
