from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Sequence

from ..domain import CalendarEvent, CalendarInfo, EventAvailability, EventStatus


@dataclass(frozen=True, slots=True)
class EventFilterCriteria:
    """Secondary predicates applied after the store's range fetch.

    ``None`` means "no restriction" for every field except ``include_all_day``,
    which defaults to keeping all-day events.
    """

    calendars: FrozenSet[str] = frozenset()
    query: Optional[str] = None
    status: Optional[EventStatus] = None
    availability: Optional[EventAvailability] = None
    include_all_day: bool = True
    has_alarms: Optional[bool] = None
    is_recurring: Optional[bool] = None

    def __post_init__(self) -> None:
        # Calendar titles compare case-insensitively.
        object.__setattr__(self, "calendars", frozenset(name.lower() for name in self.calendars))


@dataclass(frozen=True, slots=True)
class EventQuery:
    start: Optional[str] = None
    end: Optional[str] = None
    criteria: EventFilterCriteria = field(default_factory=EventFilterCriteria)


def select_calendars(calendars: Sequence[CalendarInfo], names: FrozenSet[str]) -> List[CalendarInfo]:
    if not names:
        return list(calendars)
    return [calendar for calendar in calendars if calendar.title.lower() in names]


def _contains(haystack: Optional[str], needle: str) -> bool:
    return haystack is not None and needle in haystack.casefold()


def matches(event: CalendarEvent, criteria: EventFilterCriteria) -> bool:
    if criteria.calendars and event.calendar.title.lower() not in criteria.calendars:
        return False
    if not criteria.include_all_day and event.is_all_day:
        return False
    if criteria.query:
        needle = criteria.query.casefold()
        if not (_contains(event.title, needle) or _contains(event.location, needle)):
            return False
    if criteria.status is not None and event.status != criteria.status:
        return False
    if criteria.availability is not None and event.availability != criteria.availability:
        return False
    if criteria.has_alarms is not None and event.has_alarms != criteria.has_alarms:
        return False
    if criteria.is_recurring is not None and event.has_recurrence_rules != criteria.is_recurring:
        return False
    return True


def filter_events(candidates: Iterable[CalendarEvent], criteria: EventFilterCriteria) -> List[CalendarEvent]:
    return [event for event in candidates if matches(event, criteria)]


__all__ = ["EventFilterCriteria", "EventQuery", "filter_events", "matches", "select_calendars"]
