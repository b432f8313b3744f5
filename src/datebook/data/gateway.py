from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol, Sequence

from ..core import CalendarStore
from ..domain import CalendarEvent, CalendarInfo, EventDraft, StoreError, TemporalRange

logger = logging.getLogger(__name__)


class CalendarGateway(Protocol):
    """Operations the calendar tools need from the backing event store."""

    def authorization_granted(self) -> bool: ...

    def request_access(self) -> bool: ...

    def list_calendars(self) -> List[CalendarInfo]: ...

    def create_calendar(self, title: str, *, color: Optional[str] = None, is_editable: bool = True) -> CalendarInfo: ...

    def fetch_events(self, window: TemporalRange, calendars: Sequence[CalendarInfo]) -> List[CalendarEvent]: ...

    def default_calendar(self) -> CalendarInfo: ...

    def save_event(self, draft: EventDraft) -> CalendarEvent: ...


@dataclass(slots=True)
class LocalCalendarGateway:
    store: CalendarStore
    default_calendar_title: str = "Calendar"

    def authorization_granted(self) -> bool:
        return bool(self.store.data.get("authorization", {}).get("granted"))

    def request_access(self) -> bool:
        def _grant(state: Dict[str, Any]) -> bool:
            authorization = state.setdefault("authorization", {})
            authorization["granted"] = True
            authorization["updated_at"] = CalendarStore.utc_now()
            return True

        granted = self.store.mutate(_grant)
        logger.info("Calendar access granted for store %s", self.store.path)
        return granted

    def list_calendars(self) -> List[CalendarInfo]:
        return [CalendarInfo.from_record(record) for record in self.store.data.get("calendars", [])]

    def create_calendar(
        self,
        title: str,
        *,
        source: str = "Local",
        color: Optional[str] = None,
        is_editable: bool = True,
        is_subscribed: bool = False,
    ) -> CalendarInfo:
        def _create(state: Dict[str, Any]) -> Dict[str, Any]:
            record = {
                "id": self.store.consume_id(state, "calendar"),
                "title": title,
                "source": source,
                "color": color,
                "is_editable": is_editable,
                "is_subscribed": is_subscribed,
            }
            state.setdefault("calendars", []).append(record)
            preferences = state.setdefault("preferences", {})
            if preferences.get("default_calendar_id") is None and is_editable:
                preferences["default_calendar_id"] = record["id"]
            return record

        calendar = CalendarInfo.from_record(self.store.mutate(_create))
        logger.info("Created calendar %s (%s)", calendar.title, calendar.id)
        return calendar

    def default_calendar(self) -> CalendarInfo:
        default_id = self.store.data.get("preferences", {}).get("default_calendar_id")
        for calendar in self.list_calendars():
            if calendar.id == default_id:
                return calendar
        return self.create_calendar(self.default_calendar_title)

    def _calendars_by_id(self) -> Dict[str, CalendarInfo]:
        return {calendar.id: calendar for calendar in self.list_calendars()}

    def fetch_events(self, window: TemporalRange, calendars: Sequence[CalendarInfo]) -> List[CalendarEvent]:
        wanted = {calendar.id for calendar in calendars}
        known = self._calendars_by_id()
        events: list[CalendarEvent] = []
        for record in self.store.data.get("events", []):
            calendar_id = record.get("calendar_id")
            if calendar_id not in wanted or calendar_id not in known:
                continue
            event = CalendarEvent.from_record(record, calendar=known[calendar_id])
            if window.overlaps(event.starts_at, event.ends_at):
                events.append(event)
        events.sort(key=lambda item: item.starts_at)
        return events

    def save_event(self, draft: EventDraft) -> CalendarEvent:
        known = self._calendars_by_id()
        calendar = known.get(draft.calendar.id)
        if calendar is None:
            raise StoreError(f"Calendar '{draft.calendar.title}' no longer exists")
        if not calendar.is_editable:
            raise StoreError(f"Calendar '{calendar.title}' does not allow modifications")
        if draft.ends_at < draft.starts_at:
            raise StoreError("The start date must be before the end date")

        def _insert(state: Dict[str, Any]) -> CalendarEvent:
            event = CalendarEvent.from_draft(
                draft,
                event_id=self.store.consume_id(state, "event"),
                created_at=datetime.now(timezone.utc).replace(microsecond=0),
            )
            state.setdefault("events", []).append(event.to_record())
            return event

        event = self.store.mutate(_insert)
        logger.info("Saved event %s in calendar %s", event.id, calendar.title)
        return event


__all__ = ["CalendarGateway", "LocalCalendarGateway"]
