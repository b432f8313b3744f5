from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..data import CalendarGateway
from ..domain import CalendarEvent, CalendarInfo, ParsedTemporal, UnauthorizedError
from ..temporal import ClockReading, normalize_query_range, parse_temporal
from .builder import EventDraftInput, build_event_draft
from .context import ServiceContext
from .filters import EventQuery, filter_events, select_calendars

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CalendarService:
    context: ServiceContext

    @property
    def gateway(self) -> CalendarGateway:
        assert self.context.gateway is not None
        return self.context.gateway

    def read_clock(self) -> ClockReading:
        assert self.context.clock is not None
        return self.context.clock.read()

    def _require_access(self) -> None:
        if not self.gateway.authorization_granted():
            logger.error("Calendar access not authorized")
            raise UnauthorizedError("Calendar access not authorized")

    def activate(self) -> bool:
        return self.gateway.request_access()

    def list_calendars(self) -> List[CalendarInfo]:
        self._require_access()
        return self.gateway.list_calendars()

    def fetch_events(self, query: EventQuery, *, reading: Optional[ClockReading] = None) -> List[CalendarEvent]:
        self._require_access()
        reading = reading or self.read_clock()

        start: Optional[ParsedTemporal] = parse_temporal(query.start, reading.tz) if query.start is not None else None
        end: Optional[ParsedTemporal] = parse_temporal(query.end, reading.tz) if query.end is not None else None
        window = normalize_query_range(start, end, reading.now, reading.tz)

        calendars = select_calendars(self.gateway.list_calendars(), query.criteria.calendars)
        if not calendars:
            logger.info("No calendars matched %s", sorted(query.criteria.calendars))
            return []

        candidates = self.gateway.fetch_events(window, calendars)
        events = filter_events(candidates, query.criteria)
        logger.debug(
            "Fetched %d of %d events between %s and %s",
            len(events),
            len(candidates),
            window.start.isoformat(),
            window.end.isoformat(),
        )
        return events

    def create_event(self, draft_input: EventDraftInput, *, reading: Optional[ClockReading] = None) -> CalendarEvent:
        self._require_access()
        reading = reading or self.read_clock()
        draft = build_event_draft(
            draft_input,
            calendars=self.gateway.list_calendars(),
            default_calendar=self.gateway.default_calendar(),
            tz=reading.tz,
        )
        dropped = len(draft_input.alarms) - len(draft.alarms)
        if dropped:
            logger.warning("Dropped %d of %d alarm configurations", dropped, len(draft_input.alarms))
        return self.gateway.save_event(draft)


__all__ = ["CalendarService"]
