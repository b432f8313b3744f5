from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..config import AppSettings, get_settings
from ..core import CalendarStore
from ..data import CalendarGateway, LocalCalendarGateway
from ..temporal import Clock, resolve_timezone


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings, the store gateway, and the clock."""

    settings: AppSettings = field(default_factory=get_settings)
    store: Optional[CalendarStore] = None
    clock: Optional[Clock] = None
    gateway: Optional[CalendarGateway] = None

    def __post_init__(self) -> None:
        if self.clock is None:
            self.clock = Clock(tz=resolve_timezone(self.settings.calendar.timezone))
        if self.gateway is None:
            if self.store is None:
                self.store = CalendarStore(
                    self.settings.store.path,
                    access_granted=self.settings.calendar.access_granted,
                )
            self.gateway = LocalCalendarGateway(
                store=self.store,
                default_calendar_title=self.settings.calendar.default_calendar,
            )
