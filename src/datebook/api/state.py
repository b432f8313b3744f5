from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..services import CalendarService, ServiceContext


@dataclass(slots=True)
class ApiState:
    """Lazily built services shared by every registered tool."""

    _context: Optional[ServiceContext] = field(default=None)
    _calendar: Optional[CalendarService] = field(default=None)

    @property
    def context(self) -> ServiceContext:
        if self._context is None:
            self._context = ServiceContext()
        return self._context

    @property
    def calendar(self) -> CalendarService:
        if self._calendar is None:
            self._calendar = CalendarService(self.context)
        return self._calendar

    def configure(self, context: ServiceContext) -> None:
        self._context = context
        self._calendar = None

    def reset(self) -> None:
        self._context = None
        self._calendar = None


api_state = ApiState()
