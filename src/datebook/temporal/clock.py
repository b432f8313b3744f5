from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from dateutil import tz as dateutil_tz


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Return the named IANA zone, or the system's local zone when ``name`` is empty."""

    if name:
        return ZoneInfo(name)
    return dateutil_tz.tzlocal()


def _system_now(zone: tzinfo) -> datetime:
    return datetime.now(zone)


@dataclass(frozen=True, slots=True)
class ClockReading:
    now: datetime
    tz: tzinfo


@dataclass(frozen=True, slots=True)
class Clock:
    """Source of "now" and the current timezone, read once per tool call."""

    tz: tzinfo = field(default_factory=dateutil_tz.tzlocal)
    now_provider: Callable[[tzinfo], datetime] = _system_now

    def read(self) -> ClockReading:
        return ClockReading(now=self.now_provider(self.tz), tz=self.tz)

    @classmethod
    def fixed(cls, now: datetime, tz: tzinfo) -> "Clock":
        return cls(tz=tz, now_provider=lambda _zone: now)


__all__ = ["Clock", "ClockReading", "resolve_timezone"]
