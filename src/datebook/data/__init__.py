"""Data access layer."""

from __future__ import annotations

from .gateway import CalendarGateway, LocalCalendarGateway

__all__ = ["CalendarGateway", "LocalCalendarGateway"]
