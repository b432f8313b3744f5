"""Core configuration and persistence utilities."""

from .calendar_store import CALENDAR_STATE_FILE, DEFAULT_CALENDAR_STATE, CalendarStore
from .config import APP_NAME, DATA_DIR

__all__ = [
    "APP_NAME",
    "CALENDAR_STATE_FILE",
    "CalendarStore",
    "DATA_DIR",
    "DEFAULT_CALENDAR_STATE",
]
