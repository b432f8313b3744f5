from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..core.config import DATA_DIR

load_dotenv()


@dataclass(frozen=True)
class CalendarSettings:
    timezone: Optional[str]
    default_calendar: str
    access_granted: bool


@dataclass(frozen=True)
class StoreSettings:
    path: Path


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    file: Path


@dataclass(frozen=True)
class ServerSettings:
    mcp_host: str
    mcp_port: int
    api_host: str
    api_port: int


@dataclass(frozen=True)
class AppSettings:
    calendar: CalendarSettings
    store: StoreSettings
    logging: LoggingSettings
    server: ServerSettings


def _bool_from_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    calendar = CalendarSettings(
        timezone=os.getenv("DATEBOOK_TIMEZONE") or None,
        default_calendar=os.getenv("DATEBOOK_DEFAULT_CALENDAR", "Calendar"),
        access_granted=_bool_from_env("DATEBOOK_ACCESS_GRANTED", True),
    )

    store = StoreSettings(
        path=Path(os.getenv("DATEBOOK_STORE_PATH", str(DATA_DIR / "calendar_state.json"))),
    )

    logging = LoggingSettings(
        level=os.getenv("DATEBOOK_LOG_LEVEL", "INFO").upper(),
        file=Path(os.getenv("DATEBOOK_LOG_FILE", str(DATA_DIR / "datebook.log"))),
    )

    server = ServerSettings(
        mcp_host=os.getenv("DATEBOOK_MCP_HOST", "127.0.0.1"),
        mcp_port=_int_from_env("DATEBOOK_MCP_PORT", 8765),
        api_host=os.getenv("DATEBOOK_API_HOST", "127.0.0.1"),
        api_port=_int_from_env("DATEBOOK_API_PORT", 8000),
    )

    return AppSettings(calendar=calendar, store=store, logging=logging, server=server)
