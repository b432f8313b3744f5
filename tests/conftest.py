from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict
from zoneinfo import ZoneInfo

import pytest

from datebook.api import api_state
from datebook.config import AppSettings, CalendarSettings, LoggingSettings, ServerSettings, StoreSettings
from datebook.core import CalendarStore
from datebook.data import LocalCalendarGateway
from datebook.domain import CalendarEvent, CalendarInfo
from datebook.services import CalendarService, ServiceContext
from datebook.temporal import Clock

NEW_YORK = ZoneInfo("America/New_York")
FIXED_NOW = datetime(2024, 6, 10, 9, 0, tzinfo=NEW_YORK)


def local(*args: int) -> datetime:
    return datetime(*args, tzinfo=NEW_YORK)


@pytest.fixture
def tz() -> ZoneInfo:
    return NEW_YORK


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        calendar=CalendarSettings(timezone="America/New_York", default_calendar="Calendar", access_granted=True),
        store=StoreSettings(path=tmp_path / "calendar_state.json"),
        logging=LoggingSettings(level="DEBUG", file=tmp_path / "datebook.log"),
        server=ServerSettings(mcp_host="127.0.0.1", mcp_port=8765, api_host="127.0.0.1", api_port=8000),
    )


@pytest.fixture
def store(settings: AppSettings) -> CalendarStore:
    return CalendarStore(settings.store.path)


@pytest.fixture
def gateway(store: CalendarStore) -> LocalCalendarGateway:
    return LocalCalendarGateway(store=store)


@pytest.fixture
def work(gateway: LocalCalendarGateway) -> CalendarInfo:
    return gateway.create_calendar("Work", color="blue")


@pytest.fixture
def home(gateway: LocalCalendarGateway) -> CalendarInfo:
    return gateway.create_calendar("Home", color="green")


@pytest.fixture
def context(settings: AppSettings, store: CalendarStore, gateway: LocalCalendarGateway) -> ServiceContext:
    return ServiceContext(
        settings=settings,
        store=store,
        clock=Clock.fixed(FIXED_NOW, NEW_YORK),
        gateway=gateway,
    )


@pytest.fixture
def service(context: ServiceContext) -> CalendarService:
    return CalendarService(context)


@pytest.fixture
def configured_api(context: ServiceContext):
    api_state.configure(context)
    yield api_state
    api_state.reset()


def add_event(store: CalendarStore, calendar: CalendarInfo, **fields: Any) -> CalendarEvent:
    """Write an event record straight into the store, bypassing the builder."""

    def _insert(state: Dict[str, Any]) -> CalendarEvent:
        event = CalendarEvent(id=store.consume_id(state, "event"), calendar=calendar, **fields)
        state.setdefault("events", []).append(event.to_record())
        return event

    return store.mutate(_insert)
