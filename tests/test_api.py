from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import FIXED_NOW, NEW_YORK, add_event, local
from datebook.api import api_state, call_api, get_api_functions
from datebook.core import CalendarStore
from datebook.domain import UnauthorizedError
from datebook.services import ServiceContext
from datebook.services.http import app
from datebook.temporal import Clock


@pytest.fixture
def client(configured_api) -> TestClient:
    return TestClient(app)


def _function(name):
    return next(func for func in get_api_functions() if func.name == name)


def test_registered_tools():
    names = {func.name for func in get_api_functions()}

    assert {"calendars_list", "events_fetch", "events_create", "list_available_tools"} <= names


def test_fetch_schema_describes_filters():
    schema = _function("events_fetch").parameter_schema
    properties = schema["properties"]

    assert "required" not in schema
    assert schema["additionalProperties"] is False
    assert properties["calendars"] == {"type": "array", "items": {"type": "string"}}
    assert properties["include_all_day"] == {"type": "boolean", "default": True}
    assert properties["status"]["enum"] == ["none", "tentative", "confirmed", "canceled"]
    assert "notSupported" in properties["availability"]["enum"]


def test_create_schema_lists_required_fields():
    function = _function("events_create")
    schema = function.parameter_schema

    assert schema["required"] == ["title", "start", "end"]
    assert schema["properties"]["availability"]["default"] == "busy"
    assert schema["properties"]["alarms"]["type"] == "array"
    assert function.destructive is True
    assert function.read_only is False


def test_list_available_tools_is_sorted():
    tools = call_api("list_available_tools")["tools"]

    assert [tool["name"] for tool in tools] == sorted(tool["name"] for tool in tools)
    assert all("parameters" in tool for tool in tools)


def test_call_api_unknown_tool():
    with pytest.raises(KeyError):
        call_api("events_delete")


def test_calendars_list(configured_api, work, home):
    result = call_api("calendars_list")

    assert [calendar["title"] for calendar in result["calendars"]] == ["Work", "Home"]
    assert result["calendars"][0] == {
        "title": "Work",
        "source": "Local",
        "color": "blue",
        "is_editable": True,
        "is_subscribed": False,
    }


def test_events_fetch_serializes_in_local_time(configured_api, store, work):
    add_event(
        store,
        work,
        title="Standup",
        starts_at=local(2024, 3, 1, 14),
        ends_at=local(2024, 3, 1, 14, 15),
        location="Room 4B",
    )

    result = call_api("events_fetch", start="2024-03-01", calendars=["work"], status="none")

    assert result["events"] == [
        {
            "id": "event_0001",
            "title": "Standup",
            "start": "2024-03-01T14:00:00-05:00",
            "end": "2024-03-01T14:15:00-05:00",
            "is_all_day": False,
            "calendar": "Work",
            "location": "Room 4B",
            "status": "none",
            "availability": "busy",
            "alarms": [],
            "has_recurrence_rules": False,
        }
    ]


def test_events_create_returns_the_event(configured_api, work):
    result = call_api(
        "events_create",
        title="Lunch",
        start="2024-03-01T12:00:00",
        end="2024-03-01T13:00:00",
        alarms=[{"type": "relative", "minutes": 15}],
    )

    event = result["event"]
    assert event["calendar"] == "Work"
    assert event["start"] == "2024-03-01T12:00:00-05:00"
    assert event["alarms"] == [{"type": "relative", "offset_seconds": -900}]


def test_http_lists_functions(client):
    response = client.get("/api/functions")

    assert response.status_code == 200
    names = {function["name"] for function in response.json()["functions"]}
    assert "events_create" in names


def test_http_creates_event(client, work):
    response = client.post(
        "/api/functions/events_create",
        json={"arguments": {"title": "Review", "start": "2024-03-01", "end": "2024-03-01", "is_all_day": True}},
    )

    assert response.status_code == 200
    event = response.json()["result"]["event"]
    assert event["is_all_day"] is True
    assert event["start"] == "2024-03-01T00:00:00-05:00"
    assert event["end"] == "2024-03-01T23:59:59-05:00"


def test_http_unknown_function_is_404(client):
    response = client.post("/api/functions/events_delete", json={"arguments": {}})

    assert response.status_code == 404


@pytest.mark.parametrize(
    "arguments",
    [
        {"title": "Review", "start": "someday", "end": "2024-03-01"},
        {"title": "Review", "start": "2024-03-02T10:00:00", "end": "2024-03-01T10:00:00"},
        {"title": "Review", "start": "2024-03-01"},
        {"title": "Review", "start": "2024-03-01", "end": "2024-03-01", "availability": "maybe"},
    ],
)
def test_http_bad_arguments_are_400(client, work, arguments):
    response = client.post("/api/functions/events_create", json={"arguments": arguments})

    assert response.status_code == 400


def test_http_fetch_bad_date_is_400(client):
    response = client.post("/api/functions/events_fetch", json={"arguments": {"start": "soon"}})

    assert response.status_code == 400


def test_unauthorized_access(settings, tmp_path):
    store = CalendarStore(tmp_path / "locked.json", access_granted=False)
    api_state.configure(ServiceContext(settings=settings, store=store, clock=Clock.fixed(FIXED_NOW, NEW_YORK)))
    try:
        with pytest.raises(UnauthorizedError):
            call_api("calendars_list")

        response = TestClient(app).post("/api/functions/calendars_list", json={"arguments": {}})
        assert response.status_code == 403
    finally:
        api_state.reset()


def test_call_api_accepts_camel_case_arguments(configured_api, store, work):
    add_event(
        store,
        work,
        title="Holiday",
        starts_at=local(2024, 3, 1),
        ends_at=local(2024, 3, 1, 23, 59, 59),
        is_all_day=True,
    )
    add_event(store, work, title="Standup", starts_at=local(2024, 3, 1, 9), ends_at=local(2024, 3, 1, 9, 15))

    result = call_api("events_fetch", start="2024-03-01", includeAllDay=False, hasAlarms=False, isRecurring=False)

    assert [event["title"] for event in result["events"]] == ["Standup"]


def test_http_accepts_camel_case_arguments(client, work):
    response = client.post(
        "/api/functions/events_create",
        json={"arguments": {"title": "Offsite", "start": "2024-03-04", "end": "2024-03-05", "isAllDay": True}},
    )

    assert response.status_code == 200
    event = response.json()["result"]["event"]
    assert event["is_all_day"] is True
    assert event["end"] == "2024-03-05T23:59:59-05:00"
