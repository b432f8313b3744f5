from __future__ import annotations

import pytest

from conftest import NEW_YORK, local
from datebook.domain import (
    CalendarInfo,
    EventAvailability,
    InvalidRangeError,
    MissingRequiredFieldError,
    RelativeAlarm,
    TemporalParseError,
)
from datebook.services import EventDraftInput, build_event_draft, resolve_calendar

WORK = CalendarInfo(id="calendar_0001", title="Work")
HOME = CalendarInfo(id="calendar_0002", title="Home")


def _build(**fields):
    return build_event_draft(
        EventDraftInput(**fields),
        calendars=[WORK, HOME],
        default_calendar=WORK,
        tz=NEW_YORK,
    )


def test_timed_event():
    draft = _build(
        title="Review",
        start="2024-03-01T10:00:00",
        end="2024-03-01T11:30:00",
        location="Room 1",
        notes="Bring slides",
        availability=EventAvailability.TENTATIVE,
    )

    assert draft.title == "Review"
    assert draft.starts_at == local(2024, 3, 1, 10)
    assert draft.ends_at == local(2024, 3, 1, 11, 30)
    assert draft.calendar == WORK
    assert draft.location == "Room 1"
    assert draft.notes == "Bring slides"
    assert draft.availability is EventAvailability.TENTATIVE
    assert draft.is_all_day is False


def test_date_only_bounds_on_timed_event_are_midnights():
    draft = _build(title="Offsite", start="2024-03-01", end="2024-03-02")

    assert draft.starts_at == local(2024, 3, 1)
    assert draft.ends_at == local(2024, 3, 2)


def test_all_day_event_spans_whole_days():
    draft = _build(title="Conference", start="2024-03-01T15:00:00", end="2024-03-03", is_all_day=True)

    assert draft.is_all_day is True
    assert draft.starts_at == local(2024, 3, 1, 0, 0, 0)
    assert draft.ends_at == local(2024, 3, 3, 23, 59, 59)


def test_single_day_all_day_event():
    draft = _build(title="Holiday", start="2024-07-04", end="2024-07-04", is_all_day=True)

    assert draft.starts_at == local(2024, 7, 4)
    assert draft.ends_at == local(2024, 7, 4, 23, 59, 59)


def test_zero_length_event_is_allowed():
    draft = _build(title="Reminder", start="2024-03-01T10:00:00", end="2024-03-01T10:00:00")

    assert draft.starts_at == draft.ends_at


def test_end_before_start_is_rejected():
    with pytest.raises(InvalidRangeError):
        _build(title="Backwards", start="2024-03-01T10:00:00", end="2024-03-01T09:00:00")


@pytest.mark.parametrize(
    "fields, missing",
    [
        ({"start": "2024-03-01", "end": "2024-03-01"}, "title"),
        ({"title": "   ", "start": "2024-03-01", "end": "2024-03-01"}, "title"),
        ({"title": "Lunch", "end": "2024-03-01"}, "start"),
        ({"title": "Lunch", "start": "2024-03-01"}, "end"),
        ({"title": "Lunch", "start": "", "end": "2024-03-01"}, "start"),
    ],
)
def test_missing_required_fields(fields, missing):
    with pytest.raises(MissingRequiredFieldError) as excinfo:
        _build(**fields)

    assert excinfo.value.field_name == missing


def test_unreadable_boundary_is_reported_with_its_cause():
    with pytest.raises(MissingRequiredFieldError) as excinfo:
        _build(title="Lunch", start="next tuesday", end="2024-03-01T13:00:00")

    assert "Expected ISO 8601 format" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, TemporalParseError)


def test_zoned_boundary_is_kept_as_an_instant():
    draft = _build(title="Call", start="2024-03-01T15:00:00Z", end="2024-03-01T16:00:00Z")

    assert draft.starts_at == local(2024, 3, 1, 10)
    assert draft.ends_at == local(2024, 3, 1, 11)


def test_alarms_are_built_and_invalid_ones_dropped():
    draft = _build(
        title="Dentist",
        start="2024-03-01T10:00:00",
        end="2024-03-01T11:00:00",
        alarms=({"type": "relative", "minutes": 15}, {"type": "absolute", "datetime": "2024-03-01"}),
    )

    assert draft.alarms == (RelativeAlarm(offset_seconds=-900),)


def test_invalid_url_is_dropped():
    draft = _build(title="Call", start="2024-03-01T10:00:00", end="2024-03-01T11:00:00", url="not a url")

    assert draft.url is None


def test_valid_url_is_kept():
    draft = _build(
        title="Call",
        start="2024-03-01T10:00:00",
        end="2024-03-01T11:00:00",
        url="https://meet.example.com/abc",
    )

    assert draft.url == "https://meet.example.com/abc"


def test_named_calendar_is_resolved_case_insensitively():
    draft = _build(title="Chores", start="2024-03-01", end="2024-03-01", calendar="HOME")

    assert draft.calendar == HOME


def test_resolve_calendar_falls_back_to_default():
    assert resolve_calendar("Gym", [WORK, HOME], WORK) == WORK
    assert resolve_calendar(None, [WORK, HOME], HOME) == HOME
