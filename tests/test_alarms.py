from __future__ import annotations

import logging

import pytest

from conftest import NEW_YORK, local
from datebook.domain import AbsoluteAlarm, ProximityAlarm, ProximityTrigger, RelativeAlarm, Sound
from datebook.services.alarms import build_alarm, build_alarms


def test_relative_minutes_become_negative_offset():
    alarm = build_alarm({"type": "relative", "minutes": 15}, NEW_YORK)

    assert alarm == RelativeAlarm(offset_seconds=-900)


def test_type_defaults_to_relative():
    alarm = build_alarm({"minutes": 5}, NEW_YORK)

    assert isinstance(alarm, RelativeAlarm)
    assert alarm.offset_seconds == -300


def test_negative_minutes_fire_after_start():
    alarm = build_alarm({"type": "relative", "minutes": -10}, NEW_YORK)

    assert alarm.offset_seconds == 600


def test_string_minutes_are_rejected():
    assert build_alarm({"type": "relative", "minutes": "15"}, NEW_YORK) is None


def test_absolute_alarm_uses_local_time():
    alarm = build_alarm({"type": "absolute", "datetime": "2024-03-01T08:45:00"}, NEW_YORK)

    assert isinstance(alarm, AbsoluteAlarm)
    assert alarm.trigger_at == local(2024, 3, 1, 8, 45)


def test_absolute_alarm_requires_a_time(caplog):
    with caplog.at_level(logging.ERROR, logger="datebook.services.alarms"):
        alarm = build_alarm({"type": "absolute", "datetime": "2024-03-01"}, NEW_YORK)

    assert alarm is None
    assert "must include time component" in caplog.text


def test_absolute_alarm_with_timezone_suffix_is_dropped():
    assert build_alarm({"type": "absolute", "datetime": "2024-03-01T08:45:00Z"}, NEW_YORK) is None


def test_proximity_alarm_defaults():
    alarm = build_alarm(
        {"type": "proximity", "locationTitle": "Office", "latitude": 40.7, "longitude": -74.0},
        NEW_YORK,
    )

    assert isinstance(alarm, ProximityAlarm)
    assert alarm.location.title == "Office"
    assert alarm.location.radius == 200.0
    assert alarm.proximity is ProximityTrigger.ENTER


def test_proximity_alarm_leave_with_radius():
    alarm = build_alarm(
        {
            "type": "proximity",
            "locationTitle": "Home",
            "latitude": 40.7,
            "longitude": -74.0,
            "radius": 50,
            "proximity": "leave",
        },
        NEW_YORK,
    )

    assert alarm.proximity is ProximityTrigger.LEAVE
    assert alarm.location.radius == 50.0


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "proximity", "locationTitle": "Office", "longitude": -74.0},
        {"type": "proximity", "latitude": 40.7, "longitude": -74.0},
        {"type": "proximity", "locationTitle": "Office", "latitude": 140.0, "longitude": 0.0},
        {"type": "proximity", "locationTitle": "Office", "latitude": 0.0, "longitude": 0.0, "proximity": "near"},
    ],
)
def test_invalid_proximity_alarms_are_dropped(payload):
    assert build_alarm(payload, NEW_YORK) is None


def test_sound_and_email_are_attached():
    alarm = build_alarm(
        {"type": "relative", "minutes": 30, "sound": "Glass", "emailAddress": "me@example.com"},
        NEW_YORK,
    )

    assert alarm.sound is Sound.GLASS
    assert alarm.email_address == "me@example.com"


def test_unknown_sound_keeps_the_alarm(caplog):
    with caplog.at_level(logging.WARNING, logger="datebook.services.alarms"):
        alarm = build_alarm({"type": "relative", "minutes": 30, "sound": "Kazoo"}, NEW_YORK)

    assert alarm == RelativeAlarm(offset_seconds=-1800)
    assert "Kazoo" in caplog.text


def test_build_alarms_skips_invalid_entries():
    payloads = [
        {"type": "relative", "minutes": 10},
        {"type": "snooze", "minutes": 10},
        "ten minutes before",
        {"type": "absolute", "datetime": "2024-03-01"},
        {"type": "absolute", "datetime": "2024-03-01T07:00:00"},
    ]

    alarms = build_alarms(payloads, NEW_YORK)

    assert alarms == [
        RelativeAlarm(offset_seconds=-600),
        AbsoluteAlarm(trigger_at=local(2024, 3, 1, 7)),
    ]


def test_build_alarms_accepts_none():
    assert build_alarms(None, NEW_YORK) == []


@pytest.mark.parametrize("alarm_type", [["absolute"], {"kind": "relative"}, 5])
def test_non_string_type_drops_only_that_alarm(alarm_type):
    alarms = build_alarms([{"type": alarm_type, "minutes": 5}, {"minutes": 15}], NEW_YORK)

    assert alarms == [RelativeAlarm(offset_seconds=-900)]
