"""Alarm construction from untrusted alarm configuration dictionaries.

Each configuration is validated on its own; one that fails is logged and
dropped so the rest of the event can still be created.
"""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from ..domain import (
    AbsoluteAlarm,
    Alarm,
    DatebookError,
    ProximityAlarm,
    ProximityTrigger,
    RelativeAlarm,
    Sound,
    StructuredLocation,
)
from ..temporal import is_date_only, lenient_instant

logger = logging.getLogger(__name__)

DEFAULT_PROXIMITY_RADIUS = 200.0


class _AlarmConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sound: Optional[str] = Field(default=None)
    email_address: Optional[str] = Field(default=None, alias="emailAddress")


class RelativeAlarmConfig(_AlarmConfig):
    minutes: StrictInt


class AbsoluteAlarmConfig(_AlarmConfig):
    datetime_text: str = Field(alias="datetime")


class ProximityAlarmConfig(_AlarmConfig):
    location_title: str = Field(alias="locationTitle")
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    radius: float = Field(default=DEFAULT_PROXIMITY_RADIUS, ge=0)
    proximity: ProximityTrigger = Field(default=ProximityTrigger.ENTER)


def _sound(config: _AlarmConfig) -> Optional[Sound]:
    if not config.sound:
        return None
    sound = Sound.lookup(config.sound)
    if sound is None:
        logger.warning("Ignoring unknown alarm sound: %s", config.sound)
    return sound


def _email(config: _AlarmConfig) -> Optional[str]:
    return config.email_address or None


def _relative(payload: dict, tz: tzinfo) -> Alarm:
    config = RelativeAlarmConfig.model_validate(payload)
    # Positive minutes mean "before the start"; stored offsets are negative seconds.
    return RelativeAlarm(offset_seconds=-config.minutes * 60, sound=_sound(config), email_address=_email(config))


def _absolute(payload: dict, tz: tzinfo) -> Optional[Alarm]:
    config = AbsoluteAlarmConfig.model_validate(payload)
    if is_date_only(config.datetime_text):
        logger.error("Absolute alarm datetime must include time component: %s", config.datetime_text)
        return None
    trigger_at: datetime = lenient_instant(config.datetime_text, tz)
    return AbsoluteAlarm(trigger_at=trigger_at, sound=_sound(config), email_address=_email(config))


def _proximity(payload: dict, tz: tzinfo) -> Alarm:
    config = ProximityAlarmConfig.model_validate(payload)
    location = StructuredLocation(
        title=config.location_title,
        latitude=config.latitude,
        longitude=config.longitude,
        radius=config.radius,
    )
    return ProximityAlarm(
        location=location,
        proximity=config.proximity,
        sound=_sound(config),
        email_address=_email(config),
    )


_BUILDERS = {
    "relative": _relative,
    "absolute": _absolute,
    "proximity": _proximity,
}


def build_alarm(payload: Any, tz: tzinfo) -> Optional[Alarm]:
    """Build one alarm, returning ``None`` when the configuration is unusable."""

    if not isinstance(payload, dict):
        logger.warning("Skipping alarm configuration that is not an object: %r", payload)
        return None
    alarm_type = payload.get("type") or "relative"
    if not isinstance(alarm_type, str):
        logger.error("Alarm type must be a string, got: %r", alarm_type)
        return None
    builder = _BUILDERS.get(alarm_type)
    if builder is None:
        logger.error("Unexpected alarm type encountered: %s", alarm_type)
        return None
    try:
        return builder(payload, tz)
    except ValidationError as exc:
        logger.warning("Skipping invalid %s alarm: %s", alarm_type, exc.errors(include_url=False))
    except DatebookError as exc:
        logger.warning("Skipping %s alarm: %s", alarm_type, exc)
    return None


def build_alarms(payloads: Optional[Iterable[Any]], tz: tzinfo) -> List[Alarm]:
    alarms: list[Alarm] = []
    for payload in payloads or ():
        alarm = build_alarm(payload, tz)
        if alarm is not None:
            alarms.append(alarm)
    return alarms


__all__ = [
    "AbsoluteAlarmConfig",
    "ProximityAlarmConfig",
    "RelativeAlarmConfig",
    "build_alarm",
    "build_alarms",
]
