from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple, Union

from .enums import EventAvailability, EventStatus, ProximityTrigger, Sound
from .errors import InvalidRangeError


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise ValueError(f"Unsupported datetime value: {value!r}")


@dataclass(frozen=True, slots=True)
class ParsedTemporal:
    """An instant plus whether the source string named a whole calendar day."""

    instant: datetime
    is_date_only: bool = False


@dataclass(frozen=True, slots=True)
class TemporalRange:
    """Half-open ``[start, end)`` interval of aware datetimes."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise InvalidRangeError(
                f"Range end {self.end.isoformat()} must be after start {self.start.isoformat()}"
            )

    def overlaps(self, starts_at: datetime, ends_at: datetime) -> bool:
        return starts_at < self.end and ends_at > self.start


@dataclass(frozen=True, slots=True)
class AllDaySpan:
    start_of_day: datetime
    end_of_day: datetime


@dataclass(frozen=True, slots=True)
class CalendarInfo:
    id: str
    title: str
    source: str = "Local"
    color: Optional[str] = None
    is_editable: bool = True
    is_subscribed: bool = False

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CalendarInfo":
        return cls(
            id=str(record["id"]),
            title=str(record["title"]),
            source=record.get("source") or "Local",
            color=record.get("color"),
            is_editable=bool(record.get("is_editable", True)),
            is_subscribed=bool(record.get("is_subscribed", False)),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "source": self.source,
            "color": self.color,
            "is_editable": self.is_editable,
            "is_subscribed": self.is_subscribed,
        }


@dataclass(frozen=True, slots=True)
class StructuredLocation:
    title: str
    latitude: float
    longitude: float
    radius: float


@dataclass(frozen=True, slots=True)
class RelativeAlarm:
    offset_seconds: int
    sound: Optional[Sound] = None
    email_address: Optional[str] = None


@dataclass(frozen=True, slots=True)
class AbsoluteAlarm:
    trigger_at: datetime
    sound: Optional[Sound] = None
    email_address: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ProximityAlarm:
    location: StructuredLocation
    proximity: ProximityTrigger = ProximityTrigger.ENTER
    sound: Optional[Sound] = None
    email_address: Optional[str] = None


Alarm = Union[RelativeAlarm, AbsoluteAlarm, ProximityAlarm]


def alarm_to_record(alarm: Alarm) -> Dict[str, Any]:
    record: Dict[str, Any]
    if isinstance(alarm, RelativeAlarm):
        record = {"type": "relative", "offset_seconds": alarm.offset_seconds}
    elif isinstance(alarm, AbsoluteAlarm):
        record = {"type": "absolute", "trigger_at": alarm.trigger_at.isoformat()}
    elif isinstance(alarm, ProximityAlarm):
        record = {
            "type": "proximity",
            "proximity": alarm.proximity.value,
            "location": {
                "title": alarm.location.title,
                "latitude": alarm.location.latitude,
                "longitude": alarm.location.longitude,
                "radius": alarm.location.radius,
            },
        }
    else:
        raise TypeError(f"Unsupported alarm: {alarm!r}")
    record["sound"] = alarm.sound.value if alarm.sound else None
    record["email_address"] = alarm.email_address
    return record


def alarm_from_record(record: Dict[str, Any]) -> Alarm:
    sound = Sound.lookup(record["sound"]) if record.get("sound") else None
    email = record.get("email_address")
    kind = record.get("type")
    if kind == "relative":
        return RelativeAlarm(offset_seconds=int(record["offset_seconds"]), sound=sound, email_address=email)
    if kind == "absolute":
        return AbsoluteAlarm(trigger_at=_parse_datetime(record["trigger_at"]), sound=sound, email_address=email)
    if kind == "proximity":
        location = record["location"]
        return ProximityAlarm(
            location=StructuredLocation(
                title=str(location["title"]),
                latitude=float(location["latitude"]),
                longitude=float(location["longitude"]),
                radius=float(location["radius"]),
            ),
            proximity=ProximityTrigger(record.get("proximity") or ProximityTrigger.ENTER),
            sound=sound,
            email_address=email,
        )
    raise ValueError(f"Unknown alarm type in record: {kind!r}")


@dataclass(frozen=True, slots=True)
class EventDraft:
    """A fully validated event ready to be handed to the store."""

    title: str
    starts_at: datetime
    ends_at: datetime
    calendar: CalendarInfo
    is_all_day: bool = False
    location: Optional[str] = None
    notes: Optional[str] = None
    url: Optional[str] = None
    availability: EventAvailability = EventAvailability.BUSY
    alarms: Tuple[Alarm, ...] = ()


@dataclass(slots=True)
class CalendarEvent:
    id: str
    title: str
    starts_at: datetime
    ends_at: datetime
    calendar: CalendarInfo
    is_all_day: bool = False
    location: Optional[str] = None
    notes: Optional[str] = None
    url: Optional[str] = None
    status: EventStatus = EventStatus.NONE
    availability: EventAvailability = EventAvailability.BUSY
    alarms: Tuple[Alarm, ...] = ()
    recurrence_rules: Tuple[str, ...] = ()
    created_at: Optional[datetime] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_alarms(self) -> bool:
        return len(self.alarms) > 0

    @property
    def has_recurrence_rules(self) -> bool:
        return len(self.recurrence_rules) > 0

    @classmethod
    def from_draft(cls, draft: EventDraft, *, event_id: str, created_at: Optional[datetime] = None) -> "CalendarEvent":
        return cls(
            id=event_id,
            title=draft.title,
            starts_at=draft.starts_at,
            ends_at=draft.ends_at,
            calendar=draft.calendar,
            is_all_day=draft.is_all_day,
            location=draft.location,
            notes=draft.notes,
            url=draft.url,
            availability=draft.availability,
            alarms=draft.alarms,
            created_at=created_at,
        )

    @classmethod
    def from_record(cls, record: Dict[str, Any], *, calendar: CalendarInfo) -> "CalendarEvent":
        return cls(
            id=str(record["id"]),
            title=str(record["title"]),
            starts_at=_parse_datetime(record["starts_at"]),
            ends_at=_parse_datetime(record["ends_at"]),
            calendar=calendar,
            is_all_day=bool(record.get("is_all_day", False)),
            location=record.get("location"),
            notes=record.get("notes"),
            url=record.get("url"),
            status=EventStatus(record.get("status") or EventStatus.NONE),
            availability=EventAvailability(record.get("availability") or EventAvailability.BUSY),
            alarms=tuple(alarm_from_record(item) for item in record.get("alarms") or ()),
            recurrence_rules=tuple(str(rule) for rule in record.get("recurrence_rules") or ()),
            created_at=_parse_datetime(record["created_at"]) if record.get("created_at") else None,
            metadata=dict(record.get("metadata") or {}),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "calendar_id": self.calendar.id,
            "title": self.title,
            "starts_at": self.starts_at.isoformat(),
            "ends_at": self.ends_at.isoformat(),
            "is_all_day": self.is_all_day,
            "location": self.location,
            "notes": self.notes,
            "url": self.url,
            "status": self.status.value,
            "availability": self.availability.value,
            "alarms": [alarm_to_record(alarm) for alarm in self.alarms],
            "recurrence_rules": list(self.recurrence_rules),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "metadata": self.metadata,
        }
