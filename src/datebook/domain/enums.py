from __future__ import annotations

from enum import Enum


class EventStatus(str, Enum):
    NONE = "none"
    TENTATIVE = "tentative"
    CONFIRMED = "confirmed"
    CANCELED = "canceled"


class EventAvailability(str, Enum):
    NOT_SUPPORTED = "notSupported"
    BUSY = "busy"
    FREE = "free"
    TENTATIVE = "tentative"
    UNAVAILABLE = "unavailable"


class ProximityTrigger(str, Enum):
    ENTER = "enter"
    LEAVE = "leave"


class Sound(str, Enum):
    """System alert sounds an alarm may play."""

    BASSO = "Basso"
    BLOW = "Blow"
    BOTTLE = "Bottle"
    FROG = "Frog"
    FUNK = "Funk"
    GLASS = "Glass"
    HERO = "Hero"
    MORSE = "Morse"
    PING = "Ping"
    POP = "Pop"
    PURR = "Purr"
    SOSUMI = "Sosumi"
    SUBMARINE = "Submarine"
    TINK = "Tink"

    @classmethod
    def lookup(cls, name: str) -> "Sound | None":
        try:
            return cls(name)
        except ValueError:
            return None
