from __future__ import annotations


class DatebookError(Exception):
    """Base class for errors reported to tool callers."""


class TemporalParseError(DatebookError, ValueError):
    """Raised when a date/time string does not match any supported format."""

    def __init__(self, value: str, reason: str = "Unsupported date/time format") -> None:
        super().__init__(f"{reason}: {value!r}")
        self.value = value


class AmbiguousTimezoneError(TemporalParseError):
    """Raised when a string carries a timezone suffix that could not be parsed strictly."""

    def __init__(self, value: str) -> None:
        super().__init__(value, "Timezone present but date/time could not be parsed")


class InvalidRangeError(DatebookError, ValueError):
    """Raised when an explicit end does not fall after its start."""


class MissingRequiredFieldError(DatebookError, ValueError):
    """Raised when an event is built without one of its required fields."""

    def __init__(self, field_name: str, message: str | None = None) -> None:
        super().__init__(message or f"Event {field_name} is required")
        self.field_name = field_name


class UnauthorizedError(DatebookError, PermissionError):
    """Raised when calendar access has not been granted."""


class StoreError(DatebookError, RuntimeError):
    """Raised when the calendar store rejects or fails an operation."""
