from __future__ import annotations

import logging
from copy import deepcopy
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import orjson

from ..domain import StoreError
from .config import DATA_DIR

CALENDAR_STATE_FILE = DATA_DIR / "calendar_state.json"

DEFAULT_CALENDAR_STATE: Dict[str, Any] = {
    "calendars": [],
    "events": [],
    "preferences": {
        "default_calendar_id": None,
    },
    "authorization": {
        "granted": True,
        "updated_at": None,
    },
    "counters": {
        "calendar": 0,
        "event": 0,
    },
}

logger = logging.getLogger(__name__)


class CalendarStore:
    """JSON-file persistence for calendars and their events."""

    def __init__(self, path: Optional[Path] = None, *, access_granted: bool = True) -> None:
        self._path = path or CALENDAR_STATE_FILE
        self._access_granted = access_granted
        self._state: Optional[Dict[str, Any]] = None

    @property
    def path(self) -> Path:
        return self._path

    def _initial_state(self) -> Dict[str, Any]:
        state = deepcopy(DEFAULT_CALENDAR_STATE)
        state["authorization"]["granted"] = self._access_granted
        return state

    def _ensure_materialized(self) -> None:
        if self._state is not None:
            return
        if not self._path.exists():
            self._state = self._initial_state()
            self.persist()
            return
        try:
            raw = self._path.read_bytes()
        except OSError as exc:
            raise StoreError(f"Unable to read calendar store at {self._path}") from exc
        if not raw:
            self._state = self._initial_state()
            return
        try:
            self._state = orjson.loads(raw)
        except orjson.JSONDecodeError as exc:
            raise StoreError(f"Calendar store at {self._path} is not valid JSON") from exc
        # Backfill missing keys when upgrading.
        for key, value in DEFAULT_CALENDAR_STATE.items():
            if key not in self._state:
                self._state[key] = deepcopy(value)

    @property
    def data(self) -> Dict[str, Any]:
        self._ensure_materialized()
        assert self._state is not None
        return self._state

    def persist(self) -> None:
        if self._state is None:
            return
        self._write(self._state)

    def _write(self, state: Dict[str, Any]) -> None:
        payload = orjson.dumps(state, option=orjson.OPT_INDENT_2)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_bytes(payload + b"\n")
        except OSError as exc:
            raise StoreError(f"Unable to write calendar store at {self._path}") from exc
        logger.debug("Persisted calendar store to %s", self._path)

    def mutate(self, callback: Callable[[Dict[str, Any]], Any]) -> Any:
        self._ensure_materialized()
        assert self._state is not None
        # The working copy replaces the cached state only once it is on disk.
        working = deepcopy(self._state)
        result = callback(working)
        self._write(working)
        self._state = working
        return result

    def consume_id(self, state: Dict[str, Any], prefix: str) -> str:
        counters = state.setdefault("counters", {})
        current = counters.get(prefix, 0) + 1
        counters[prefix] = current
        return f"{prefix}_{current:04d}"

    @staticmethod
    def utc_now() -> str:
        return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


__all__ = ["CalendarStore", "CALENDAR_STATE_FILE", "DEFAULT_CALENDAR_STATE"]
