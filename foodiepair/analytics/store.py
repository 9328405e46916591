from __future__ import annotations

import time
from collections import deque
from typing import Any

MAX_EVENTS = 10_000

# Oldest events fall off once the buffer is full
_events: deque[dict[str, Any]] = deque(maxlen=MAX_EVENTS)


def record_event(event_type: str, data: dict[str, Any]) -> dict[str, Any]:
    event = {"type": event_type, "timestamp": time.time(), **data}
    _events.append(event)
    return event


def get_events(event_type: str | None = None) -> list[dict[str, Any]]:
    """Return recorded events, oldest first, optionally of a single type."""
    return [e for e in _events if event_type is None or e["type"] == event_type]


def clear_events() -> None:
    _events.clear()
