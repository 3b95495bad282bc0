"""Process-wide catalog of event types and their declared settings."""

from __future__ import annotations

import threading
from typing import Dict, Iterable, Optional, Tuple

from .models import EventType


class EventTypeCatalog:
    """Thread-safe registry of event types keyed by name.

    ``list_event_types`` hands out an immutable snapshot in registration order;
    callers sort as they need.
    """

    def __init__(self, event_types: Iterable[EventType] = ()) -> None:
        self._lock = threading.Lock()
        self._event_types: Dict[str, EventType] = {}
        for event_type in event_types:
            self.register(event_type)

    def register(self, event_type: EventType) -> None:
        """Add ``event_type``, replacing any type registered under the same name."""

        with self._lock:
            self._event_types[event_type.name] = event_type

    def get(self, name: str) -> Optional[EventType]:
        with self._lock:
            return self._event_types.get(name)

    def list_event_types(self) -> Tuple[EventType, ...]:
        with self._lock:
            return tuple(self._event_types.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._event_types)
