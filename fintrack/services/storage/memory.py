"""
In-Memory Audit Storage

Keeps the most recent audit events of the running process.
Nothing survives a restart.
"""

from collections import deque
from typing import Optional

from fintrack.models.audit import AuditEvent, AuditEventType
from fintrack.services.storage.interface import AuditStorageInterface


class InMemoryAuditStorage(AuditStorageInterface):
    """Bounded audit log; the oldest events are dropped first."""

    def __init__(self, max_events: int = 1000):
        if max_events < 1:
            raise ValueError("max_events must be at least 1")
        self._events: deque[AuditEvent] = deque(maxlen=max_events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def list_events(
        self,
        event_type: Optional[AuditEventType] = None,
        limit: Optional[int] = None,
    ) -> list[AuditEvent]:
        events = [
            e for e in self._events
            if event_type is None or e.event_type == event_type
        ]
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events

    def __len__(self) -> int:
        return len(self._events)
