"""
Abstract Storage Interface

DESIGN DECISION: Audit events go through an abstract sink.
This allows us to:
1. Keep audit events in memory for the running process and for tests
2. Add a durable sink later without touching the ledger
3. Run with no sink at all (structlog output only)

Account data itself is never stored; sessions are transient.
"""

from abc import ABC, abstractmethod
from typing import Optional

from fintrack.models.audit import AuditEvent, AuditEventType


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Args:
            event: The audit event to store

        Returns:
            True if stored successfully

        Implementations may raise on a failed write; AuditLogger
        reports the failure instead of propagating it.
        """
        pass

    @abstractmethod
    def list_events(
        self,
        event_type: Optional[AuditEventType] = None,
        limit: Optional[int] = None,
    ) -> list[AuditEvent]:
        """
        List stored events, oldest first.

        Args:
            event_type: Only return events of this type
            limit: Return at most this many (the most recent ones)

        Returns:
            List of audit events
        """
        pass
