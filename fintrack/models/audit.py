"""
Audit Models for FinTrack

Every ledger operation (accepted or rejected) is logged for audit purposes.
This provides:
1. Traceability of every balance change
2. Debugging information when an operation is refused
3. A record that outlives the in-session history

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
The transaction history shown to the user is cleared on logout; the
audit trail is not.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Each ledger operation has an accepted and, where it can fail,
    a rejected variant.
    """
    # Session lifecycle
    SESSION_STARTED = "session_started"
    LOGIN_REJECTED = "login_rejected"
    SESSION_ENDED = "session_ended"

    # Balance
    BALANCE_QUERIED = "balance_queried"

    # Money movement
    TRANSFER_COMPLETED = "transfer_completed"
    TRANSFER_REJECTED = "transfer_rejected"
    RECEIPT_COMPLETED = "receipt_completed"
    RECEIPT_REJECTED = "receipt_rejected"

    # Operations attempted without an active session
    OPERATION_REJECTED = "operation_rejected"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every ledger operation creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which account is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'account', 'session')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - one id per login session
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one login session"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    # Additional data (event-specific)
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    # User action tracking
    is_user_action: bool = Field(
        default=True,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.session_started(account_id, email, balance, correlation_id)
        event = AuditEventBuilder.transfer_rejected("insufficient_funds", ...)
    """

    @staticmethod
    def session_started(
        account_id: UUID,
        email: str,
        starting_balance: Decimal,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_STARTED,
            entity_type="account",
            entity_id=account_id,
            correlation_id=correlation_id,
            description=f"Session started for {email}",
            details={
                "email": email,
                "starting_balance": str(starting_balance),
            },
        )

    @staticmethod
    def login_rejected(
        error_code: str,
        reason: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="session",
            correlation_id=correlation_id,
            description="Login rejected: invalid input",
            error_code=error_code,
            error_message=reason,
        )

    @staticmethod
    def balance_queried(
        account_id: UUID,
        balance: Decimal,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCE_QUERIED,
            severity=AuditSeverity.DEBUG,
            entity_type="account",
            entity_id=account_id,
            correlation_id=correlation_id,
            description="Balance queried",
            details={
                "balance": str(balance),
            },
        )

    @staticmethod
    def transfer_completed(
        account_id: UUID,
        amount: Decimal,
        destination: str,
        new_balance: Decimal,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSFER_COMPLETED,
            entity_type="account",
            entity_id=account_id,
            correlation_id=correlation_id,
            description=f"Transfer of {amount} completed",
            details={
                "amount": str(amount),
                "destination": destination,
                "new_balance": str(new_balance),
            },
        )

    @staticmethod
    def transfer_rejected(
        error_code: str,
        reason: str,
        account_id: Optional[UUID] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSFER_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="account",
            entity_id=account_id,
            correlation_id=correlation_id,
            description=f"Transfer rejected: {error_code}",
            error_code=error_code,
            error_message=reason,
        )

    @staticmethod
    def receipt_completed(
        account_id: UUID,
        amount: Decimal,
        origin: str,
        new_balance: Decimal,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECEIPT_COMPLETED,
            entity_type="account",
            entity_id=account_id,
            correlation_id=correlation_id,
            description=f"Receipt of {amount} completed",
            details={
                "amount": str(amount),
                "origin": origin,
                "new_balance": str(new_balance),
            },
        )

    @staticmethod
    def receipt_rejected(
        error_code: str,
        reason: str,
        account_id: Optional[UUID] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECEIPT_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="account",
            entity_id=account_id,
            correlation_id=correlation_id,
            description=f"Receipt rejected: {error_code}",
            error_code=error_code,
            error_message=reason,
        )

    @staticmethod
    def operation_rejected(
        operation: str,
        error_code: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OPERATION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="session",
            description=f"{operation} attempted without an active session",
            details={
                "operation": operation,
            },
            error_code=error_code,
        )

    @staticmethod
    def session_ended(
        account_id: UUID,
        final_balance: Decimal,
        history_size: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_ENDED,
            entity_type="account",
            entity_id=account_id,
            correlation_id=correlation_id,
            description="Session ended",
            details={
                "final_balance": str(final_balance),
                "history_size": history_size,
            },
        )
