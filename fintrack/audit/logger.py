"""
Audit Logger

DESIGN DECISION: Every ledger operation is logged, accepted or rejected.
This provides:
1. Complete traceability of balance changes
2. Debugging capability when an operation is refused
3. A trail that survives logout (the user-facing history does not)

The audit logger:
- Is synchronous; the ledger is single-threaded and in-memory
- Gracefully handles failures (a broken sink never breaks a transfer)
- Supports correlation IDs to trace one login session
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import structlog

from fintrack.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from fintrack.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(debug_mode: bool = False) -> int:
    """
    Set the level structlog filters on (it defers to stdlib logging).

    Debug mode lets DEBUG audit events (balance inquiries) through.
    Returns the level applied to the "fintrack" logger.
    """
    level = logging.DEBUG if debug_mode else logging.INFO
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("fintrack").setLevel(level)
    return level


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An optional audit sink (for inspection while the process runs)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
        environment: Optional[str] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Sink for audit events.
                    If None, only logs locally.
            environment: Bound to every log line when given
        """
        self._storage = storage
        self._environment = environment
        self._logger = structlog.get_logger("fintrack.audit")
        if environment:
            self._logger = self._logger.bind(environment=environment)

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    @property
    def environment(self) -> Optional[str]:
        return self._environment

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Appends to the sink if available.

        Returns True if the sink write succeeded (or no sink configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage is not None:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_session_started(
        self,
        account_id: UUID,
        email: str,
        starting_balance: Decimal,
        correlation_id: UUID,
    ) -> None:
        """Log a successful login."""
        self.log(AuditEventBuilder.session_started(
            account_id=account_id,
            email=email,
            starting_balance=starting_balance,
            correlation_id=correlation_id,
        ))

    def log_login_rejected(
        self,
        error_code: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a login refused for invalid input."""
        self.log(AuditEventBuilder.login_rejected(
            error_code=error_code,
            reason=reason,
            correlation_id=correlation_id,
        ))

    def log_balance_queried(
        self,
        account_id: UUID,
        balance: Decimal,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.balance_queried(
            account_id=account_id,
            balance=balance,
            correlation_id=correlation_id,
        ))

    def log_transfer_completed(
        self,
        account_id: UUID,
        amount: Decimal,
        destination: str,
        new_balance: Decimal,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.transfer_completed(
            account_id=account_id,
            amount=amount,
            destination=destination,
            new_balance=new_balance,
            correlation_id=correlation_id,
        ))

    def log_transfer_rejected(
        self,
        error_code: str,
        reason: str,
        account_id: Optional[UUID] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transfer_rejected(
            error_code=error_code,
            reason=reason,
            account_id=account_id,
            correlation_id=correlation_id,
        ))

    def log_receipt_completed(
        self,
        account_id: UUID,
        amount: Decimal,
        origin: str,
        new_balance: Decimal,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.receipt_completed(
            account_id=account_id,
            amount=amount,
            origin=origin,
            new_balance=new_balance,
            correlation_id=correlation_id,
        ))

    def log_receipt_rejected(
        self,
        error_code: str,
        reason: str,
        account_id: Optional[UUID] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.receipt_rejected(
            error_code=error_code,
            reason=reason,
            account_id=account_id,
            correlation_id=correlation_id,
        ))

    def log_operation_rejected(
        self,
        operation: str,
        error_code: str,
    ) -> None:
        """Log an operation attempted while logged out."""
        self.log(AuditEventBuilder.operation_rejected(
            operation=operation,
            error_code=error_code,
        ))

    def log_session_ended(
        self,
        account_id: UUID,
        final_balance: Decimal,
        history_size: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.session_ended(
            account_id=account_id,
            final_balance=final_balance,
            history_size=history_size,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    The ledger opens one per login and tags every event of that
    session with it.
    """
    return uuid4()
