"""
Data Models Package

This package contains all Pydantic models used in FinTrack.
Everything the ledger returns or records conforms to these schemas.
"""

from fintrack.models.account import (
    DEFAULT_STARTING_BALANCE,
    Account,
    AmountParseResult,
    BalanceView,
    HistoryEntry,
    HistoryEntryKind,
    LedgerError,
    LedgerErrorKind,
    OperationResult,
    ParseError,
    ReceiptView,
    SessionState,
    TransferReceipt,
    ValidationIssue,
    ValidationResult,
)
from fintrack.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from fintrack.models.money import (
    format_currency,
    to_amount,
)

__all__ = [
    # Ledger models
    "DEFAULT_STARTING_BALANCE",
    "Account",
    "AmountParseResult",
    "BalanceView",
    "HistoryEntry",
    "HistoryEntryKind",
    "LedgerError",
    "LedgerErrorKind",
    "OperationResult",
    "ParseError",
    "ReceiptView",
    "SessionState",
    "TransferReceipt",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # Money helpers
    "format_currency",
    "to_amount",
]
