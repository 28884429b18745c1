"""
Core Data Models for FinTrack

These models define the schemas for everything the ledger produces:
1. The Account entity and its balance rules
2. Transaction history entries
3. Result, error and view objects returned to the shell
4. Structured validation issues

DESIGN DECISION: We use Pydantic v2 models. The Account validates on
assignment, so the balance can never be set below zero even by code
that bypasses debit().
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Generic, Optional, TypeVar
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)

from fintrack.models.money import (
    DEFAULT_CURRENCY_SYMBOL,
    DEFAULT_DATETIME_FORMAT,
    Amount,
    format_currency,
    to_amount,
)


DEFAULT_STARTING_BALANCE = Decimal("1250.00")


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class HistoryEntryKind(str, Enum):
    """What kind of event a history entry records."""
    LOGIN = "login"
    BALANCE_QUERY = "balance_query"
    TRANSFER = "transfer"
    RECEIVE = "receive"
    LOGOUT = "logout"


class LedgerErrorKind(str, Enum):
    """
    Every recoverable failure the ledger can report.

    CRITICAL: None of these abort the session. The caller decides
    how to present them and whether to retry.
    """
    INVALID_NAME = "invalid_name"
    INVALID_EMAIL = "invalid_email"
    INVALID_AMOUNT = "invalid_amount"
    EMPTY_DESTINATION = "empty_destination"
    EMPTY_ORIGIN = "empty_origin"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    NOT_LOGGED_IN = "not_logged_in"


class SessionState(str, Enum):
    """Ledger session state."""
    LOGGED_OUT = "logged_out"
    LOGGED_IN = "logged_in"


# =============================================================================
# ACCOUNT
# =============================================================================

class Account(BaseModel):
    """
    The single account of a logged-in user.

    Accounts are never persisted. Every login creates a fresh one
    seeded with the starting balance.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique account ID"
    )
    name: str = Field(
        ...,
        min_length=2,
        max_length=50,
        description="Normalized display name"
    )
    email: str = Field(
        ...,
        min_length=3,
        max_length=254,
        description="Normalized (lower-case) email"
    )
    balance: Decimal = Field(
        default=DEFAULT_STARTING_BALANCE,
        ge=0,
        description="Current balance, never negative"
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="When the account was created"
    )
    last_access_at: datetime = Field(
        default_factory=datetime.now,
        description="Last successful debit or credit"
    )

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        starting_balance: Amount = DEFAULT_STARTING_BALANCE,
    ) -> "Account":
        """Create an account with both timestamps set to now."""
        now = datetime.now()
        return cls(
            name=name,
            email=email,
            balance=to_amount(starting_balance),
            created_at=now,
            last_access_at=now,
        )

    def touch(self) -> None:
        """Record an access."""
        self.last_access_at = datetime.now()

    def has_sufficient_funds(self, amount: Amount) -> bool:
        amount = to_amount(amount)
        return amount.is_finite() and self.balance >= amount and amount > 0

    def debit(self, amount: Amount) -> bool:
        """
        Subtract amount from the balance.

        This is the only guard against a negative balance: when funds
        are short (or the amount is not positive) nothing changes and
        False is returned.
        """
        amount = to_amount(amount)
        if not self.has_sufficient_funds(amount):
            return False
        self.balance = self.balance - amount
        self.touch()
        return True

    def credit(self, amount: Amount) -> None:
        """
        Add amount to the balance.

        Non-positive amounts are ignored silently.
        """
        amount = to_amount(amount)
        if amount.is_finite() and amount > 0:
            self.balance = self.balance + amount
            self.touch()

    @property
    def created_at_display(self) -> str:
        return self.created_at.strftime(DEFAULT_DATETIME_FORMAT)

    @property
    def last_access_display(self) -> str:
        return self.last_access_at.strftime(DEFAULT_DATETIME_FORMAT)

    def profile_lines(
        self,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
        datetime_format: str = DEFAULT_DATETIME_FORMAT,
    ) -> list[str]:
        """Lines for the 'my profile' view."""
        return [
            f"Name: {self.name}",
            f"Email: {self.email}",
            f"Balance: {format_currency(self.balance, currency_symbol)}",
            f"Created: {self.created_at.strftime(datetime_format)}",
            f"Last access: {self.last_access_at.strftime(datetime_format)}",
        ]


# =============================================================================
# HISTORY
# =============================================================================

class HistoryEntry(BaseModel):
    """One line of the transaction history."""

    timestamp: datetime = Field(
        default_factory=datetime.now
    )
    kind: HistoryEntryKind
    description: str = Field(
        ...,
        min_length=1,
        description="Human-readable summary of the operation"
    )
    amount: Optional[Decimal] = None
    counterparty: Optional[str] = Field(
        default=None,
        description="Destination of a transfer or origin of a receipt"
    )

    def display(self, datetime_format: str = DEFAULT_DATETIME_FORMAT) -> str:
        return f"{self.timestamp.strftime(datetime_format)} - {self.description}"


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Reason code (e.g., 'invalid_name', 'out_of_range', 'blank')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating login input.

    Carries the normalized values so the caller never normalizes twice.
    """

    name: str = Field(
        ...,
        description="Normalized name (raw input if it could not be normalized)"
    )
    email: str = Field(
        ...,
        description="Normalized email"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")


class ParseError(BaseModel):
    """Why a raw amount string could not be read as a number."""

    raw: Optional[str] = None
    reason: str


class AmountParseResult(BaseModel):
    """Outcome of parse_amount(): exactly one of value / error is set."""

    value: Optional[Decimal] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @model_validator(mode='after')
    def validate_exclusive(self) -> 'AmountParseResult':
        if (self.value is None) == (self.error is None):
            raise ValueError("Exactly one of value or error must be set")
        return self


# =============================================================================
# RESULT MODELS
# =============================================================================

class LedgerError(BaseModel):
    """A recoverable failure returned by a ledger operation."""

    kind: LedgerErrorKind
    message: str = Field(
        ...,
        description="Short description, suitable for logs"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="Validation details behind the failure, if any"
    )


T = TypeVar("T")


class OperationResult(BaseModel, Generic[T]):
    """
    Success value or LedgerError.

    Ledger operations return these instead of raising, so expected
    failures never travel as exceptions.
    """

    success: bool
    value: Optional[T] = None
    error: Optional[LedgerError] = None

    @classmethod
    def ok(cls, value: T) -> "OperationResult[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: LedgerError) -> "OperationResult[T]":
        return cls(success=False, error=error)

    @property
    def error_kind(self) -> Optional[LedgerErrorKind]:
        return self.error.kind if self.error else None

    @model_validator(mode='after')
    def validate_consistency(self) -> 'OperationResult':
        if self.success and self.error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not self.success and self.error is None:
            raise ValueError("A failed result must carry an error")
        return self


class BalanceView(BaseModel):
    """Snapshot returned by a balance inquiry."""

    name: str
    balance: Decimal
    last_access_at: datetime


class TransferReceipt(BaseModel):
    """Confirmation of a completed transfer."""

    amount: Decimal
    destination: str
    new_balance: Decimal
    timestamp: datetime = Field(
        default_factory=datetime.now
    )


class ReceiptView(BaseModel):
    """Confirmation of money received."""

    amount: Decimal
    origin: str
    new_balance: Decimal
    timestamp: datetime = Field(
        default_factory=datetime.now
    )
