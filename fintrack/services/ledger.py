"""
Ledger Session

The ledger owns the single active account and its transaction history.
It is a two-state machine:

    LOGGED_OUT --login_or_create--> LOGGED_IN --logout--> LOGGED_OUT

DESIGN DECISION: The session is an explicit object created by the caller
and handed to the shell. There is no process-wide "current user".

Every operation:
1. Checks its preconditions in a fixed order
2. Returns OperationResult.fail(...) on the first failed check,
   before anything is mutated
3. Mutates the account, records a history entry, emits an audit event

Nothing is persisted. Logging out discards the account and the history.

Not thread-safe: one call at a time. A multi-caller host must guard the
whole session with a single lock.
"""

from collections import deque
from decimal import Decimal
from typing import Optional, Union
from uuid import UUID

from fintrack.audit import AuditLogger, create_correlation_id
from fintrack.config import LedgerSettings, get_settings
from fintrack.models.account import (
    Account,
    BalanceView,
    HistoryEntry,
    HistoryEntryKind,
    LedgerError,
    LedgerErrorKind,
    OperationResult,
    ReceiptView,
    SessionState,
    TransferReceipt,
    ValidationIssue,
)
from fintrack.models.money import Amount, format_currency, to_amount
from fintrack.validation import (
    LoginValidator,
    amount_issue,
    is_non_empty,
    parse_amount,
)


AmountInput = Union[Amount, str]


class LedgerSession:
    """
    One user's bookkeeping session.

    Usage:
        session = LedgerSession()
        session.login_or_create("Ana Silva", "ana@ex.com")
        receipt = session.transfer("300,00", "Loja")
    """

    def __init__(
        self,
        settings: Optional[LedgerSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[LoginValidator] = None,
    ):
        self._settings = settings or get_settings().ledger
        self._audit_logger = audit_logger
        self._validator = validator or LoginValidator()

        self._account: Optional[Account] = None
        self._history: deque[HistoryEntry] = deque(
            maxlen=self._settings.history_capacity
        )
        self._correlation_id: Optional[UUID] = None

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def settings(self) -> LedgerSettings:
        return self._settings

    @property
    def state(self) -> SessionState:
        if self._account is None:
            return SessionState.LOGGED_OUT
        return SessionState.LOGGED_IN

    @property
    def is_logged_in(self) -> bool:
        return self._account is not None

    @property
    def current_account(self) -> Optional[Account]:
        return self._account

    @property
    def correlation_id(self) -> Optional[UUID]:
        """ID shared by the audit events of the current login."""
        return self._correlation_id

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def login_or_create(
        self,
        name: Optional[str],
        email: Optional[str],
    ) -> OperationResult[Account]:
        """
        Start a session with a fresh account.

        Accounts are never looked up: every successful login creates a
        new account with the starting balance. Logging in while already
        logged in replaces the current account and history.

        Returns:
            The new Account, or INVALID_NAME / INVALID_EMAIL (name is
            reported first when both are wrong). State is untouched on
            failure.
        """
        validation = self._validator.validate(name, email)
        if not validation.is_valid:
            first = validation.issues[0]
            kind = (
                LedgerErrorKind.INVALID_NAME
                if first.field == "name"
                else LedgerErrorKind.INVALID_EMAIL
            )
            if self._audit_logger:
                self._audit_logger.log_login_rejected(
                    error_code=kind.value,
                    reason="; ".join(i.message for i in validation.issues),
                    correlation_id=self._correlation_id,
                )
            return OperationResult[Account].fail(LedgerError(
                kind=kind,
                message=first.message,
                issues=validation.issues,
            ))

        account = Account.create(
            name=validation.name,
            email=validation.email,
            starting_balance=self._settings.starting_balance,
        )
        if self._account is not None:
            self._end_session()

        self._account = account
        self._history.clear()
        self._correlation_id = create_correlation_id()

        self._record(
            HistoryEntryKind.LOGIN,
            f"Login - starting balance: {self._money(account.balance)}",
        )
        if self._audit_logger:
            self._audit_logger.log_session_started(
                account_id=account.id,
                email=account.email,
                starting_balance=account.balance,
                correlation_id=self._correlation_id,
            )

        return OperationResult[Account].ok(account)

    def balance(self) -> OperationResult[BalanceView]:
        """Current balance. Each inquiry is recorded in the history."""
        if self._account is None:
            return OperationResult[BalanceView].fail(self._not_logged_in("balance"))

        account = self._account
        self._record(HistoryEntryKind.BALANCE_QUERY, "Balance inquiry")
        if self._audit_logger:
            self._audit_logger.log_balance_queried(
                account_id=account.id,
                balance=account.balance,
                correlation_id=self._correlation_id,
            )

        return OperationResult[BalanceView].ok(BalanceView(
            name=account.name,
            balance=account.balance,
            last_access_at=account.last_access_at,
        ))

    def transfer(
        self,
        amount: AmountInput,
        destination: Optional[str],
    ) -> OperationResult[TransferReceipt]:
        """
        Send money out of the account.

        Checks run in this order and the first failure wins:
        logged in, amount format, amount range, destination, funds.

        Args:
            amount: Decimal/int/float, or a raw string ('300,00' is accepted)
            destination: Who receives the money (must not be blank)
        """
        if self._account is None:
            return OperationResult[TransferReceipt].fail(self._not_logged_in("transfer"))

        account = self._account
        value, error = self._check_amount(amount)
        if error is None and not is_non_empty(destination):
            error = LedgerError(
                kind=LedgerErrorKind.EMPTY_DESTINATION,
                message="Transfer destination cannot be empty",
                issues=[ValidationIssue(
                    field="destination",
                    issue_type="blank",
                    message="Transfer destination cannot be empty",
                    suggested_fix="Tell us who receives the money",
                )],
            )
        if error is None and not account.has_sufficient_funds(value):
            error = LedgerError(
                kind=LedgerErrorKind.INSUFFICIENT_FUNDS,
                message=(
                    f"Insufficient funds: balance {self._money(account.balance)}, "
                    f"requested {self._money(value)}"
                ),
            )

        if error is not None:
            if self._audit_logger:
                self._audit_logger.log_transfer_rejected(
                    error_code=error.kind.value,
                    reason=error.message,
                    account_id=account.id,
                    correlation_id=self._correlation_id,
                )
            return OperationResult[TransferReceipt].fail(error)

        destination = destination.strip()
        account.debit(value)

        self._record(
            HistoryEntryKind.TRANSFER,
            f"Transfer: {self._money(value)} to {destination}",
            amount=value,
            counterparty=destination,
        )
        if self._audit_logger:
            self._audit_logger.log_transfer_completed(
                account_id=account.id,
                amount=value,
                destination=destination,
                new_balance=account.balance,
                correlation_id=self._correlation_id,
            )

        return OperationResult[TransferReceipt].ok(TransferReceipt(
            amount=value,
            destination=destination,
            new_balance=account.balance,
            timestamp=account.last_access_at,
        ))

    def receive(
        self,
        amount: AmountInput,
        origin: Optional[str],
    ) -> OperationResult[ReceiptView]:
        """
        Record money coming in.

        Same check order as transfer(), without the funds check.
        """
        if self._account is None:
            return OperationResult[ReceiptView].fail(self._not_logged_in("receive"))

        account = self._account
        value, error = self._check_amount(amount)
        if error is None and not is_non_empty(origin):
            error = LedgerError(
                kind=LedgerErrorKind.EMPTY_ORIGIN,
                message="Origin of the money cannot be empty",
                issues=[ValidationIssue(
                    field="origin",
                    issue_type="blank",
                    message="Origin of the money cannot be empty",
                    suggested_fix="Tell us who sent the money",
                )],
            )

        if error is not None:
            if self._audit_logger:
                self._audit_logger.log_receipt_rejected(
                    error_code=error.kind.value,
                    reason=error.message,
                    account_id=account.id,
                    correlation_id=self._correlation_id,
                )
            return OperationResult[ReceiptView].fail(error)

        origin = origin.strip()
        account.credit(value)

        self._record(
            HistoryEntryKind.RECEIVE,
            f"Received: {self._money(value)} from {origin}",
            amount=value,
            counterparty=origin,
        )
        if self._audit_logger:
            self._audit_logger.log_receipt_completed(
                account_id=account.id,
                amount=value,
                origin=origin,
                new_balance=account.balance,
                correlation_id=self._correlation_id,
            )

        return OperationResult[ReceiptView].ok(ReceiptView(
            amount=value,
            origin=origin,
            new_balance=account.balance,
            timestamp=account.last_access_at,
        ))

    def history(self) -> OperationResult[list[HistoryEntry]]:
        """Oldest-first copy of the history. Empty is not an error."""
        if self._account is None:
            return OperationResult[list[HistoryEntry]].fail(
                self._not_logged_in("history")
            )
        return OperationResult[list[HistoryEntry]].ok(list(self._history))

    def logout(self) -> None:
        """End the session. Does nothing when already logged out."""
        if self._account is None:
            return
        self._record(HistoryEntryKind.LOGOUT, "Logout")
        self._end_session()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _end_session(self) -> None:
        account = self._account
        if self._audit_logger:
            self._audit_logger.log_session_ended(
                account_id=account.id,
                final_balance=account.balance,
                history_size=len(self._history),
                correlation_id=self._correlation_id,
            )
        self._account = None
        self._history.clear()
        self._correlation_id = None

    def _check_amount(
        self,
        amount: AmountInput,
    ) -> tuple[Optional[Decimal], Optional[LedgerError]]:
        """Parse (if text) and range-check an amount."""
        if amount is None or isinstance(amount, str):
            parsed = parse_amount(amount)
            if not parsed.ok:
                return None, LedgerError(
                    kind=LedgerErrorKind.INVALID_AMOUNT,
                    message=parsed.error.reason,
                    issues=[ValidationIssue(
                        field="amount",
                        issue_type="not_a_number",
                        message=parsed.error.reason,
                        suggested_fix="Type digits only, e.g. 150.00 or 150,00",
                    )],
                )
            value = parsed.value
        else:
            value = to_amount(amount)

        issue = amount_issue(
            value,
            self._settings.max_transaction_amount,
            self._settings.currency_symbol,
        )
        if issue is not None:
            return None, LedgerError(
                kind=LedgerErrorKind.INVALID_AMOUNT,
                message=issue.message,
                issues=[issue],
            )
        return value, None

    def _not_logged_in(self, operation: str) -> LedgerError:
        if self._audit_logger:
            self._audit_logger.log_operation_rejected(
                operation=operation,
                error_code=LedgerErrorKind.NOT_LOGGED_IN.value,
            )
        return LedgerError(
            kind=LedgerErrorKind.NOT_LOGGED_IN,
            message="No user is logged in",
        )

    def _record(
        self,
        kind: HistoryEntryKind,
        description: str,
        amount: Optional[Decimal] = None,
        counterparty: Optional[str] = None,
    ) -> HistoryEntry:
        # deque(maxlen=...) evicts the oldest entry on overflow
        entry = HistoryEntry(
            kind=kind,
            description=description,
            amount=amount,
            counterparty=counterparty,
        )
        self._history.append(entry)
        return entry

    def _money(self, value: Decimal) -> str:
        return format_currency(value, self._settings.currency_symbol)
