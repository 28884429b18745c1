"""
Tests for FinTrack models

Test strategy:
1. Unit tests for individual components (models, validators)
2. Session tests for the ledger state machine
3. No network, no UI in tests
"""

import pytest
from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from fintrack.models.account import (
    Account,
    AmountParseResult,
    HistoryEntry,
    HistoryEntryKind,
    LedgerError,
    LedgerErrorKind,
    OperationResult,
    ParseError,
    ValidationIssue,
    ValidationResult,
)
from fintrack.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from fintrack.models.money import format_currency, to_amount


def make_account(balance="100.00") -> Account:
    return Account.create("Ana Silva", "ana@ex.com", Decimal(balance))


class TestAccount:
    """Tests for the Account entity."""

    def test_create_uses_default_starting_balance(self):
        """Test Account.create seeds 1250.00 by default."""
        account = Account.create("Ana Silva", "ana@ex.com")
        assert account.balance == Decimal("1250.00")
        assert account.created_at == account.last_access_at

    def test_create_with_custom_balance(self):
        """Test a custom starting balance."""
        account = Account.create("Ana Silva", "ana@ex.com", 10)
        assert account.balance == Decimal("10")

    def test_rejects_negative_starting_balance(self):
        """Test that a negative balance cannot be created."""
        with pytest.raises(ValueError):
            Account.create("Ana Silva", "ana@ex.com", Decimal("-1"))

    def test_rejects_direct_negative_assignment(self):
        """Test the balance cannot be set below zero directly."""
        account = make_account()
        with pytest.raises(ValueError):
            account.balance = Decimal("-0.01")
        assert account.balance == Decimal("100.00")

    def test_has_sufficient_funds(self):
        """Test funds check: balance >= amount and amount > 0."""
        account = make_account()
        assert account.has_sufficient_funds(Decimal("100.00")) is True
        assert account.has_sufficient_funds(Decimal("99.99")) is True
        assert account.has_sufficient_funds(Decimal("100.01")) is False
        assert account.has_sufficient_funds(0) is False
        assert account.has_sufficient_funds(-5) is False

    def test_debit_subtracts_and_touches(self):
        """Test a successful debit."""
        account = make_account()
        before = account.last_access_at
        assert account.debit(Decimal("30.00")) is True
        assert account.balance == Decimal("70.00")
        assert account.last_access_at >= before

    def test_debit_whole_balance(self):
        """Test the balance may reach exactly zero."""
        account = make_account()
        assert account.debit(Decimal("100.00")) is True
        assert account.balance == Decimal("0")

    def test_debit_insufficient_funds_changes_nothing(self):
        """Test a refused debit leaves the account untouched."""
        account = make_account()
        before = account.last_access_at
        assert account.debit(Decimal("100.01")) is False
        assert account.balance == Decimal("100.00")
        assert account.last_access_at == before

    def test_debit_non_positive_refused(self):
        """Test debit of zero or negative amounts is refused."""
        account = make_account()
        assert account.debit(0) is False
        assert account.debit(-10) is False
        assert account.balance == Decimal("100.00")

    def test_debit_float_has_no_binary_artifacts(self):
        """Test floats are converted through their string form."""
        account = make_account("0.30")
        assert account.debit(0.1) is True
        assert account.balance == Decimal("0.2")

    def test_credit_adds(self):
        """Test a credit."""
        account = make_account()
        account.credit(Decimal("50.50"))
        assert account.balance == Decimal("150.50")

    def test_credit_ignores_non_positive(self):
        """Test credit silently ignores zero and negative amounts."""
        account = make_account()
        before = account.last_access_at
        account.credit(0)
        account.credit(Decimal("-25"))
        assert account.balance == Decimal("100.00")
        assert account.last_access_at == before

    def test_profile_lines(self):
        """Test the profile view lines."""
        account = Account.create("Ana Silva", "ana@ex.com")
        lines = account.profile_lines()
        assert lines[0] == "Name: Ana Silva"
        assert lines[1] == "Email: ana@ex.com"
        assert lines[2] == "Balance: R$ 1250.00"
        assert lines[3].startswith("Created: ")

    def test_display_dates(self):
        """Test dd/mm/yyyy HH:MM formatting."""
        account = make_account()
        account.created_at = datetime(2024, 12, 15, 9, 5)
        assert account.created_at_display == "15/12/2024 09:05"


class TestMoney:
    """Tests for money helpers."""

    def test_to_amount_from_float(self):
        assert to_amount(0.1) == Decimal("0.1")

    def test_to_amount_passes_decimal_through(self):
        value = Decimal("12.34")
        assert to_amount(value) is value

    def test_to_amount_rejects_non_numbers(self):
        """Test that strings and bools are not silently converted."""
        with pytest.raises(TypeError):
            to_amount("12")
        with pytest.raises(TypeError):
            to_amount(True)

    def test_format_currency(self):
        assert format_currency(Decimal("1250")) == "R$ 1250.00"
        assert format_currency(950.5, "US$") == "US$ 950.50"


class TestHistoryEntry:
    """Tests for history entries."""

    def test_display(self):
        """Test the history line format."""
        entry = HistoryEntry(
            timestamp=datetime(2024, 12, 15, 9, 5),
            kind=HistoryEntryKind.BALANCE_QUERY,
            description="Balance inquiry",
        )
        assert entry.display() == "15/12/2024 09:05 - Balance inquiry"

    def test_rejects_empty_description(self):
        with pytest.raises(ValueError):
            HistoryEntry(kind=HistoryEntryKind.LOGIN, description="")


class TestResults:
    """Tests for result and validation models."""

    def test_ok_result(self):
        result = OperationResult[int].ok(5)
        assert result.success is True
        assert result.value == 5
        assert result.error_kind is None

    def test_fail_result(self):
        result = OperationResult[int].fail(LedgerError(
            kind=LedgerErrorKind.NOT_LOGGED_IN,
            message="No user is logged in",
        ))
        assert result.success is False
        assert result.value is None
        assert result.error_kind == LedgerErrorKind.NOT_LOGGED_IN

    def test_success_cannot_carry_error(self):
        """Test inconsistent results are rejected."""
        with pytest.raises(ValueError):
            OperationResult(
                success=True,
                error=LedgerError(kind=LedgerErrorKind.INVALID_AMOUNT, message="x"),
            )
        with pytest.raises(ValueError):
            OperationResult(success=False)

    def test_amount_parse_result_exclusive(self):
        """Test exactly one of value / error is required."""
        assert AmountParseResult(value=Decimal("1")).ok is True
        assert AmountParseResult(error=ParseError(raw="x", reason="bad")).ok is False
        with pytest.raises(ValueError):
            AmountParseResult()

    def test_validation_result_errors(self):
        """Test has_errors / error_count."""
        result = ValidationResult(
            name="A1",
            email="ana@ex.com",
            issues=[
                ValidationIssue(
                    field="name",
                    issue_type="invalid_name",
                    message="Name is invalid",
                ),
                ValidationIssue(
                    field="email",
                    issue_type="suspicious",
                    message="Unusual domain",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.is_valid is False
        assert result.error_count == 1

    def test_validation_issue_severity_pattern(self):
        with pytest.raises(ValueError):
            ValidationIssue(
                field="name",
                issue_type="invalid_name",
                message="Name is invalid",
                severity="fatal",
            )


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.BALANCE_QUERIED,
            description="Balance queried",
        )
        assert event.event_type == AuditEventType.BALANCE_QUERIED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.TRANSFER_COMPLETED,
            description="Transfer completed",
            details={"destination": "Loja", "amount": "300.00"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "transfer_completed"
        assert log_dict["details"]["destination"] == "Loja"
        assert log_dict["entity_id"] is None

    def test_builder_session_started(self):
        """Test AuditEventBuilder.session_started."""
        account_id = uuid4()
        correlation_id = uuid4()

        event = AuditEventBuilder.session_started(
            account_id=account_id,
            email="ana@ex.com",
            starting_balance=Decimal("1250.00"),
            correlation_id=correlation_id,
        )

        assert event.event_type == AuditEventType.SESSION_STARTED
        assert event.entity_id == account_id
        assert event.correlation_id == correlation_id
        assert event.details["starting_balance"] == "1250.00"

    def test_builder_transfer_rejected(self):
        """Test AuditEventBuilder.transfer_rejected."""
        event = AuditEventBuilder.transfer_rejected(
            error_code="insufficient_funds",
            reason="Insufficient funds",
        )
        assert event.event_type == AuditEventType.TRANSFER_REJECTED
        assert event.severity == AuditSeverity.WARNING
        assert event.error_code == "insufficient_funds"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
