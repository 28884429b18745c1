"""
Input Validation for FinTrack

DESIGN DECISION: Validation is split in two layers:

LAYER 1 - PURE CHECKS:
- validate_name / validate_email / validate_amount / is_non_empty
- normalize_name / normalize_email
- parse_amount
These are stateless functions with no dependencies. They answer
yes/no (or a parse result) and never print anything.

LAYER 2 - LOGIN VALIDATOR:
- Normalizes name and email
- Turns failed checks into ValidationIssue objects with a reason code
  and a hint for the user

IMPORTANT: Validation NEVER renders messages. It reports issues;
the shell decides how to show them.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from fintrack.models.account import (
    AmountParseResult,
    ParseError,
    ValidationIssue,
    ValidationResult,
)
from fintrack.models.money import (
    DEFAULT_CURRENCY_SYMBOL,
    Amount,
    format_currency,
    to_amount,
)


NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 254
MAX_TRANSACTION_AMOUNT = Decimal("999999.99")

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
# Plain decimal notation, optional sign and exponent (after ',' -> '.')
NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


def validate_name(raw: Optional[str]) -> bool:
    if raw is None:
        return False
    trimmed = raw.strip()
    return (
        NAME_MIN_LENGTH <= len(trimmed) <= NAME_MAX_LENGTH
        and all(ch.isalpha() or ch.isspace() for ch in raw)
    )


def normalize_name(raw: Optional[str]) -> Optional[str]:
    """
    Capitalize each word: '  ana   SILVA ' -> 'Ana Silva'.

    Input that fails validate_name is returned unchanged.
    """
    if not validate_name(raw):
        return raw
    words = raw.strip().lower().split()
    return " ".join(word[0].upper() + word[1:] for word in words)


def validate_email(raw: Optional[str]) -> bool:
    if raw is None:
        return False
    trimmed = raw.strip()
    return (
        0 < len(trimmed) <= EMAIL_MAX_LENGTH
        and EMAIL_PATTERN.fullmatch(trimmed) is not None
    )


def normalize_email(raw: Optional[str]) -> str:
    return raw.strip().lower() if raw is not None else ""


def validate_amount(
    value: Amount,
    max_amount: Amount = MAX_TRANSACTION_AMOUNT,
) -> bool:
    """True when 0 < value <= max_amount."""
    value = to_amount(value)
    if not value.is_finite():
        return False
    return Decimal(0) < value <= to_amount(max_amount)


def is_non_empty(text: Optional[str]) -> bool:
    return text is not None and bool(text.strip())


def parse_amount(raw: Optional[str]) -> AmountParseResult:
    """
    Read a user-typed amount.

    ',' is accepted as the decimal separator ('12,50' == 12.50).
    Only syntax is checked here; use validate_amount for the range.
    """
    if raw is None:
        return AmountParseResult(error=ParseError(raw=None, reason="No amount given"))

    candidate = raw.strip().replace(",", ".")
    if not candidate:
        return AmountParseResult(error=ParseError(raw=raw, reason="Amount is empty"))

    if not NUMBER_PATTERN.fullmatch(candidate):
        return AmountParseResult(
            error=ParseError(raw=raw, reason=f"Not a number: {raw.strip()!r}")
        )

    try:
        value = Decimal(candidate)
    except InvalidOperation:
        return AmountParseResult(
            error=ParseError(raw=raw, reason=f"Not a number: {raw.strip()!r}")
        )

    return AmountParseResult(value=value)


def build_label(label: str, description: Optional[str] = None) -> str:
    """
    Join a destination/origin with an optional free-text description.

    build_label('Loja', 'groceries') -> 'Loja - groceries'

    A blank label stays blank whatever the description, so the ledger
    still rejects it as an empty destination/origin.
    """
    label = (label or "").strip()
    description = (description or "").strip()
    if not label or not description:
        return label
    return f"{label} - {description}"


class LoginValidator:
    """
    Validates and normalizes login input.

    Name and email are normalized first, then checked. Both fields are
    always checked so the user sees every problem at once.
    """

    def validate(
        self,
        name: Optional[str],
        email: Optional[str],
    ) -> ValidationResult:
        """
        Normalize and validate a login attempt.

        Returns:
            ValidationResult with normalized values and any issues found
        """
        normalized_name = normalize_name(name)
        normalized_email = normalize_email(email)
        issues = []

        if not validate_name(normalized_name):
            issues.append(ValidationIssue(
                field="name",
                issue_type="invalid_name",
                message="Name is invalid",
                suggested_fix=(
                    f"Use {NAME_MIN_LENGTH} to {NAME_MAX_LENGTH} characters, "
                    "letters and spaces only"
                ),
            ))

        if not validate_email(normalized_email):
            issues.append(ValidationIssue(
                field="email",
                issue_type="invalid_email",
                message="Email is invalid",
                suggested_fix=(
                    "Use the format name@example.com, "
                    f"at most {EMAIL_MAX_LENGTH} characters"
                ),
            ))

        return ValidationResult(
            name=normalized_name if normalized_name is not None else "",
            email=normalized_email,
            issues=issues,
        )


def amount_issue(
    value: Amount,
    max_amount: Amount = MAX_TRANSACTION_AMOUNT,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> Optional[ValidationIssue]:
    """Describe why an amount is out of range, or None when it is fine."""
    if validate_amount(value, max_amount):
        return None
    value = to_amount(value)
    if not value.is_finite():
        return ValidationIssue(
            field="amount",
            issue_type="not_a_number",
            message="Amount must be a finite number",
            suggested_fix="Type digits only, e.g. 150.00 or 150,00",
        )
    if value <= 0:
        return ValidationIssue(
            field="amount",
            issue_type="not_positive",
            message="Amount must be greater than zero",
            suggested_fix="Enter a positive amount",
        )
    return ValidationIssue(
        field="amount",
        issue_type="out_of_range",
        message=(
            "Amount exceeds the maximum of "
            f"{format_currency(max_amount, currency_symbol)}"
        ),
        suggested_fix="Split the operation into smaller amounts",
    )
