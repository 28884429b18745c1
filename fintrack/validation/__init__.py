"""Input validation package."""

from fintrack.validation.validator import (
    MAX_TRANSACTION_AMOUNT,
    LoginValidator,
    amount_issue,
    build_label,
    is_non_empty,
    normalize_email,
    normalize_name,
    parse_amount,
    validate_amount,
    validate_email,
    validate_name,
)

__all__ = [
    "MAX_TRANSACTION_AMOUNT",
    "LoginValidator",
    "amount_issue",
    "build_label",
    "is_non_empty",
    "normalize_email",
    "normalize_name",
    "parse_amount",
    "validate_amount",
    "validate_email",
    "validate_name",
]
