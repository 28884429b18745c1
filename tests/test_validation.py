"""
Tests for input validation.
"""

import pytest
from decimal import Decimal

from fintrack.validation import (
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


class TestNameValidation:
    """Tests for name checks and normalization."""

    @pytest.mark.parametrize("name", [
        "Ana",
        "ana silva",
        "  Ana Silva  ",
        "José da Conceição",
        "Zoë Ångström",
        "A" * 50,
    ])
    def test_valid_names(self, name):
        assert validate_name(name) is True

    @pytest.mark.parametrize("name", [
        None,
        "",
        "   ",
        "A",
        " A ",
        "A" * 51,
        "Ana1",
        "Ana_Silva",
        "Ana-Silva",
        "ana@silva",
        "Ana²",
        "Ana ½",
        "Ana Ⅳ",
    ])
    def test_invalid_names(self, name):
        assert validate_name(name) is False

    def test_normalize_collapses_and_capitalizes(self):
        """Test trimming, lower-casing and capitalizing each word."""
        assert normalize_name("  ana   SILVA ") == "Ana Silva"
        assert normalize_name("josé DA silva") == "José Da Silva"

    def test_normalize_returns_invalid_input_unchanged(self):
        assert normalize_name("A1") == "A1"
        assert normalize_name(None) is None


class TestEmailValidation:
    """Tests for email checks and normalization."""

    @pytest.mark.parametrize("email", [
        "ana@ex.com",
        " Ana@Ex.COM ",
        "ana.silva+bank@mail.example.org",
        "a_b-c@x-y.io",
    ])
    def test_valid_emails(self, email):
        assert validate_email(email) is True

    @pytest.mark.parametrize("email", [
        None,
        "",
        "   ",
        "ana@ex",
        "ana@ex.c",
        "ana.ex.com",
        "ana silva@ex.com",
        "ana@ex.com1",
        "a" * 300 + "@ex.com",
    ])
    def test_invalid_emails(self, email):
        assert validate_email(email) is False

    def test_email_length_limit(self):
        """Test the 254 character ceiling shared with Account."""
        local = "a" * (254 - len("@ex.com"))
        assert validate_email(local + "@ex.com") is True
        assert validate_email("a" + local + "@ex.com") is False

    def test_normalize_email(self):
        assert normalize_email("  Ana@EX.com ") == "ana@ex.com"
        assert normalize_email(None) == ""


class TestAmountValidation:
    """Tests for amount range checks and parsing."""

    def test_range_bounds(self):
        """Test 0 < amount <= 999999.99."""
        assert validate_amount(Decimal("0.01")) is True
        assert validate_amount(Decimal("999999.99")) is True
        assert validate_amount(Decimal("999999.991")) is False
        assert validate_amount(1000000) is False
        assert validate_amount(0) is False
        assert validate_amount(-1) is False

    def test_custom_maximum(self):
        assert validate_amount(150, max_amount=100) is False
        assert validate_amount(100, max_amount=100) is True

    def test_non_finite_is_invalid(self):
        assert validate_amount(float("nan")) is False
        assert validate_amount(float("inf")) is False

    def test_parse_comma_decimal_separator(self):
        """Test ',' is treated as the decimal separator."""
        result = parse_amount("12,50")
        assert result.ok is True
        assert result.value == Decimal("12.50")

    def test_parse_plain_and_padded(self):
        assert parse_amount(" 300 ").value == Decimal("300")
        assert parse_amount("1e3").value == Decimal("1000")
        assert parse_amount(".5").value == Decimal("0.5")

    def test_parse_negative_is_syntax_only(self):
        """Test parsing does not range-check."""
        result = parse_amount("-5")
        assert result.ok is True
        assert result.value == Decimal("-5")

    @pytest.mark.parametrize("raw", [
        None,
        "",
        "   ",
        "abc",
        "12a",
        "1.2.3",
        "1,234.56",
        "nan",
        "inf",
        "1_000",
        "R$ 10",
    ])
    def test_parse_failures_return_error(self, raw):
        """Test bad input yields a ParseError instead of raising."""
        result = parse_amount(raw)
        assert result.ok is False
        assert result.value is None
        assert result.error.reason

    def test_amount_issue_codes(self):
        """Test reason codes for out-of-range amounts."""
        assert amount_issue(Decimal("10")) is None
        assert amount_issue(0).issue_type == "not_positive"
        assert amount_issue(Decimal("-3")).issue_type == "not_positive"
        assert amount_issue(Decimal("1000000")).issue_type == "out_of_range"
        assert amount_issue(float("nan")).issue_type == "not_a_number"

    def test_amount_issue_uses_currency_symbol(self):
        issue = amount_issue(Decimal("5000"), Decimal("1000"), "US$")
        assert issue.message == "Amount exceeds the maximum of US$ 1000.00"
        assert "R$" in amount_issue(Decimal("1000000")).message


class TestTextHelpers:
    """Tests for label helpers."""

    def test_is_non_empty(self):
        assert is_non_empty("Loja") is True
        assert is_non_empty("  x ") is True
        assert is_non_empty("   ") is False
        assert is_non_empty("") is False
        assert is_non_empty(None) is False

    def test_build_label(self):
        """Test the optional description is appended."""
        assert build_label("Loja", "groceries") == "Loja - groceries"
        assert build_label(" Loja ", "  ") == "Loja"
        assert build_label("Loja") == "Loja"
        assert build_label("", "") == ""

    def test_blank_label_ignores_description(self):
        """Test a description never turns a blank label into a valid one."""
        assert build_label("   ", "groceries") == ""
        assert build_label(None, "groceries") == ""
        assert is_non_empty(build_label("  ", "groceries")) is False


class TestLoginValidator:
    """Tests for LoginValidator."""

    def test_valid_login_is_normalized(self):
        result = LoginValidator().validate("  ana   SILVA ", " Ana@Ex.com ")
        assert result.is_valid is True
        assert result.name == "Ana Silva"
        assert result.email == "ana@ex.com"
        assert result.issues == []

    def test_invalid_name(self):
        result = LoginValidator().validate("A", "ana@ex.com")
        assert result.is_valid is False
        assert [i.issue_type for i in result.issues] == ["invalid_name"]
        assert result.issues[0].suggested_fix

    def test_invalid_email(self):
        result = LoginValidator().validate("Ana Silva", "ana@ex")
        assert [i.issue_type for i in result.issues] == ["invalid_email"]

    def test_both_invalid_reports_both(self):
        """Test every problem is reported at once, name first."""
        result = LoginValidator().validate("4n4", "nope")
        assert [i.field for i in result.issues] == ["name", "email"]
        assert result.error_count == 2

    def test_none_inputs(self):
        result = LoginValidator().validate(None, None)
        assert result.name == ""
        assert result.email == ""
        assert result.error_count == 2

    def test_overlong_email_is_reported(self):
        result = LoginValidator().validate("Ana Silva", "a" * 300 + "@ex.com")
        assert [i.issue_type for i in result.issues] == ["invalid_email"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
