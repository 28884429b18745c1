"""
Money helpers shared by the models and the validators.

DESIGN DECISION: Amounts are Decimal everywhere. Floats coming from the
outside are converted through their string form so 0.1 stays 0.1.
"""

from decimal import Decimal
from typing import Union

Amount = Union[Decimal, int, float]

DEFAULT_CURRENCY_SYMBOL = "R$"
DEFAULT_DATETIME_FORMAT = "%d/%m/%Y %H:%M"


def to_amount(value: Amount) -> Decimal:
    """Convert a numeric value to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Amount must be a number, got {type(value).__name__}")
    return Decimal(str(value))


def format_currency(value: Amount, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Render an amount as 'R$ 1250.00'."""
    return f"{symbol} {to_amount(value):.2f}"
