"""Pure functions for money parsing, arithmetic and formatting.

All amounts are Decimal (Money type); nothing here touches floats.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

from fplan.domain.models import ZERO, ErrorKind, LedgerError, Money

CURRENCY_SYMBOL = "€"

_ONE_DECIMAL = Decimal("0.1")
_HUNDRED = Decimal("100")


def parse_amount(text: str | None, field: str = "Amount") -> tuple[Money | None, LedgerError | None]:
    """Parse a decimal amount from user text.

    Positivity is not checked here; callers reject amounts <= 0 themselves.

    Args:
        text: Raw text, surrounding whitespace ignored.
        field: Field name used in the error message.

    Returns:
        Tuple of (amount, error). Exactly one of them is None.
    """
    if text is None or not text.strip():
        return None, LedgerError(ErrorKind.INVALID_AMOUNT, f"{field} cannot be empty.")

    try:
        amount = Decimal(text.strip())
    except InvalidOperation:
        return None, LedgerError(ErrorKind.INVALID_AMOUNT, f"{field} must be a number.")

    if not amount.is_finite():
        return None, LedgerError(ErrorKind.INVALID_AMOUNT, f"{field} must be a number.")

    return Money(amount), None


def safe_divide(numerator: Decimal, denominator: Decimal | int) -> Decimal:
    """Divide, returning zero instead of failing when the denominator is zero."""
    if denominator == 0:
        return Decimal("0")
    return Decimal(numerator) / Decimal(denominator)


def percent(part: Decimal, total: Decimal) -> str:
    """Format part as a percentage of total.

    Rounds to one decimal place with ROUND_HALF_EVEN and drops a trailing
    ".0", so percent(50, 200) is "25%" and percent(1, 3) is "33.3%".

    Args:
        part: Amount being measured.
        total: Whole amount.

    Returns:
        Percentage text, "0%" when total is zero.
    """
    if total == 0:
        return "0%"
    value = (safe_divide(part, total) * _HUNDRED).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_EVEN)
    if value == value.to_integral_value():
        value = value.to_integral_value()
    if value == 0:
        # Avoid "-0%"
        value = Decimal("0")
    return f"{value:f}%"


def format_currency(amount: Decimal) -> str:
    """Format amount as euros with thousands grouping and two decimals (e.g. €1,234.56)."""
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"


def sum_amounts(amounts: Iterable[Decimal]) -> Money:
    """Sum amounts exactly, starting from Decimal zero."""
    return Money(sum(amounts, start=ZERO))
