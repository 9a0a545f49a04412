"""Validating factories for ledger records.

Every record entered by hand goes through these functions. A record is
either fully valid or not created at all:
- No I/O, no side effects
- Raw text in, (record, error) tuple out
"""

from fplan.dates import parse_calendar_date
from fplan.domain.models import Category, ErrorKind, Expense, Income, LedgerError, Money, Subscription
from fplan.domain.money import parse_amount


def parse_category(text: str | None) -> Category | None:
    """Match category text case-insensitively against the fixed categories.

    Args:
        text: Category name as typed, e.g. "food" or "FOOD".

    Returns:
        Matching Category or None.
    """
    if text is None:
        return None
    canonical = text.strip().lower()
    for category in Category:
        if category.value.lower() == canonical:
            return category
    return None


def _parse_positive(text: str | None, record: str, field: str) -> tuple[Money | None, LedgerError | None]:
    amount, _ = parse_amount(text, field)
    if amount is None or amount <= 0:
        return None, LedgerError(
            ErrorKind.INVALID_AMOUNT,
            f"{record}: {field} must be a number greater than 0.",
        )
    return amount, None


def create_income(
    date_text: str | None,
    source_text: str | None,
    amount_text: str | None,
) -> tuple[Income | None, LedgerError | None]:
    """Create an income from raw input.

    Args:
        date_text: Date the income was received.
        source_text: Where the money came from (required).
        amount_text: Positive amount.

    Returns:
        Tuple of (income, error). Exactly one of them is None.
    """
    if source_text is None or not source_text.strip():
        return None, LedgerError(ErrorKind.EMPTY_FIELD, "Income: Source cannot be empty.")

    received = parse_calendar_date(date_text)
    if received is None:
        return None, LedgerError(ErrorKind.INVALID_DATE, "Income: Invalid date.")

    amount, error = _parse_positive(amount_text, "Income", "Amount")
    if error:
        return None, error

    return Income(date=received, source=source_text.strip(), amount=amount), None


def create_expense(
    date_text: str | None,
    category_text: str | None,
    amount_text: str | None,
    note_text: str | None = "",
) -> tuple[Expense | None, LedgerError | None]:
    """Create an expense from raw input.

    Args:
        date_text: Date the money was spent.
        category_text: Category name, case-insensitive.
        amount_text: Positive amount.
        note_text: Optional free text; blank becomes "".

    Returns:
        Tuple of (expense, error). Exactly one of them is None.
    """
    spent = parse_calendar_date(date_text)
    if spent is None:
        return None, LedgerError(ErrorKind.INVALID_DATE, "Expense: Invalid date.")

    category = parse_category(category_text)
    if category is None:
        names = ", ".join(c.value for c in Category)
        return None, LedgerError(
            ErrorKind.INVALID_CATEGORY,
            f"Expense: Invalid category. Choose one of: {names}.",
        )

    amount, error = _parse_positive(amount_text, "Expense", "Amount")
    if error:
        return None, error

    note = note_text.strip() if note_text and note_text.strip() else ""
    return Expense(date=spent, category=category, amount=amount, note=note), None


def create_subscription(
    name_text: str | None,
    price_text: str | None,
    start_date_text: str | None,
    is_active: bool,
) -> tuple[Subscription | None, LedgerError | None]:
    """Create a subscription from raw input.

    Args:
        name_text: Subscription name (required).
        price_text: Positive monthly price.
        start_date_text: Date the subscription started.
        is_active: Whether it is currently charged.

    Returns:
        Tuple of (subscription, error). Exactly one of them is None.
    """
    if name_text is None or not name_text.strip():
        return None, LedgerError(ErrorKind.EMPTY_FIELD, "Subscription: Name cannot be empty.")

    price, error = _parse_positive(price_text, "Subscription", "Monthly price")
    if error:
        return None, error

    started = parse_calendar_date(start_date_text)
    if started is None:
        return None, LedgerError(ErrorKind.INVALID_DATE, "Subscription: Invalid start date.")

    return (
        Subscription(name=name_text.strip(), monthly_price=price, start_date=started, is_active=is_active),
        None,
    )
