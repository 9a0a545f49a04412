"""Bulk export and import of the ledger as a JSON bundle document.

Document layout (camelCase keys, ISO dates, amounts as JSON numbers):

    {
      "incomes": [{"date": "2025-09-05", "source": "Salary", "amount": 2000}],
      "expenses": [{"date": "2025-09-10", "category": "Food", "amount": 150, "note": "Groceries"}],
      "subscriptions": [{"name": "Streaming", "monthlyPrice": 10, "startDate": "2025-08-01", "isActive": true}]
    }

Import is all-or-nothing: the whole document is parsed, then every record is
validated, and only then are the ledger's collections replaced.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import simplejson as json

from fplan.domain.ledger import Ledger
from fplan.domain.models import Category, ErrorKind, Expense, Income, LedgerError, Money, Subscription
from fplan.domain.records import parse_category
from fplan.logging_setup import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DataBundle:
    """The three collections grouped for transfer."""

    incomes: list[Income] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)
    subscriptions: list[Subscription] = field(default_factory=list)


class _StructureError(Exception):
    """Document does not match the bundle layout."""


# Export ------------------------------------------------------------------------


def export_bundle(ledger: Ledger) -> DataBundle:
    """Snapshot the ledger. Changing the bundle's lists never touches the ledger."""
    return DataBundle(
        incomes=list(ledger.incomes),
        expenses=list(ledger.expenses),
        subscriptions=list(ledger.subscriptions),
    )


def bundle_to_dict(bundle: DataBundle) -> dict[str, list[dict[str, Any]]]:
    """Convert a bundle to plain data. Amounts stay Decimal."""
    return {
        "incomes": [
            {"date": i.date.isoformat(), "source": i.source, "amount": i.amount} for i in bundle.incomes
        ],
        "expenses": [
            {
                "date": e.date.isoformat(),
                "category": e.category.value,
                "amount": e.amount,
                "note": e.note,
            }
            for e in bundle.expenses
        ],
        "subscriptions": [
            {
                "name": s.name,
                "monthlyPrice": s.monthly_price,
                "startDate": s.start_date.isoformat(),
                "isActive": s.is_active,
            }
            for s in bundle.subscriptions
        ],
    }


def bundle_to_json(bundle: DataBundle, indent: int | None = 2) -> str:
    """Serialize a bundle to document text."""
    return json.dumps(bundle_to_dict(bundle), indent=indent, ensure_ascii=False, use_decimal=True)


# Parsing -----------------------------------------------------------------------


def _list_field(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise _StructureError(f"'{key}' must be a list")
    return value


def _record(raw: Any, where: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise _StructureError(f"{where} must be an object")
    return raw


def _date_field(raw: dict[str, Any], key: str, where: str) -> date | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise _StructureError(f"{where}.{key} must be an ISO date string")
    try:
        return datetime.fromisoformat(value.strip()).date()
    except ValueError as e:
        raise _StructureError(f"{where}.{key} is not a valid ISO date: '{value}'") from e


def _amount_field(raw: dict[str, Any], key: str, where: str) -> Money:
    value = raw.get(key)
    if value is None:
        return Money(Decimal("0"))
    if not isinstance(value, Decimal):
        raise _StructureError(f"{where}.{key} must be a number")
    return Money(value)


def _text_field(raw: dict[str, Any], key: str, where: str) -> str | None:
    value = raw.get(key)
    if value is None or isinstance(value, str):
        return value
    raise _StructureError(f"{where}.{key} must be a string")


def _category_field(raw: dict[str, Any], where: str) -> Category:
    value = raw.get("category")
    category = parse_category(value) if isinstance(value, str) else None
    if category is None:
        raise _StructureError(f"{where}.category has unknown value {value!r}")
    return category


def _bool_field(raw: dict[str, Any], key: str, where: str) -> bool:
    value = raw.get(key, False)
    if not isinstance(value, bool):
        raise _StructureError(f"{where}.{key} must be true or false")
    return value


def bundle_from_dict(data: Any) -> DataBundle:
    """Build a bundle from JSON-native data.

    Missing or null fields become empty values so that validation reports
    them; wrong types and unknown categories raise _StructureError.
    """
    if not isinstance(data, dict):
        raise _StructureError("document must be an object with incomes, expenses and subscriptions")

    incomes = []
    for n, item in enumerate(_list_field(data, "incomes"), 1):
        where = f"incomes[{n}]"
        raw = _record(item, where)
        incomes.append(
            Income(
                date=_date_field(raw, "date", where),  # type: ignore[arg-type]
                source=_text_field(raw, "source", where),  # type: ignore[arg-type]
                amount=_amount_field(raw, "amount", where),
            )
        )

    expenses = []
    for n, item in enumerate(_list_field(data, "expenses"), 1):
        where = f"expenses[{n}]"
        raw = _record(item, where)
        expenses.append(
            Expense(
                date=_date_field(raw, "date", where),  # type: ignore[arg-type]
                category=_category_field(raw, where),
                amount=_amount_field(raw, "amount", where),
                note=(_text_field(raw, "note", where) or "").strip(),
            )
        )

    subscriptions = []
    for n, item in enumerate(_list_field(data, "subscriptions"), 1):
        where = f"subscriptions[{n}]"
        raw = _record(item, where)
        subscriptions.append(
            Subscription(
                name=_text_field(raw, "name", where),  # type: ignore[arg-type]
                monthly_price=_amount_field(raw, "monthlyPrice", where),
                start_date=_date_field(raw, "startDate", where),  # type: ignore[arg-type]
                is_active=_bool_field(raw, "isActive", where),
            )
        )

    return DataBundle(incomes=incomes, expenses=expenses, subscriptions=subscriptions)


def parse_bundle_json(text: str | None) -> tuple[DataBundle | None, LedgerError | None]:
    """Parse document text into a bundle without validating record values.

    Returns:
        Tuple of (bundle, error). Error kind is STRUCTURAL_PARSE.
    """
    if text is None or not text.strip():
        return None, LedgerError(ErrorKind.STRUCTURAL_PARSE, "No JSON was provided.")
    try:
        data = json.loads(text, parse_float=Decimal, parse_int=Decimal)
        return bundle_from_dict(data), None
    except json.JSONDecodeError as e:
        return None, LedgerError(ErrorKind.STRUCTURAL_PARSE, f"JSON error: {e}")
    except _StructureError as e:
        return None, LedgerError(ErrorKind.STRUCTURAL_PARSE, f"JSON error: {e}")


# Import ------------------------------------------------------------------------


def validate_bundle(bundle: DataBundle) -> LedgerError | None:
    """Check every record of a bundle; the first violation is returned."""
    for n, income in enumerate(bundle.incomes or [], 1):
        if income.amount is None or income.amount <= 0:
            return LedgerError(ErrorKind.INVALID_AMOUNT, f"Import: income #{n} amount must be > 0.")
        if income.date is None:
            return LedgerError(ErrorKind.INVALID_DATE, f"Import: income #{n} must have a date.")
        if income.source is None or not income.source.strip():
            return LedgerError(ErrorKind.EMPTY_FIELD, f"Import: income #{n} source cannot be empty.")

    for n, expense in enumerate(bundle.expenses or [], 1):
        if expense.amount is None or expense.amount <= 0:
            return LedgerError(ErrorKind.INVALID_AMOUNT, f"Import: expense #{n} amount must be > 0.")
        if expense.date is None:
            return LedgerError(ErrorKind.INVALID_DATE, f"Import: expense #{n} must have a date.")
        if not isinstance(expense.category, Category):
            return LedgerError(ErrorKind.INVALID_CATEGORY, f"Import: expense #{n} has an invalid category.")

    for n, subscription in enumerate(bundle.subscriptions or [], 1):
        if subscription.name is None or not subscription.name.strip():
            return LedgerError(ErrorKind.EMPTY_FIELD, f"Import: subscription #{n} name cannot be empty.")
        if subscription.monthly_price is None or subscription.monthly_price <= 0:
            return LedgerError(ErrorKind.INVALID_AMOUNT, f"Import: subscription #{n} monthly price must be > 0.")
        if subscription.start_date is None:
            return LedgerError(ErrorKind.INVALID_DATE, f"Import: subscription #{n} must have a start date.")

    return None


def import_bundle(ledger: Ledger, bundle: DataBundle) -> LedgerError | None:
    """Replace the ledger's contents with a bundle, or change nothing.

    Args:
        ledger: Ledger to replace.
        bundle: Incoming collections; None lists count as empty.

    Returns:
        None on success, otherwise the first validation error.
    """
    error = validate_bundle(bundle)
    if error:
        logger.info("Import rejected: %s", error.message)
        return error

    ledger.replace_all(
        incomes=[_trimmed_income(i) for i in bundle.incomes or []],
        expenses=list(bundle.expenses or []),
        subscriptions=[_trimmed_subscription(s) for s in bundle.subscriptions or []],
    )
    return None


def import_bundle_text(ledger: Ledger, text: str | None) -> LedgerError | None:
    """Parse document text and import it."""
    bundle, error = parse_bundle_json(text)
    if error:
        logger.info("Import rejected: %s", error.message)
        return error
    return import_bundle(ledger, bundle)


def _trimmed_income(income: Income) -> Income:
    return replace(income, source=income.source.strip())


def _trimmed_subscription(subscription: Subscription) -> Subscription:
    return replace(subscription, name=subscription.name.strip())
