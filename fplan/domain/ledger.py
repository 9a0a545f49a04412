"""In-memory ledger store.

The Ledger owns the three record collections for one session. It is created
by the entry point and handed to every operation; nothing here is global.
"""

from dataclasses import replace
from typing import TypeVar

from fplan.domain.models import ErrorKind, Expense, Income, LedgerError, Subscription
from fplan.logging_setup import get_logger

logger = get_logger(__name__)

R = TypeVar("R", Income, Expense, Subscription)


def _by_date_descending(records: list[R], kind: str) -> list[R]:
    # sorted() is stable, so records sharing a date keep insertion order.
    if kind == "subscription":
        return sorted(records, key=lambda r: r.start_date, reverse=True)
    return sorted(records, key=lambda r: r.date, reverse=True)


def _resolve_display_index(records: list[R], index: int, kind: str) -> tuple[R | None, LedgerError | None]:
    ordered = _by_date_descending(records, kind)
    if index < 1 or index > len(ordered):
        return None, LedgerError(
            ErrorKind.INDEX_OUT_OF_RANGE,
            f"Invalid {kind} number {index}. Choose 1-{len(ordered)}." if ordered else f"No {kind}s to choose from.",
        )
    return ordered[index - 1], None


def _position_of(records: list[R], record: R) -> int:
    # Identity, not equality: duplicate records are allowed.
    for position, candidate in enumerate(records):
        if candidate is record:
            return position
    raise LookupError("record is not in the ledger")


class Ledger:
    """Incomes, expenses and subscriptions held for a single session."""

    def __init__(self) -> None:
        self._incomes: list[Income] = []
        self._expenses: list[Expense] = []
        self._subscriptions: list[Subscription] = []

    # Read access -----------------------------------------------------------
    @property
    def incomes(self) -> tuple[Income, ...]:
        return tuple(self._incomes)

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return tuple(self._expenses)

    @property
    def subscriptions(self) -> tuple[Subscription, ...]:
        return tuple(self._subscriptions)

    @property
    def is_empty(self) -> bool:
        return not (self._incomes or self._expenses or self._subscriptions)

    def counts(self) -> dict[str, int]:
        """Number of records per collection."""
        return {
            "incomes": len(self._incomes),
            "expenses": len(self._expenses),
            "subscriptions": len(self._subscriptions),
        }

    def incomes_by_date(self) -> list[Income]:
        return _by_date_descending(self._incomes, "income")

    def expenses_by_date(self) -> list[Expense]:
        return _by_date_descending(self._expenses, "expense")

    def subscriptions_by_date(self) -> list[Subscription]:
        return _by_date_descending(self._subscriptions, "subscription")

    # Mutations -------------------------------------------------------------
    def add_income(self, income: Income) -> None:
        self._incomes.append(income)
        logger.debug("Added income %s %s", income.date, income.amount)

    def add_expense(self, expense: Expense) -> None:
        self._expenses.append(expense)
        logger.debug("Added expense %s %s %s", expense.date, expense.category, expense.amount)

    def add_subscription(self, subscription: Subscription) -> None:
        self._subscriptions.append(subscription)
        logger.debug("Added subscription %s", subscription.name)

    def remove_income_at(self, index: int) -> tuple[Income | None, LedgerError | None]:
        """Remove the income shown at a 1-based position of the date-descending list."""
        income, error = _resolve_display_index(self._incomes, index, "income")
        if error:
            return None, error
        del self._incomes[_position_of(self._incomes, income)]
        logger.debug("Removed income #%d", index)
        return income, None

    def remove_expense_at(self, index: int) -> tuple[Expense | None, LedgerError | None]:
        """Remove the expense shown at a 1-based position of the date-descending list."""
        expense, error = _resolve_display_index(self._expenses, index, "expense")
        if error:
            return None, error
        del self._expenses[_position_of(self._expenses, expense)]
        logger.debug("Removed expense #%d", index)
        return expense, None

    def remove_subscription_at(self, index: int) -> tuple[Subscription | None, LedgerError | None]:
        """Remove the subscription shown at a 1-based position of the date-descending list."""
        subscription, error = _resolve_display_index(self._subscriptions, index, "subscription")
        if error:
            return None, error
        del self._subscriptions[_position_of(self._subscriptions, subscription)]
        logger.debug("Removed subscription #%d", index)
        return subscription, None

    def toggle_subscription_at(self, index: int) -> tuple[Subscription | None, LedgerError | None]:
        """Flip is_active of the subscription at a 1-based display position.

        Returns:
            Tuple of (updated subscription, error).
        """
        subscription, error = _resolve_display_index(self._subscriptions, index, "subscription")
        if error:
            return None, error
        toggled = replace(subscription, is_active=not subscription.is_active)
        self._subscriptions[_position_of(self._subscriptions, subscription)] = toggled
        logger.debug("Subscription %s active=%s", toggled.name, toggled.is_active)
        return toggled, None

    def replace_all(
        self,
        incomes: list[Income],
        expenses: list[Expense],
        subscriptions: list[Subscription],
    ) -> None:
        """Swap in all three collections at once."""
        self._incomes, self._expenses, self._subscriptions = list(incomes), list(expenses), list(subscriptions)
        logger.info(
            "Ledger replaced: %d incomes, %d expenses, %d subscriptions",
            len(self._incomes),
            len(self._expenses),
            len(self._subscriptions),
        )
