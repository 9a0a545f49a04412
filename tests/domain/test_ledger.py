"""Tests for fplan.domain.ledger store."""

from datetime import date
from decimal import Decimal

import pytest

from fplan.domain.ledger import Ledger
from fplan.domain.models import Category, ErrorKind, Expense, Income, Money, Subscription


def _income(day: date, source: str = "Salary", amount: str = "100") -> Income:
    return Income(date=day, source=source, amount=Money(Decimal(amount)))


def _expense(day: date, amount: str = "10", note: str = "") -> Expense:
    return Expense(date=day, category=Category.FOOD, amount=Money(Decimal(amount)), note=note)


def _subscription(name: str, start: date, is_active: bool = True) -> Subscription:
    return Subscription(name=name, monthly_price=Money(Decimal("10")), start_date=start, is_active=is_active)


class TestLedgerBasics:
    """Tests for adding and reading records."""

    def test_new_ledger_is_empty(self) -> None:
        """Should start with three empty collections."""
        ledger = Ledger()

        assert ledger.is_empty
        assert ledger.counts() == {"incomes": 0, "expenses": 0, "subscriptions": 0}

    def test_add_records(self) -> None:
        """Should keep records in insertion order."""
        ledger = Ledger()
        first = _income(date(2025, 9, 5))
        second = _income(date(2025, 9, 1))
        ledger.add_income(first)
        ledger.add_income(second)
        ledger.add_expense(_expense(date(2025, 9, 2)))

        assert ledger.incomes == (first, second)
        assert ledger.counts() == {"incomes": 2, "expenses": 1, "subscriptions": 0}
        assert not ledger.is_empty

    def test_read_access_is_a_copy(self) -> None:
        """Should not expose the internal lists."""
        ledger = Ledger()
        ledger.add_income(_income(date(2025, 9, 5)))

        assert isinstance(ledger.incomes, tuple)


class TestDateOrdering:
    """Tests for the date-descending views."""

    def test_newest_first(self) -> None:
        """Should put the latest date first."""
        ledger = Ledger()
        for day in (date(2025, 9, 1), date(2025, 9, 20), date(2025, 9, 10)):
            ledger.add_expense(_expense(day))

        assert [e.date.day for e in ledger.expenses_by_date()] == [20, 10, 1]

    def test_same_date_keeps_insertion_order(self) -> None:
        """Should be a stable sort for records sharing a date."""
        ledger = Ledger()
        ledger.add_income(_income(date(2025, 9, 5), "A"))
        ledger.add_income(_income(date(2025, 9, 5), "B"))
        ledger.add_income(_income(date(2025, 9, 6), "C"))

        assert [i.source for i in ledger.incomes_by_date()] == ["C", "A", "B"]

    def test_subscriptions_ordered_by_start_date(self) -> None:
        """Should order subscriptions by start date."""
        ledger = Ledger()
        ledger.add_subscription(_subscription("Old", date(2024, 1, 1)))
        ledger.add_subscription(_subscription("New", date(2025, 1, 1)))

        assert [s.name for s in ledger.subscriptions_by_date()] == ["New", "Old"]


class TestRemoveAtDisplayIndex:
    """Tests for removing by 1-based display position."""

    def test_removes_record_shown_at_index(self) -> None:
        """Should resolve the index against the newest-first view."""
        ledger = Ledger()
        older = _income(date(2025, 9, 1), "Older")
        newer = _income(date(2025, 9, 5), "Newer")
        ledger.add_income(older)
        ledger.add_income(newer)

        removed, error = ledger.remove_income_at(1)

        assert error is None
        assert removed is newer
        assert ledger.incomes == (older,)

    def test_removes_only_one_of_identical_records(self) -> None:
        """Should remove exactly the selected record when duplicates exist."""
        ledger = Ledger()
        ledger.add_expense(_expense(date(2025, 9, 1), "10", "Lunch"))
        ledger.add_expense(_expense(date(2025, 9, 1), "10", "Lunch"))
        ledger.add_expense(_expense(date(2025, 9, 3), "7"))

        removed, error = ledger.remove_expense_at(2)

        assert error is None
        assert removed is not None
        assert removed.note == "Lunch"
        assert len(ledger.expenses) == 2
        assert [e.amount for e in ledger.expenses_by_date()] == [Decimal("7"), Decimal("10")]

    def test_removes_the_identical_instance(self) -> None:
        """Should delete the instance at the position, not the first equal record."""
        ledger = Ledger()
        first = _expense(date(2025, 9, 1), "10")
        second = _expense(date(2025, 9, 1), "10")
        ledger.add_expense(first)
        ledger.add_expense(second)

        removed, _ = ledger.remove_expense_at(2)

        assert removed is second
        assert ledger.expenses[0] is first

    @pytest.mark.parametrize("index", [0, -1, 3])
    def test_out_of_range(self, index: int) -> None:
        """Should report INDEX_OUT_OF_RANGE and leave the ledger unchanged."""
        ledger = Ledger()
        ledger.add_income(_income(date(2025, 9, 1)))
        ledger.add_income(_income(date(2025, 9, 2)))

        removed, error = ledger.remove_income_at(index)

        assert removed is None
        assert error is not None
        assert error.kind == ErrorKind.INDEX_OUT_OF_RANGE
        assert not error.kind.is_validation
        assert "1-2" in error.message
        assert len(ledger.incomes) == 2

    def test_empty_collection(self) -> None:
        """Should say there is nothing to choose from."""
        removed, error = Ledger().remove_subscription_at(1)

        assert removed is None
        assert error is not None
        assert error.kind == ErrorKind.INDEX_OUT_OF_RANGE
        assert "No subscriptions" in error.message

    def test_remove_subscription(self) -> None:
        """Should remove subscriptions by start-date position."""
        ledger = Ledger()
        ledger.add_subscription(_subscription("Old", date(2024, 1, 1)))
        ledger.add_subscription(_subscription("New", date(2025, 1, 1)))

        removed, error = ledger.remove_subscription_at(2)

        assert error is None
        assert removed is not None
        assert removed.name == "Old"
        assert [s.name for s in ledger.subscriptions] == ["New"]


class TestToggleSubscription:
    """Tests for toggle_subscription_at."""

    def test_toggle_flips_active_flag(self) -> None:
        """Should flip is_active and keep the position."""
        ledger = Ledger()
        ledger.add_subscription(_subscription("Streaming", date(2025, 8, 1)))
        ledger.add_subscription(_subscription("Gym", date(2025, 1, 1)))

        toggled, error = ledger.toggle_subscription_at(1)

        assert error is None
        assert toggled is not None
        assert toggled.name == "Streaming"
        assert toggled.is_active is False
        assert [s.is_active for s in ledger.subscriptions] == [False, True]

    def test_toggle_twice_restores_flag(self) -> None:
        """Should be reversible."""
        ledger = Ledger()
        ledger.add_subscription(_subscription("Streaming", date(2025, 8, 1), is_active=False))

        ledger.toggle_subscription_at(1)
        toggled, _ = ledger.toggle_subscription_at(1)

        assert toggled is not None
        assert toggled.is_active is False

    def test_toggle_out_of_range(self) -> None:
        """Should reject positions past the end."""
        ledger = Ledger()
        ledger.add_subscription(_subscription("Streaming", date(2025, 8, 1)))

        toggled, error = ledger.toggle_subscription_at(2)

        assert toggled is None
        assert error is not None
        assert error.kind == ErrorKind.INDEX_OUT_OF_RANGE
        assert ledger.subscriptions[0].is_active is True


class TestReplaceAll:
    """Tests for replace_all."""

    def test_replaces_every_collection(self) -> None:
        """Should swap all three collections."""
        ledger = Ledger()
        ledger.add_income(_income(date(2025, 1, 1)))
        new_expense = _expense(date(2025, 9, 1))

        ledger.replace_all([], [new_expense], [])

        assert ledger.incomes == ()
        assert ledger.expenses == (new_expense,)
        assert ledger.subscriptions == ()

    def test_does_not_alias_caller_lists(self) -> None:
        """Should copy the given lists."""
        ledger = Ledger()
        incomes = [_income(date(2025, 1, 1))]

        ledger.replace_all(incomes, [], [])
        incomes.clear()

        assert len(ledger.incomes) == 1
