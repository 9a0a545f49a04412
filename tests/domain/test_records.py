"""Tests for fplan.domain.records validating factories."""

from datetime import date
from decimal import Decimal

import pytest

from fplan.domain.models import Category, ErrorKind
from fplan.domain.records import create_expense, create_income, create_subscription, parse_category


class TestParseCategory:
    """Tests for parse_category."""

    @pytest.mark.parametrize("text", ["Food", "food", "FOOD", "  fOoD  "])
    def test_matches_case_insensitively(self, text: str) -> None:
        """Should accept any casing of a category name."""
        assert parse_category(text) == Category.FOOD

    def test_matches_every_category(self) -> None:
        """Should recognise all five categories."""
        assert [parse_category(c.value.lower()) for c in Category] == list(Category)

    @pytest.mark.parametrize("text", [None, "", "Groceries", "Foods"])
    def test_unknown_category_returns_none(self, text: str | None) -> None:
        """Should return None for anything outside the fixed set."""
        assert parse_category(text) is None


class TestCreateIncome:
    """Tests for create_income."""

    def test_valid_income(self) -> None:
        """Should build an income with trimmed source and exact amount."""
        income, error = create_income("2025-09-05", "  Salary ", "2000")

        assert error is None
        assert income is not None
        assert income.date == date(2025, 9, 5)
        assert income.source == "Salary"
        assert income.amount == Decimal("2000")

    @pytest.mark.parametrize("source", [None, "", "   "])
    def test_empty_source(self, source: str | None) -> None:
        """Should reject a blank source."""
        income, error = create_income("2025-09-05", source, "2000")

        assert income is None
        assert error is not None
        assert error.kind == ErrorKind.EMPTY_FIELD

    def test_invalid_date(self) -> None:
        """Should reject an unparseable date."""
        income, error = create_income("yesterday-ish", "Salary", "2000")

        assert income is None
        assert error is not None
        assert error.kind == ErrorKind.INVALID_DATE

    @pytest.mark.parametrize("amount", ["0", "-5", "abc", "", None])
    def test_non_positive_or_malformed_amount(self, amount: str | None) -> None:
        """Should reject amounts that are not a number greater than zero."""
        income, error = create_income("2025-09-05", "Salary", amount)

        assert income is None
        assert error is not None
        assert error.kind == ErrorKind.INVALID_AMOUNT
        assert error.kind.is_validation

    def test_source_checked_before_date(self) -> None:
        """Should report the empty source first when several fields are bad."""
        _, error = create_income("bad", "", "-1")

        assert error is not None
        assert error.kind == ErrorKind.EMPTY_FIELD


class TestCreateExpense:
    """Tests for create_expense."""

    def test_valid_expense(self) -> None:
        """Should build an expense with canonical category and trimmed note."""
        expense, error = create_expense("2025-09-10", "food", "12.50", "  Groceries  ")

        assert error is None
        assert expense is not None
        assert expense.date == date(2025, 9, 10)
        assert expense.category == Category.FOOD
        assert expense.amount == Decimal("12.50")
        assert expense.note == "Groceries"

    @pytest.mark.parametrize("note", [None, "", "   "])
    def test_blank_note_becomes_empty(self, note: str | None) -> None:
        """Should store an empty note when none is given."""
        expense, error = create_expense("2025-09-10", "Fun", "5", note)

        assert error is None
        assert expense is not None
        assert expense.note == ""

    def test_note_is_optional(self) -> None:
        """Should default the note to empty."""
        expense, _ = create_expense("2025-09-10", "Other", "1")

        assert expense is not None
        assert expense.note == ""

    def test_invalid_category(self) -> None:
        """Should list the valid categories in the error."""
        expense, error = create_expense("2025-09-10", "Groceries", "12")

        assert expense is None
        assert error is not None
        assert error.kind == ErrorKind.INVALID_CATEGORY
        assert "Food, Transport, Fun, School, Other" in error.message

    def test_invalid_date(self) -> None:
        """Should reject February 30th."""
        _, error = create_expense("2025-02-30", "Food", "12")

        assert error is not None
        assert error.kind == ErrorKind.INVALID_DATE

    def test_zero_amount(self) -> None:
        """Should reject a zero amount."""
        _, error = create_expense("2025-09-10", "Food", "0")

        assert error is not None
        assert error.kind == ErrorKind.INVALID_AMOUNT


class TestCreateSubscription:
    """Tests for create_subscription."""

    def test_valid_subscription(self) -> None:
        """Should build an active subscription."""
        subscription, error = create_subscription(" Streaming ", "9.99", "2025-08-01", True)

        assert error is None
        assert subscription is not None
        assert subscription.name == "Streaming"
        assert subscription.monthly_price == Decimal("9.99")
        assert subscription.start_date == date(2025, 8, 1)
        assert subscription.is_active is True

    def test_inactive_subscription(self) -> None:
        """Should keep the given active flag."""
        subscription, _ = create_subscription("Gym", "30", "2025-01-15", False)

        assert subscription is not None
        assert subscription.is_active is False

    def test_empty_name(self) -> None:
        """Should reject a blank name."""
        _, error = create_subscription("  ", "10", "2025-08-01", True)

        assert error is not None
        assert error.kind == ErrorKind.EMPTY_FIELD

    def test_negative_price(self) -> None:
        """Should reject a negative monthly price."""
        _, error = create_subscription("Gym", "-30", "2025-08-01", True)

        assert error is not None
        assert error.kind == ErrorKind.INVALID_AMOUNT
        assert "Monthly price" in error.message

    def test_invalid_start_date(self) -> None:
        """Should reject an unparseable start date."""
        _, error = create_subscription("Gym", "30", "someday", True)

        assert error is not None
        assert error.kind == ErrorKind.INVALID_DATE
