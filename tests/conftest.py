"""Shared fixtures: a UTC calendar and an expense factory."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import pytest

from budgeteer.aggregation import SpendingAggregator
from budgeteer.calendar import LocalCalendar
from budgeteer.models.expense import Expense, ExpenseCategory


@pytest.fixture
def utc_calendar() -> LocalCalendar:
    return LocalCalendar(timezone.utc)


@pytest.fixture
def aggregator(utc_calendar) -> SpendingAggregator:
    return SpendingAggregator(utc_calendar)


@pytest.fixture
def make_expense():
    """Factory for expenses owned by user-1 unless stated otherwise."""

    def _make(
        amount,
        expense_date: datetime,
        category: ExpenseCategory = ExpenseCategory.FOOD,
        custom_category_name: Optional[str] = None,
        name: str = "Expense",
        owner_id: str = "user-1",
        **kwargs,
    ) -> Expense:
        return Expense(
            owner_id=owner_id,
            name=name,
            amount=Decimal(str(amount)),
            category=category,
            custom_category_name=custom_category_name,
            expense_date=expense_date,
            **kwargs,
        )

    return _make


@pytest.fixture
def january_scenario(make_expense) -> list[Expense]:
    """Three January expenses and one on Feb 1."""
    return [
        make_expense(20, datetime(2024, 1, 5, 12, 0), name="Jan 5 lunch"),
        make_expense(30, datetime(2024, 1, 20, 19, 30), name="Jan 20 dinner"),
        make_expense(
            10,
            datetime(2024, 1, 10, 9, 0),
            category=ExpenseCategory.OTHER,
            custom_category_name="Gift",
            name="Jan 10 gift",
        ),
        make_expense(
            5,
            datetime(2024, 2, 1, 8, 0),
            category=ExpenseCategory.OTHER,
            name="Feb 1 misc",
        ),
    ]


@pytest.fixture
def jan_15() -> datetime:
    return datetime(2024, 1, 15, tzinfo=timezone.utc)
