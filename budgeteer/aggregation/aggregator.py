"""
Spending Aggregator

DESIGN DECISION: Aggregation is a pure computation over a caller-supplied
snapshot of expenses and a reference date. It never reads global state,
never touches the network, and never mutates its inputs.

Month membership is decided by the (year, month) of `expense_date` in the
calendar's pinned zone, not by elapsed-day windows: Jan 31 and Feb 1 are
different months, Jan 1 and Jan 31 the same one.

GUARANTEES:
- Empty input gives zero / empty results, never an error
- Category sums and daily sums both add up to the month total exactly
- Raw Decimal sums; rounding and formatting belong to the presentation layer
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Union

from budgeteer.calendar import DateLike, LocalCalendar
from budgeteer.models.expense import Expense
from budgeteer.models.summary import BudgetProgress


Number = Union[Decimal, int, float]

ZERO = Decimal("0")
DEFAULT_RECENT_LIMIT = 5
DEFAULT_MAX_PROGRESS_RATIO = Decimal("2")


def to_decimal(value: Number) -> Decimal:
    """Decimal from an int/float/Decimal; floats go through repr to avoid binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


class SpendingAggregator:
    """
    Month-scoped spending figures for the dashboard.

    One aggregator holds one calendar, so every figure computed through
    it uses the same month and day boundaries.
    """

    def __init__(
        self,
        calendar: Optional[LocalCalendar] = None,
        max_progress_ratio: Number = DEFAULT_MAX_PROGRESS_RATIO,
    ):
        self._calendar = calendar or LocalCalendar.from_settings()
        self._max_ratio = to_decimal(max_progress_ratio)

    @property
    def calendar(self) -> LocalCalendar:
        return self._calendar

    def expenses_in_month(
        self,
        expenses: Iterable[Expense],
        reference_date: DateLike,
    ) -> list[Expense]:
        """Expenses whose expense_date falls in the reference month, input order kept."""
        key = self._calendar.month_key(reference_date)
        return [e for e in expenses if self._calendar.month_key(e.expense_date) == key]

    def total_for_month(
        self,
        expenses: Iterable[Expense],
        reference_date: DateLike,
    ) -> Decimal:
        return sum(
            (e.amount for e in self.expenses_in_month(expenses, reference_date)),
            ZERO,
        )

    def spending_by_category_for_month(
        self,
        expenses: Iterable[Expense],
        reference_date: DateLike,
    ) -> dict[str, Decimal]:
        """
        Month spending keyed by display category.

        "Other" expenses with a custom name group under that name;
        without one they group under "Other".
        """
        totals: dict[str, Decimal] = {}
        for expense in self.expenses_in_month(expenses, reference_date):
            key = expense.display_category
            totals[key] = totals.get(key, ZERO) + expense.amount
        return totals

    def recent_expenses_for_month(
        self,
        expenses: Iterable[Expense],
        reference_date: DateLike,
        limit: int = DEFAULT_RECENT_LIMIT,
    ) -> list[Expense]:
        """
        Most recent expenses of the month, newest first.

        The sort is stable, so expenses with equal timestamps keep their
        input order. A negative limit is treated as 0.
        """
        limit = max(limit, 0)
        if limit == 0:
            return []
        monthly = self.expenses_in_month(expenses, reference_date)
        monthly.sort(key=lambda e: self._calendar.localize(e.expense_date), reverse=True)
        return monthly[:limit]

    def daily_spending_for_month(
        self,
        expenses: Iterable[Expense],
        reference_date: DateLike,
    ) -> dict[datetime, Decimal]:
        """
        Month spending keyed by local midnight of each day.

        Days without expenses are absent, not zero.
        """
        totals: dict[datetime, Decimal] = {}
        for expense in self.expenses_in_month(expenses, reference_date):
            day = self._calendar.start_of_day(expense.expense_date)
            totals[day] = totals.get(day, ZERO) + expense.amount
        return totals

    def budget_progress(
        self,
        total_spent: Number,
        monthly_budget: Number,
    ) -> BudgetProgress:
        """
        Remaining budget and spent/budget ratio.

        A budget <= 0 is replaced by 1 before both figures are computed.
        The ratio is clamped to [0, max_progress_ratio].
        """
        spent = to_decimal(total_spent)
        budget = to_decimal(monthly_budget)
        if budget <= 0:
            budget = Decimal("1")

        ratio = min(max(spent / budget, ZERO), self._max_ratio)
        return BudgetProgress(remaining=budget - spent, progress_ratio=ratio)
