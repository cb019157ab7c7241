"""
Spending Statistics

Secondary figures the dashboard and settings screens show next to the
aggregator output: daily average for a month, the trend over active
days, account-wide totals, and the sorted category legend.
"""

from datetime import datetime
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from budgeteer.aggregation.aggregator import ZERO, SpendingAggregator
from budgeteer.calendar import DateLike
from budgeteer.models.expense import Expense
from budgeteer.models.summary import CategoryShare, DailyTrend, LifetimeStatistics


class SpendingStatistics:
    """Derived statistics, sharing the aggregator's calendar."""

    def __init__(self, aggregator: SpendingAggregator):
        self._aggregator = aggregator
        self._calendar = aggregator.calendar

    def daily_average_for_month(
        self,
        total: Decimal,
        reference_date: DateLike,
        today: Optional[DateLike] = None,
    ) -> Decimal:
        """
        Month total spread over the days that count.

        For the current month that is the days elapsed so far (today
        included); for any other month it is the length of the month.
        """
        today = today or self._calendar.now()
        if self._calendar.same_month(reference_date, today):
            days = max(self._calendar.localize(today).day, 1)
        else:
            days = self._calendar.days_in_month(reference_date)
        return total / days

    @staticmethod
    def daily_trend(daily_spending: Mapping[datetime, Decimal]) -> DailyTrend:
        """Average and maximum over active days only."""
        if not daily_spending:
            return DailyTrend()
        values = list(daily_spending.values())
        return DailyTrend(
            average=sum(values, ZERO) / len(values),
            maximum=max(values),
            active_days=len(values),
        )

    def lifetime_statistics(
        self,
        expenses: Sequence[Expense],
        today: Optional[DateLike] = None,
    ) -> LifetimeStatistics:
        """
        Account-wide count, total, this month's total and per-day average.

        The per-day average runs from the oldest record's created_at to
        today, counted as at least one day.
        """
        if not expenses:
            return LifetimeStatistics()

        today = today or self._calendar.now()
        total = sum((e.amount for e in expenses), ZERO)
        oldest = min(expenses, key=lambda e: self._calendar.localize(e.created_at))
        days = max(self._calendar.days_between(oldest.created_at, today), 1)

        return LifetimeStatistics(
            expense_count=len(expenses),
            total_spent=total,
            this_month=self._aggregator.total_for_month(expenses, today),
            average_per_day=total / days,
        )

    @staticmethod
    def category_breakdown(by_category: Mapping[str, Decimal]) -> list[CategoryShare]:
        """Legend rows, largest first (ties by label), with each row's share of the total."""
        total = sum(by_category.values(), ZERO)
        rows = sorted(by_category.items(), key=lambda item: (-item[1], item[0]))
        return [
            CategoryShare(
                label=label,
                amount=amount,
                share=(amount / total) if total else ZERO,
            )
            for label, amount in rows
        ]
