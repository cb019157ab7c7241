"""Tests for SpendingStatistics."""

from datetime import datetime, timezone
from decimal import Decimal

from budgeteer.aggregation import SpendingStatistics


class TestDailyAverage:
    """Divisor is days elapsed for the current month, month length otherwise."""

    def test_current_month_uses_days_so_far(self, aggregator):
        """Current month divides by days elapsed."""
        stats = SpendingStatistics(aggregator)
        today = datetime(2024, 1, 10, 15, 0)
        assert stats.daily_average_for_month(Decimal("100"), today, today) == Decimal("10")

    def test_first_of_month_divides_by_one(self, aggregator):
        """Day one divides by one."""
        stats = SpendingStatistics(aggregator)
        today = datetime(2024, 1, 1, 8, 0)
        assert stats.daily_average_for_month(Decimal("42"), today, today) == Decimal("42")

    def test_past_month_uses_month_length(self, aggregator):
        """Past months divide by their length."""
        stats = SpendingStatistics(aggregator)
        avg = stats.daily_average_for_month(
            Decimal("58"), datetime(2024, 2, 5), today=datetime(2024, 5, 1)
        )
        assert avg == Decimal("2")

    def test_zero_total(self, aggregator):
        """Zero spending averages to zero."""
        stats = SpendingStatistics(aggregator)
        assert stats.daily_average_for_month(Decimal("0"), datetime(2024, 3, 1), datetime(2024, 4, 1)) == 0


class TestDailyTrend:

    def test_empty(self):
        """No active days gives a zero trend."""
        trend = SpendingStatistics.daily_trend({})
        assert trend.active_days == 0
        assert trend.average == 0
        assert trend.maximum == 0

    def test_active_days(self, aggregator, january_scenario, jan_15):
        """Trend covers days with spending only."""
        daily = aggregator.daily_spending_for_month(january_scenario, jan_15)
        trend = SpendingStatistics.daily_trend(daily)
        assert trend.active_days == 3
        assert trend.average == Decimal("20")
        assert trend.maximum == Decimal("30")


class TestLifetimeStatistics:

    def test_empty(self, aggregator):
        """No expenses gives zero statistics."""
        stats = SpendingStatistics(aggregator).lifetime_statistics([])
        assert stats.expense_count == 0
        assert stats.total_spent == 0
        assert stats.average_per_day == 0

    def test_average_since_oldest_record(self, aggregator, make_expense):
        """Average counts days since the oldest record."""
        expenses = [
            make_expense(30, datetime(2024, 1, 2), created_at=datetime(2024, 1, 1, tzinfo=timezone.utc)),
            make_expense(10, datetime(2024, 1, 5), created_at=datetime(2024, 1, 5, tzinfo=timezone.utc)),
        ]
        stats = SpendingStatistics(aggregator).lifetime_statistics(
            expenses, today=datetime(2024, 1, 11, tzinfo=timezone.utc)
        )
        assert stats.expense_count == 2
        assert stats.total_spent == Decimal("40")
        assert stats.this_month == Decimal("40")
        assert stats.average_per_day == Decimal("4")

    def test_same_day_counts_as_one(self, aggregator, make_expense):
        """A single day divides by one."""
        now = datetime(2024, 1, 5, 12, tzinfo=timezone.utc)
        expenses = [make_expense(15, now, created_at=now)]
        stats = SpendingStatistics(aggregator).lifetime_statistics(expenses, today=now)
        assert stats.average_per_day == Decimal("15")

    def test_this_month_only_counts_today_month(self, aggregator, january_scenario):
        """This month follows today, not the records."""
        stats = SpendingStatistics(aggregator).lifetime_statistics(
            january_scenario, today=datetime(2024, 2, 10, tzinfo=timezone.utc)
        )
        assert stats.total_spent == Decimal("65")
        assert stats.this_month == Decimal("5")


class TestCategoryBreakdown:

    def test_sorted_with_shares(self):
        """Largest first, ties by label."""
        rows = SpendingStatistics.category_breakdown({
            "Gift": Decimal("10"),
            "Food & Dining": Decimal("30"),
            "Travel": Decimal("10"),
        })
        assert [r.label for r in rows] == ["Food & Dining", "Gift", "Travel"]
        assert rows[0].share == Decimal("0.6")
        assert sum(r.share for r in rows) == Decimal("1")

    def test_empty(self):
        """No categories, no rows."""
        assert SpendingStatistics.category_breakdown({}) == []

    def test_zero_total_has_zero_share(self):
        """Zero total does not divide by zero."""
        rows = SpendingStatistics.category_breakdown({"Other": Decimal("0")})
        assert rows[0].share == 0
