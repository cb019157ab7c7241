"""Spending aggregation package."""

from budgeteer.aggregation.aggregator import SpendingAggregator, to_decimal
from budgeteer.aggregation.statistics import SpendingStatistics

__all__ = ["SpendingAggregator", "SpendingStatistics", "to_decimal"]
