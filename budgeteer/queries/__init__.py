"""Expense query package."""

from budgeteer.queries.executor import ExpenseQueryExecutor

__all__ = ["ExpenseQueryExecutor"]
