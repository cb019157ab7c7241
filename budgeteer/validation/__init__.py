"""Validation package."""

from budgeteer.validation.validator import ExpenseValidator

__all__ = ["ExpenseValidator"]
