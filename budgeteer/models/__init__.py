"""
Data Models Package

This package contains all Pydantic models used in Budgeteer.
All data flowing through the system must conform to these schemas.
"""

from budgeteer.models.expense import (
    CATEGORY_STYLES,
    CategoryStyle,
    Expense,
    ExpenseCategory,
    ExpenseDraft,
    ExpenseQuery,
    ValidationIssue,
    ValidationResult,
    style_for,
    style_for_label,
)
from budgeteer.models.summary import (
    BudgetProgress,
    CategoryShare,
    DailyTrend,
    LifetimeStatistics,
    MonthlySummary,
)
from budgeteer.models.user import DEFAULT_MONTHLY_BUDGET, UserProfile
from budgeteer.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "CATEGORY_STYLES",
    "CategoryStyle",
    "Expense",
    "ExpenseCategory",
    "ExpenseDraft",
    "ExpenseQuery",
    "ValidationIssue",
    "ValidationResult",
    "style_for",
    "style_for_label",
    # Summary models
    "BudgetProgress",
    "CategoryShare",
    "DailyTrend",
    "LifetimeStatistics",
    "MonthlySummary",
    # User models
    "DEFAULT_MONTHLY_BUDGET",
    "UserProfile",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
