"""
Summary Models

Read-only results produced by the aggregator and the statistics helpers.
Nothing here is persisted; these are handed to the presentation layer.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from budgeteer.models.expense import Expense


class BudgetProgress(BaseModel):
    """
    Spent-versus-budget figures for one month.

    `remaining` is negative when over budget.
    `progress_ratio` is clamped to [0, 2] for bounded chart scaling.
    """
    model_config = ConfigDict(frozen=True)

    remaining: Decimal
    progress_ratio: Decimal

    @property
    def is_over_budget(self) -> bool:
        return self.remaining < 0


class DailyTrend(BaseModel):
    """Summary of the days that had spending."""
    model_config = ConfigDict(frozen=True)

    average: Decimal = Decimal("0")
    maximum: Decimal = Decimal("0")
    active_days: int = Field(default=0, ge=0)


class CategoryShare(BaseModel):
    """One legend row: label, amount and share of the month total."""
    model_config = ConfigDict(frozen=True)

    label: str
    amount: Decimal
    share: Decimal


class LifetimeStatistics(BaseModel):
    """Account-wide figures shown on the settings screen."""
    model_config = ConfigDict(frozen=True)

    expense_count: int = Field(default=0, ge=0)
    total_spent: Decimal = Decimal("0")
    this_month: Decimal = Decimal("0")
    average_per_day: Decimal = Decimal("0")


class MonthlySummary(BaseModel):
    """Everything the dashboard renders for one reference month."""
    model_config = ConfigDict(frozen=True)

    owner_id: str
    year: int
    month: int
    total: Decimal
    monthly_budget: Decimal
    budget: BudgetProgress
    daily_average: Decimal
    by_category: dict[str, Decimal] = Field(default_factory=dict)
    recent: list[Expense] = Field(default_factory=list)
    daily: dict[datetime, Decimal] = Field(default_factory=dict)
    trend: DailyTrend = Field(default_factory=DailyTrend)
