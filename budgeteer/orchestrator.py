"""
Main Orchestrator for Budgeteer

This module ties the components together and defines the flows for:
1. Dashboard (store snapshot -> aggregator -> MonthlySummary)
2. Expense records (draft -> validate -> save / edit / delete)

DESIGN DECISION: The orchestrator enforces the boundaries:
- The aggregator only ever sees an owner-filtered snapshot
- No expense is written without passing validation
- Edits never change id, owner or creation time
- Every step is audited
"""

from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, TypeVar
from uuid import UUID

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from budgeteer.aggregation import SpendingAggregator, SpendingStatistics
from budgeteer.audit import AuditLogger, create_correlation_id
from budgeteer.calendar import DateLike, LocalCalendar
from budgeteer.config import get_settings
from budgeteer.models.audit import AuditEventBuilder
from budgeteer.models.expense import Expense, ExpenseDraft, ValidationResult
from budgeteer.models.summary import LifetimeStatistics, MonthlySummary
from budgeteer.models.user import UserProfile
from budgeteer.services.storage import (
    ExpenseStoreInterface,
    NotFoundError,
    StoreConnectionError,
    UserStoreInterface,
)
from budgeteer.validation import ExpenseValidator


T = TypeVar("T")


class ExpenseValidationError(Exception):
    """A draft failed validation; carries the full result for the form."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(i.message for i in result.issues if i.severity == "error")
        super().__init__(f"Expense is invalid: {messages}")


class _StoreReader:
    """Store reads retried on connection errors, with failures audited."""

    def __init__(
        self,
        audit_logger: AuditLogger,
        retry_wait: Optional[wait_base] = None,
    ):
        self._audit_logger = audit_logger
        self._attempts = get_settings().store_retry_attempts
        self._retry_wait = (
            retry_wait if retry_wait is not None
            else wait_exponential(multiplier=1, min=2, max=10)
        )

    async def read(
        self,
        operation: str,
        fn: Callable[..., Awaitable[T]],
        *args: Any,
        owner_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> T:
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._attempts),
                wait=self._retry_wait,
                retry=retry_if_exception_type(StoreConnectionError),
                reraise=True,
            ):
                with attempt:
                    return await fn(*args)
        except StoreConnectionError as e:
            self._audit_logger.log(AuditEventBuilder.store_error(
                operation=operation,
                error_message=str(e),
                owner_id=owner_id,
                correlation_id=correlation_id,
            ))
            raise


class DashboardFlow:
    """
    Builds the dashboard for one user and one month.

    Flow:
    1. Load the user's expenses and profile from the store (retried)
    2. Drop any expense not owned by the user
    3. Aggregate the snapshot for the reference month
    """

    def __init__(
        self,
        expense_store: ExpenseStoreInterface,
        user_store: Optional[UserStoreInterface] = None,
        calendar: Optional[LocalCalendar] = None,
        audit_logger: Optional[AuditLogger] = None,
        retry_wait: Optional[wait_base] = None,
    ):
        settings = get_settings()
        self._expense_store = expense_store
        self._user_store = user_store
        self._calendar = calendar or LocalCalendar.from_settings()
        self._aggregator = SpendingAggregator(self._calendar, settings.max_progress_ratio)
        self._statistics = SpendingStatistics(self._aggregator)
        self._audit_logger = audit_logger or AuditLogger()
        self._reader = _StoreReader(self._audit_logger, retry_wait)
        self._default_budget = settings.default_monthly_budget
        self._recent_limit = settings.recent_expenses_limit

    @property
    def aggregator(self) -> SpendingAggregator:
        return self._aggregator

    async def load_snapshot(
        self,
        owner_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> list[Expense]:
        """The user's expenses, filtered to the owner."""
        expenses = await self._reader.read(
            "list_expenses",
            self._expense_store.list_expenses,
            owner_id,
            owner_id=owner_id,
            correlation_id=correlation_id,
        )
        owned = [e for e in expenses if e.owner_id == owner_id]
        self._audit_logger.log(AuditEventBuilder.expenses_loaded(
            owner_id=owner_id,
            count=len(owned),
            skipped=len(expenses) - len(owned),
            correlation_id=correlation_id,
        ))
        return owned

    async def load_profile(
        self,
        owner_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> Optional[UserProfile]:
        if self._user_store is None:
            return None
        profile = await self._reader.read(
            "get_user",
            self._user_store.get_user,
            owner_id,
            owner_id=owner_id,
            correlation_id=correlation_id,
        )
        self._audit_logger.log(AuditEventBuilder.profile_loaded(
            owner_id=owner_id,
            found=profile is not None,
            correlation_id=correlation_id,
        ))
        return profile

    def summarize(
        self,
        owner_id: str,
        expenses: list[Expense],
        reference_date: DateLike,
        monthly_budget: Any = None,
        today: Optional[DateLike] = None,
    ) -> MonthlySummary:
        """Aggregate an already-loaded snapshot. No I/O."""
        agg = self._aggregator
        budget = monthly_budget if monthly_budget is not None else self._default_budget

        total = agg.total_for_month(expenses, reference_date)
        daily = agg.daily_spending_for_month(expenses, reference_date)
        year, month = self._calendar.month_key(reference_date)

        return MonthlySummary(
            owner_id=owner_id,
            year=year,
            month=month,
            total=total,
            monthly_budget=budget,
            budget=agg.budget_progress(total, budget),
            daily_average=self._statistics.daily_average_for_month(total, reference_date, today),
            by_category=agg.spending_by_category_for_month(expenses, reference_date),
            recent=agg.recent_expenses_for_month(expenses, reference_date, self._recent_limit),
            daily=daily,
            trend=self._statistics.daily_trend(daily),
        )

    async def monthly_summary(
        self,
        owner_id: str,
        reference_date: Optional[DateLike] = None,
        today: Optional[DateLike] = None,
        correlation_id: Optional[UUID] = None,
    ) -> MonthlySummary:
        """
        Load the user's data and summarize the month containing reference_date.

        Uses the profile's monthly budget, or the configured default when
        the user has no profile.
        """
        correlation_id = correlation_id or create_correlation_id()
        reference_date = reference_date or self._calendar.now()

        expenses = await self.load_snapshot(owner_id, correlation_id)
        profile = await self.load_profile(owner_id, correlation_id)
        budget = profile.monthly_budget if profile else None

        summary = self.summarize(owner_id, expenses, reference_date, budget, today)

        self._audit_logger.log(AuditEventBuilder.summary_computed(
            owner_id=owner_id,
            year=summary.year,
            month=summary.month,
            expense_count=len(expenses),
            correlation_id=correlation_id,
        ))
        return summary

    async def lifetime_statistics(
        self,
        owner_id: str,
        today: Optional[DateLike] = None,
        correlation_id: Optional[UUID] = None,
    ) -> LifetimeStatistics:
        expenses = await self.load_snapshot(owner_id, correlation_id)
        return self._statistics.lifetime_statistics(expenses, today)


class ExpenseRecordFlow:
    """
    Add, edit and delete expenses.

    Flow:
    1. Validate the draft (errors block, warnings pass through)
    2. Build or edit the Expense
    3. Persist to the store
    """

    def __init__(
        self,
        expense_store: ExpenseStoreInterface,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = expense_store
        self._validator = validator or ExpenseValidator(LocalCalendar.from_settings())
        self._audit_logger = audit_logger or AuditLogger()

    def _validate(
        self,
        owner_id: str,
        draft: ExpenseDraft,
        today: Optional[datetime],
        correlation_id: UUID,
    ) -> ValidationResult:
        result = self._validator.validate(draft, today)
        if result.has_errors:
            self._audit_logger.log(AuditEventBuilder.validation_failed(
                owner_id=owner_id,
                issues=[issue.model_dump() for issue in result.issues],
                correlation_id=correlation_id,
            ))
            raise ExpenseValidationError(result)
        return result

    async def add_expense(
        self,
        owner_id: str,
        draft: ExpenseDraft,
        today: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        """
        Validate and save a new expense.

        Raises:
            ExpenseValidationError: If the draft has error-level issues
        """
        correlation_id = correlation_id or create_correlation_id()
        self._validate(owner_id, draft, today, correlation_id)

        expense = draft.to_expense(owner_id)
        await self._store.save_expense(expense)

        self._audit_logger.log(AuditEventBuilder.expense_added(
            expense_id=expense.id,
            owner_id=owner_id,
            amount=str(expense.amount),
            correlation_id=correlation_id,
        ))
        return expense

    async def edit_expense(
        self,
        expense_id: str,
        draft: ExpenseDraft,
        today: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        """
        Replace an expense's editable fields with the draft's.

        Raises:
            NotFoundError: If the expense doesn't exist
            ExpenseValidationError: If the draft has error-level issues
        """
        correlation_id = correlation_id or create_correlation_id()
        existing = await self._store.get_expense(expense_id)
        if existing is None:
            raise NotFoundError(f"Expense {expense_id} not found")

        self._validate(existing.owner_id, draft, today, correlation_id)

        fields = draft.to_expense_fields()
        updated = existing.edited(**fields)
        await self._store.update_expense(updated)

        changed = sorted(k for k in fields if getattr(existing, k) != getattr(updated, k))
        self._audit_logger.log(AuditEventBuilder.expense_updated(
            expense_id=updated.id,
            owner_id=updated.owner_id,
            changed_fields=changed,
            correlation_id=correlation_id,
        ))
        return updated

    async def delete_expense(
        self,
        expense_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """
        Delete an expense.

        Records that no longer decode are still deleted; the audit event
        then carries no owner.

        Raises:
            NotFoundError: If the expense doesn't exist
        """
        correlation_id = correlation_id or create_correlation_id()
        existing = await self._store.get_expense(expense_id)
        if not await self._store.delete_expense(expense_id):
            raise NotFoundError(f"Expense {expense_id} not found")

        self._audit_logger.log(AuditEventBuilder.expense_deleted(
            expense_id=expense_id,
            owner_id=existing.owner_id if existing else None,
            correlation_id=correlation_id,
        ))


def create_app_components(
    expense_store: ExpenseStoreInterface,
    user_store: Optional[UserStoreInterface] = None,
) -> tuple[DashboardFlow, ExpenseRecordFlow]:
    """
    Factory function to create the application flows.

    Both flows share one calendar and one audit logger, so dashboard
    figures and validation agree on the session's timezone.
    """
    calendar = LocalCalendar.from_settings()
    audit_logger = AuditLogger()

    dashboard = DashboardFlow(
        expense_store=expense_store,
        user_store=user_store,
        calendar=calendar,
        audit_logger=audit_logger,
    )
    records = ExpenseRecordFlow(
        expense_store=expense_store,
        validator=ExpenseValidator(calendar),
        audit_logger=audit_logger,
    )
    return dashboard, records
