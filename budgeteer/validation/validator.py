"""
Two-Stage Expense Validation

STAGE 1 - SCHEMA VALIDATION:
- Name present
- Amount present and greater than zero
- Custom category name present when the category is "Other"

STAGE 2 - SEMANTIC VALIDATION:
- Expense date too far in the future
- Absurdly large amount

Stage 2 only runs when stage 1 passes.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the form can show them to the user.
"""

from datetime import timedelta
from decimal import Decimal
from typing import Optional

from budgeteer.calendar import DateLike, LocalCalendar
from budgeteer.config import get_settings
from budgeteer.models.expense import (
    ExpenseCategory,
    ExpenseDraft,
    ValidationIssue,
    ValidationResult,
)


class ExpenseValidator:
    """Validates add/edit form drafts before an Expense is built."""

    def __init__(self, calendar: Optional[LocalCalendar] = None):
        self._calendar = calendar or LocalCalendar.from_settings()
        self._settings = get_settings()

    def _validate_schema(self, draft: ExpenseDraft) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        if not draft.name.strip():
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Expense name is required",
                severity="error",
                suggested_fix="Give the expense a short name, e.g. 'Lunch'",
            ))

        if draft.amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                severity="error",
            ))
        elif not draft.amount.is_finite() or draft.amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
            ))

        if draft.category == ExpenseCategory.OTHER and not (draft.custom_category_name or "").strip():
            issues.append(ValidationIssue(
                field="custom_category_name",
                issue_type="missing",
                message="A category name is required when the category is Other",
                severity="error",
                suggested_fix="Name the category, e.g. 'Gift'",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def _validate_semantic(
        self,
        draft: ExpenseDraft,
        today: DateLike,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: Semantic validation.

        Only warnings - the values are possible, just suspicious.
        """
        issues = []

        tolerance = timedelta(days=self._settings.future_date_tolerance_days)
        latest = self._calendar.localize(today) + tolerance
        if self._calendar.localize(draft.expense_date) > latest:
            issues.append(ValidationIssue(
                field="expense_date",
                issue_type="future_date",
                message=f"Expense date ({draft.expense_date.date()}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))

        max_amount = Decimal(self._settings.max_expense_amount)
        if draft.amount is not None and draft.amount > max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({draft.amount:,.2f}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def validate(
        self,
        draft: ExpenseDraft,
        today: Optional[DateLike] = None,
    ) -> ValidationResult:
        """
        Run the full two-stage validation pipeline.

        Args:
            draft: The form payload to validate
            today: Reference "now" for the future-date check (defaults to now)
        """
        all_issues = []

        schema_valid, schema_issues = self._validate_schema(draft)
        all_issues.extend(schema_issues)

        semantic_valid = False
        if schema_valid:
            semantic_valid, semantic_issues = self._validate_semantic(
                draft, today or self._calendar.now()
            )
            all_issues.extend(semantic_issues)

        return ValidationResult(
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            issues=all_issues,
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short text for the form's error banner."""
        if result.is_valid and not result.warnings:
            return "All checks passed."

        lines = []
        if result.has_errors:
            lines.append("Please fix the following:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"  - {issue.message}")
        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Please verify:")
            for issue in result.warnings:
                lines.append(f"  - {issue.message}")
        return "\n".join(lines)
