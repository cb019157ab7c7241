"""Tests for the two-stage expense validator."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from budgeteer.config import get_settings
from budgeteer.models.expense import ExpenseCategory, ExpenseDraft
from budgeteer.validation import ExpenseValidator


NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def validator(utc_calendar) -> ExpenseValidator:
    return ExpenseValidator(utc_calendar)


def _draft(**overrides) -> ExpenseDraft:
    values = {
        "name": "Groceries",
        "amount": Decimal("42.50"),
        "category": ExpenseCategory.FOOD,
        "expense_date": NOW,
    }
    values.update(overrides)
    return ExpenseDraft(**values)


class TestSchemaStage:

    def test_valid_draft(self, validator):
        """A complete draft passes."""
        result = validator.validate(_draft(), today=NOW)
        assert result.is_valid is True
        assert result.issues == []
        assert validator.get_user_friendly_summary(result) == "All checks passed."

    @pytest.mark.parametrize("name", ["", "   "])
    def test_name_required(self, validator, name):
        """Blank names are rejected."""
        result = validator.validate(_draft(name=name), today=NOW)
        assert result.schema_valid is False
        assert [i.field for i in result.issues] == ["name"]

    def test_amount_required(self, validator):
        """Missing amount is an error."""
        result = validator.validate(_draft(amount=None), today=NOW)
        assert result.has_errors
        assert result.issues[0].issue_type == "missing"

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
    def test_amount_must_be_positive(self, validator, amount):
        """Zero and negative amounts are rejected."""
        result = validator.validate(_draft(amount=amount), today=NOW)
        assert result.error_count == 1
        assert result.issues[0].issue_type == "invalid_value"

    def test_other_requires_custom_name(self, validator):
        """OTHER needs a custom name."""
        result = validator.validate(
            _draft(category=ExpenseCategory.OTHER, custom_category_name="  "),
            today=NOW,
        )
        assert [i.field for i in result.issues] == ["custom_category_name"]

    def test_other_with_custom_name_is_valid(self, validator):
        """OTHER with a name passes."""
        result = validator.validate(
            _draft(category=ExpenseCategory.OTHER, custom_category_name="Gift"),
            today=NOW,
        )
        assert result.is_valid

    def test_semantic_stage_skipped_on_schema_errors(self, validator):
        """Schema errors stop before semantic checks."""
        result = validator.validate(
            _draft(name="", expense_date=NOW + timedelta(days=30)),
            today=NOW,
        )
        assert result.semantic_valid is False
        assert all(i.severity == "error" for i in result.issues)


class TestSemanticStage:

    def test_future_date_warns(self, validator):
        """Dates past the tolerance warn."""
        result = validator.validate(_draft(expense_date=NOW + timedelta(days=3)), today=NOW)
        assert result.is_valid is True
        assert [i.issue_type for i in result.warnings] == ["future_date"]
        assert "Please verify" in validator.get_user_friendly_summary(result)

    def test_within_tolerance_is_fine(self, validator):
        """Dates inside the tolerance do not warn."""
        result = validator.validate(_draft(expense_date=NOW + timedelta(hours=20)), today=NOW)
        assert result.warnings == []

    def test_huge_amount_warns(self, validator):
        """Very large amounts warn but pass."""
        result = validator.validate(_draft(amount=Decimal("5000000")), today=NOW)
        assert result.has_errors is False
        assert [i.issue_type for i in result.warnings] == ["suspicious_value"]


class TestDraftConversion:

    def test_trims_and_drops_empty_optionals(self):
        """Text is trimmed and blanks become None."""
        expense = _draft(
            name="  Lunch  ",
            description="   ",
            location=" Cafe ",
        ).to_expense("user-9")
        assert expense.owner_id == "user-9"
        assert expense.name == "Lunch"
        assert expense.description is None
        assert expense.location == "Cafe"

    def test_custom_name_dropped_unless_other(self):
        """Custom name is discarded for other categories."""
        expense = _draft(custom_category_name="Holiday").to_expense("user-9")
        assert expense.custom_category_name is None
        assert expense.display_category == "Food & Dining"

    def test_custom_name_kept_for_other(self):
        """Custom name is kept for OTHER."""
        expense = _draft(
            category=ExpenseCategory.OTHER,
            custom_category_name=" Gift ",
        ).to_expense("user-9")
        assert expense.display_category == "Gift"


class TestDefaultCalendar:

    def test_default_follows_configured_timezone(self, monkeypatch):
        """Future-date checks use the configured zone's today."""
        monkeypatch.setenv("BUDGETEER_TIMEZONE", "Asia/Tokyo")
        get_settings.cache_clear()
        try:
            validator = ExpenseValidator()
        finally:
            get_settings.cache_clear()

        assert str(validator._calendar.tz) == "Asia/Tokyo"
