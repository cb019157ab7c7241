"""
Core Data Models for Budgeteer

These models define the strict schemas for expense data flowing through
the system. They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Map cleanly onto the remote store's document shape
4. Stay immutable once built (edits produce a new record)

DESIGN DECISION: Amounts are Decimal, never float. Category sums and the
month total are compared for exact equality, which float addition order
would break.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    The value is the label shown to the user and stored in the remote
    store's documents.
    """
    FOOD = "Food & Dining"
    TRANSPORTATION = "Transportation"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS = "Bills & Utilities"
    HEALTHCARE = "Healthcare"
    TRAVEL = "Travel"
    OTHER = "Other"

    @property
    def label(self) -> str:
        return self.value


# =============================================================================
# PRESENTATION METADATA - kept out of the aggregation path
# =============================================================================

class CategoryStyle(BaseModel):
    """Color and icon for a category. Cosmetic only."""
    model_config = ConfigDict(frozen=True)

    color: str
    icon: str


CATEGORY_STYLES: dict[ExpenseCategory, CategoryStyle] = {
    ExpenseCategory.FOOD: CategoryStyle(color="orange", icon="fork.knife.circle.fill"),
    ExpenseCategory.TRANSPORTATION: CategoryStyle(color="blue", icon="car.circle.fill"),
    ExpenseCategory.SHOPPING: CategoryStyle(color="pink", icon="bag.circle.fill"),
    ExpenseCategory.ENTERTAINMENT: CategoryStyle(color="purple", icon="tv.circle.fill"),
    ExpenseCategory.BILLS: CategoryStyle(color="yellow", icon="bolt.circle.fill"),
    ExpenseCategory.HEALTHCARE: CategoryStyle(color="red", icon="cross.case.circle.fill"),
    ExpenseCategory.TRAVEL: CategoryStyle(color="green", icon="airplane.circle.fill"),
    ExpenseCategory.OTHER: CategoryStyle(color="gray", icon="ellipsis.circle.fill"),
}


def style_for(category: ExpenseCategory) -> CategoryStyle:
    return CATEGORY_STYLES[category]


def style_for_label(label: str) -> CategoryStyle:
    """
    Style for a display-category label.

    Custom "Other" names are not enum labels, so they get the OTHER style.
    """
    try:
        return CATEGORY_STYLES[ExpenseCategory(label)]
    except ValueError:
        return CATEGORY_STYLES[ExpenseCategory.OTHER]


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    A single recorded spending event.

    CRITICAL: `expense_date` drives every month/day bucket.
    `created_at` is record metadata and is never used for bucketing.

    Expenses are frozen. An edit replaces the whole record through
    `edited()`, which keeps id, owner and creation time.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    # Identity
    id: str = Field(
        default_factory=lambda: str(uuid4()),
        min_length=1,
        description="Unique expense ID"
    )
    owner_id: str = Field(
        ...,
        min_length=1,
        description="ID of the user this expense belongs to"
    )

    # Core data
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Name/title of the expense"
    )
    amount: Decimal = Field(
        ...,
        description="Monetary amount (no currency handling)"
    )
    category: ExpenseCategory
    custom_category_name: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Custom category name, only meaningful for OTHER"
    )

    # Timestamps
    expense_date: datetime = Field(
        ...,
        description="When the expense occurred"
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        description="When the record was created"
    )

    # Optional details, not used in aggregation
    description: Optional[str] = Field(default=None, max_length=1000)
    photo_url: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=300)

    @property
    def display_category(self) -> str:
        """Custom name for OTHER when one is set, otherwise the enum label."""
        if self.category == ExpenseCategory.OTHER and self.custom_category_name:
            return self.custom_category_name
        return self.category.label

    def edited(self, **changes: Any) -> "Expense":
        """Return a validated copy with `changes` applied."""
        locked = {"id", "owner_id", "created_at"} & changes.keys()
        if locked:
            raise ValueError(f"Cannot change immutable fields: {sorted(locked)}")
        return type(self).model_validate({**self.model_dump(), **changes})

    # -------------------------------------------------------------------------
    # Remote store document codec
    # -------------------------------------------------------------------------

    def to_document(self) -> dict[str, Any]:
        """Convert to the remote store's document shape."""
        doc: dict[str, Any] = {
            "id": self.id,
            "userId": self.owner_id,
            "name": self.name,
            "amount": self.amount,
            "category": self.category.value,
            "createdAt": self.created_at,
            "expenseDate": self.expense_date,
        }
        if self.description is not None:
            doc["description"] = self.description
        if self.photo_url is not None:
            doc["photoURL"] = self.photo_url
        if self.location is not None:
            doc["location"] = self.location
        if self.custom_category_name is not None:
            doc["customCategoryName"] = self.custom_category_name
        return doc

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> Optional["Expense"]:
        """
        Build an expense from a store document.

        Returns None for documents missing required keys or holding
        invalid values. Legacy documents without `expenseDate` use
        `createdAt` as the expense date.
        """
        try:
            amount = doc["amount"]
            if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal, str)):
                return None
            created_at = doc["createdAt"]
            return cls(
                id=doc["id"],
                owner_id=doc["userId"],
                name=doc["name"],
                amount=amount,
                category=ExpenseCategory(doc["category"]),
                custom_category_name=doc.get("customCategoryName"),
                expense_date=doc.get("expenseDate") or created_at,
                created_at=created_at,
                description=doc.get("description"),
                photo_url=doc.get("photoURL"),
                location=doc.get("location"),
            )
        except (KeyError, TypeError, ValueError, ValidationError):
            return None


# =============================================================================
# ADD / EDIT FORM PAYLOAD
# =============================================================================

class ExpenseDraft(BaseModel):
    """
    Unvalidated expense as entered in the add/edit form.

    CRITICAL: This is PROPOSED data. It goes through ExpenseValidator
    before an Expense is built from it.
    """

    name: str = ""
    amount: Optional[Decimal] = None
    category: ExpenseCategory = ExpenseCategory.FOOD
    custom_category_name: Optional[str] = None
    expense_date: datetime = Field(default_factory=_utcnow)
    description: Optional[str] = None
    photo_url: Optional[str] = None
    location: Optional[str] = None

    @staticmethod
    def _clean(value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    def to_expense_fields(self) -> dict[str, Any]:
        """
        Field values for an Expense built from this draft.

        Text is trimmed, empty optionals become None, and the custom
        category name is dropped unless the category is OTHER.
        """
        custom = self._clean(self.custom_category_name)
        return {
            "name": self.name.strip(),
            "amount": self.amount,
            "category": self.category,
            "custom_category_name": custom if self.category == ExpenseCategory.OTHER else None,
            "expense_date": self.expense_date,
            "description": self._clean(self.description),
            "photo_url": self._clean(self.photo_url),
            "location": self._clean(self.location),
        }

    def to_expense(self, owner_id: str) -> Expense:
        return Expense(owner_id=owner_id, **self.to_expense_fields())


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'future_date')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = None


class ValidationResult(BaseModel):
    """
    Result of the two-stage validation.

    Stage 1: Schema validation (required fields, value ranges)
    Stage 2: Semantic validation (suspicious but possible values)
    """

    validated_at: datetime = Field(default_factory=_utcnow)

    schema_valid: bool
    semantic_valid: bool
    is_valid: bool

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]


# =============================================================================
# QUERY MODELS (expense list filtering)
# =============================================================================

class ExpenseQuery(BaseModel):
    """
    Filters applied to the expense list for one month.

    An empty search text and no category means "the whole month".
    """

    reference_date: datetime
    search_text: str = ""
    category: Optional[ExpenseCategory] = None

    @field_validator('search_text')
    @classmethod
    def normalize_search_text(cls, v: str) -> str:
        return v.strip()
