"""
User Profile Model

Only the parts of the account the engine reads: identity and the
monthly budget. Authentication lives entirely in the remote backend.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


DEFAULT_MONTHLY_BUDGET = Decimal("1000")


class UserProfile(BaseModel):
    """A user account with its monthly budget limit."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(..., min_length=1)
    email: str
    username: str
    monthly_budget: Decimal = Field(
        default=DEFAULT_MONTHLY_BUDGET,
        description="Monthly budget limit"
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "username": self.username,
            "monthlyBudget": self.monthly_budget,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> Optional["UserProfile"]:
        """Build a profile from a store document, None if malformed."""
        try:
            return cls(
                id=doc["id"],
                email=doc["email"],
                username=doc["username"],
                monthly_budget=doc["monthlyBudget"],
                created_at=doc["createdAt"],
            )
        except (KeyError, TypeError, ValueError, ValidationError):
            return None
