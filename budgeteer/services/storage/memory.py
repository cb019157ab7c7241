"""
In-Memory Storage

Document-backed implementations of the store interfaces. Records are
kept in the same camelCase document shape the remote backend uses and go
through the model codecs on every read and write, so malformed documents
are handled the same way they would be remotely.
"""

from typing import Any, Optional

import structlog

from budgeteer.models.expense import Expense
from budgeteer.models.user import UserProfile
from budgeteer.services.storage.interface import (
    DuplicateError,
    ExpenseStoreInterface,
    NotFoundError,
    UserStoreInterface,
)


logger = structlog.get_logger(__name__)


class InMemoryExpenseStore(ExpenseStoreInterface):
    """Expense documents in a dict keyed by expense id."""

    def __init__(self, documents: Optional[list[dict[str, Any]]] = None):
        self._documents: dict[str, dict[str, Any]] = {}
        for doc in documents or []:
            self._documents[str(doc.get("id"))] = dict(doc)

    async def list_expenses(self, owner_id: str) -> list[Expense]:
        expenses = []
        for doc in self._documents.values():
            if doc.get("userId") != owner_id:
                continue
            expense = Expense.from_document(doc)
            if expense is None:
                logger.warning("skipping_malformed_expense", document_id=doc.get("id"))
                continue
            expenses.append(expense)
        return expenses

    async def get_expense(self, expense_id: str) -> Optional[Expense]:
        doc = self._documents.get(expense_id)
        return Expense.from_document(doc) if doc is not None else None

    async def save_expense(self, expense: Expense) -> bool:
        if expense.id in self._documents:
            raise DuplicateError(f"Expense {expense.id} already exists")
        self._documents[expense.id] = expense.to_document()
        return True

    async def update_expense(self, expense: Expense) -> bool:
        if expense.id not in self._documents:
            raise NotFoundError(f"Expense {expense.id} not found")
        self._documents[expense.id] = expense.to_document()
        return True

    async def delete_expense(self, expense_id: str) -> bool:
        return self._documents.pop(expense_id, None) is not None


class InMemoryUserStore(UserStoreInterface):
    """User profile documents keyed by user id."""

    def __init__(self, documents: Optional[list[dict[str, Any]]] = None):
        self._documents: dict[str, dict[str, Any]] = {
            str(doc.get("id")): dict(doc) for doc in documents or []
        }

    async def get_user(self, user_id: str) -> Optional[UserProfile]:
        doc = self._documents.get(user_id)
        return UserProfile.from_document(doc) if doc is not None else None

    async def save_user(self, user: UserProfile) -> bool:
        self._documents[user.id] = user.to_document()
        return True
