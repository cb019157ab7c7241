"""
Abstract Storage Interface

DESIGN DECISION: The remote backend is reached only through these
interfaces. This allows us to:
1. Keep the engine independent of any one backend SDK
2. Use in-memory storage for testing
3. Hand the aggregator plain snapshots instead of live, observed state

The interface is intentionally small: the operations the expense flows
need, nothing more.
"""

from abc import ABC, abstractmethod
from typing import Optional

from budgeteer.models.expense import Expense
from budgeteer.models.user import UserProfile


class ExpenseStoreInterface(ABC):
    """
    Abstract interface for the remote expense store.

    Readers receive new lists (snapshots); mutating a returned list never
    affects the store.
    """

    @abstractmethod
    async def list_expenses(self, owner_id: str) -> list[Expense]:
        """
        All expenses owned by a user.

        Raises:
            StoreConnectionError: If the backend cannot be reached
        """
        pass

    @abstractmethod
    async def get_expense(self, expense_id: str) -> Optional[Expense]:
        """The expense if found, None otherwise."""
        pass

    @abstractmethod
    async def save_expense(self, expense: Expense) -> bool:
        """
        Save a new expense.

        Raises:
            DuplicateError: If an expense with this id exists
            StorageError: If save fails
        """
        pass

    @abstractmethod
    async def update_expense(self, expense: Expense) -> bool:
        """
        Replace an existing expense (matched by id).

        Raises:
            NotFoundError: If the expense doesn't exist
        """
        pass

    @abstractmethod
    async def delete_expense(self, expense_id: str) -> bool:
        """Delete an expense; True if it existed."""
        pass


class UserStoreInterface(ABC):
    """Abstract interface for user profiles."""

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[UserProfile]:
        pass

    @abstractmethod
    async def save_user(self, user: UserProfile) -> bool:
        """Create or replace a profile."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass


class StoreConnectionError(StorageError):
    """Could not reach the storage backend."""
    pass
