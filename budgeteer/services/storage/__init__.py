"""
Storage Services Package

Abstract interfaces for the remote backend plus in-memory implementations.
"""

from budgeteer.services.storage.interface import (
    DuplicateError,
    ExpenseStoreInterface,
    NotFoundError,
    StorageError,
    StoreConnectionError,
    UserStoreInterface,
)
from budgeteer.services.storage.memory import (
    InMemoryExpenseStore,
    InMemoryUserStore,
)

__all__ = [
    # Interfaces
    "ExpenseStoreInterface",
    "UserStoreInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    "StoreConnectionError",
    # In-memory implementation
    "InMemoryExpenseStore",
    "InMemoryUserStore",
]
