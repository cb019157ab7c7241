"""Services package."""

from budgeteer.services.storage import (
    DuplicateError,
    ExpenseStoreInterface,
    InMemoryExpenseStore,
    InMemoryUserStore,
    NotFoundError,
    StorageError,
    StoreConnectionError,
    UserStoreInterface,
)

__all__ = [
    "DuplicateError",
    "ExpenseStoreInterface",
    "InMemoryExpenseStore",
    "InMemoryUserStore",
    "NotFoundError",
    "StorageError",
    "StoreConnectionError",
    "UserStoreInterface",
]
