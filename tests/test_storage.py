"""Tests for the in-memory store implementations."""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from budgeteer.models.user import UserProfile
from budgeteer.services.storage import (
    DuplicateError,
    InMemoryExpenseStore,
    InMemoryUserStore,
    NotFoundError,
)


class TestInMemoryExpenseStore:

    def test_save_and_list(self, make_expense):
        """Listing is scoped to the owner."""
        store = InMemoryExpenseStore()
        mine = make_expense(5, datetime(2024, 1, 1))
        theirs = make_expense(7, datetime(2024, 1, 1), owner_id="user-2")

        asyncio.run(store.save_expense(mine))
        asyncio.run(store.save_expense(theirs))

        assert asyncio.run(store.list_expenses("user-1")) == [mine]
        assert asyncio.run(store.list_expenses("user-2")) == [theirs]
        assert asyncio.run(store.list_expenses("nobody")) == []

    def test_duplicate_save_rejected(self, make_expense):
        """Saving an existing id fails."""
        store = InMemoryExpenseStore()
        expense = make_expense(5, datetime(2024, 1, 1))
        asyncio.run(store.save_expense(expense))
        with pytest.raises(DuplicateError):
            asyncio.run(store.save_expense(expense))

    def test_update(self, make_expense):
        """Update replaces the stored record."""
        store = InMemoryExpenseStore()
        expense = make_expense(5, datetime(2024, 1, 1))
        asyncio.run(store.save_expense(expense))

        asyncio.run(store.update_expense(expense.edited(amount=Decimal("9"))))
        assert asyncio.run(store.get_expense(expense.id)).amount == Decimal("9")

    def test_update_missing(self, make_expense):
        """Updating an unknown id fails."""
        with pytest.raises(NotFoundError):
            asyncio.run(InMemoryExpenseStore().update_expense(make_expense(1, datetime(2024, 1, 1))))

    def test_delete(self, make_expense):
        """Delete reports whether the record existed."""
        store = InMemoryExpenseStore()
        expense = make_expense(5, datetime(2024, 1, 1))
        asyncio.run(store.save_expense(expense))

        assert asyncio.run(store.delete_expense(expense.id)) is True
        assert asyncio.run(store.delete_expense(expense.id)) is False
        assert asyncio.run(store.get_expense(expense.id)) is None

    def test_malformed_documents_skipped(self):
        """Undecodable documents are skipped on list."""
        store = InMemoryExpenseStore([
            {
                "id": "ok",
                "userId": "user-1",
                "name": "Bus",
                "amount": 2.5,
                "category": "Transportation",
                "createdAt": datetime(2024, 1, 1, tzinfo=timezone.utc),
            },
            {"id": "broken", "userId": "user-1", "name": "??"},
        ])
        expenses = asyncio.run(store.list_expenses("user-1"))
        assert [e.id for e in expenses] == ["ok"]

    def test_list_returns_snapshot(self, make_expense):
        """Returned lists are copies."""
        store = InMemoryExpenseStore()
        asyncio.run(store.save_expense(make_expense(5, datetime(2024, 1, 1))))

        snapshot = asyncio.run(store.list_expenses("user-1"))
        snapshot.clear()
        assert len(asyncio.run(store.list_expenses("user-1"))) == 1


class TestInMemoryUserStore:

    def test_save_and_get(self):
        """Profiles round-trip through the store."""
        store = InMemoryUserStore()
        user = UserProfile(id="user-1", email="a@b.c", username="ann", monthly_budget=Decimal("500"))
        asyncio.run(store.save_user(user))
        assert asyncio.run(store.get_user("user-1")) == user
        assert asyncio.run(store.get_user("user-2")) is None
