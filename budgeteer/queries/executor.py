"""
Expense List Query Engine

Executes the expense list's month / search / category filters against an
in-memory snapshot, and groups the result into day sections.

DESIGN DECISION: Filtering is DETERMINISTIC and local. The snapshot comes
from the remote store once; every keystroke in the search box re-runs
this engine over it instead of going back to the store.
"""

from datetime import datetime
from typing import Iterable, Optional

from budgeteer.calendar import LocalCalendar
from budgeteer.models.expense import Expense, ExpenseQuery


class ExpenseQueryExecutor:
    """
    Filters expenses for the expense list screen.

    GUARANTEES:
    - Only returns expenses from the supplied snapshot
    - Keeps snapshot order (callers sort or group afterwards)
    """

    def __init__(self, calendar: Optional[LocalCalendar] = None):
        self._calendar = calendar or LocalCalendar.from_settings()

    def filter(self, expenses: Iterable[Expense], query: ExpenseQuery) -> list[Expense]:
        """Expenses in the query month matching the search text and category."""
        month = self._calendar.month_key(query.reference_date)
        needle = query.search_text.casefold()

        results = []
        for expense in expenses:
            if self._calendar.month_key(expense.expense_date) != month:
                continue
            if needle and not self._matches(expense, needle):
                continue
            if query.category is not None and expense.category != query.category:
                continue
            results.append(expense)
        return results

    def group_by_day(self, expenses: Iterable[Expense]) -> list[tuple[datetime, list[Expense]]]:
        """
        Day sections for the list view.

        Sections are newest day first; expenses inside a section are
        newest first.
        """
        sections: dict[datetime, list[Expense]] = {}
        for expense in expenses:
            day = self._calendar.start_of_day(expense.expense_date)
            sections.setdefault(day, []).append(expense)

        return [
            (day, sorted(items, key=lambda e: self._calendar.localize(e.expense_date), reverse=True))
            for day, items in sorted(sections.items(), key=lambda item: item[0], reverse=True)
        ]

    @staticmethod
    def _matches(expense: Expense, needle: str) -> bool:
        haystack = [
            expense.name,
            expense.category.label,
            expense.display_category,
            expense.description or "",
            expense.location or "",
        ]
        return any(needle in field.casefold() for field in haystack)
