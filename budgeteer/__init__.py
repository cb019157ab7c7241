"""
Budgeteer - Source Package

The spending engine behind the Budgeteer expense tracker: expense models,
the month-scoped spending aggregator, and the flows that bind them to a
remote expense store.

DESIGN PRINCIPLES:
1. Aggregation is a pure function of (expenses, reference date)
2. One explicit timezone per session
3. No hidden global state - collaborators are passed in
4. Invalid input is reported, never silently corrected
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Budgeteer Team"
