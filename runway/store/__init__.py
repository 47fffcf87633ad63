"""Store layer - holds expenses and income for the running server.

This module re-exports the public store types for easy importing.
"""

from runway.store.memory import DEFAULT_INCOME, ExpenseStore, Snapshot

__all__ = [
    "DEFAULT_INCOME",
    "ExpenseStore",
    "Snapshot",
]
