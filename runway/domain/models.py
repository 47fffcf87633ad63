"""Domain type definitions for runway.

These NewTypes provide semantic clarity and help with type checking:
- Amount: Monthly amount in currency units (may be fractional)
- Month: Month in YYYY-MM format
- ExpenseId: Identifier assigned to an expense by the store
"""

from typing import NewType

# Amounts are real numbers; the original client worked in whole currency units
Amount = NewType("Amount", float)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

# Expense identifiers are assigned by the store and never change
ExpenseId = NewType("ExpenseId", int)
