"""Domain models and types for runway.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Timeline, aggregation and chart shaping separated from infrastructure
"""

from runway.domain.models import Amount, ExpenseId, Month

__all__ = ["Amount", "ExpenseId", "Month"]
