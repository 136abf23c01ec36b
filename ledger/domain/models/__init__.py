"""Domain models package."""

from .accounts import Account, AccountBalanceRow
from .charts import (
    CategoryExpensesSummary,
    ChartData,
    ChartSeries,
    CumulativeAmountRow,
    ExpenseRange,
)
from .entries import (
    Category,
    CategoryKey,
    DateRange,
    DeleteResult,
    Entry,
    EntryType,
)

__all__ = [
    "Account",
    "AccountBalanceRow",
    "CategoryExpensesSummary",
    "ChartData",
    "ChartSeries",
    "CumulativeAmountRow",
    "ExpenseRange",
    "Category",
    "CategoryKey",
    "DateRange",
    "DeleteResult",
    "Entry",
    "EntryType",
]
