"""Domain models for time-windowed aggregations."""

from dataclasses import dataclass
from decimal import Decimal

from .accounts import Account
from .entries import Category


@dataclass(frozen=True)
class CumulativeAmountRow:
    """Raw row of the cumulative amount projection.

    Attributes:
        account_id: Account the running balance belongs to.
        month: Month label formatted as YYYY-MM.
        amount: Balance at the first day of the month.
    """

    account_id: int
    month: str
    amount: Decimal


@dataclass(frozen=True)
class ChartSeries:
    """Month-start balance of one account, used for charting."""

    account_id: int
    month: int
    amount: Decimal


@dataclass(frozen=True)
class ExpenseRange:
    """Lowest and highest cumulative amount across a scope."""

    min_amount: Decimal
    max_amount: Decimal


@dataclass(frozen=True)
class CategoryExpensesSummary:
    """Sum of entry amounts of one category for one month."""

    category: Category
    month: int
    expense: Decimal


@dataclass(frozen=True)
class ChartData:
    """Everything a yearly balance chart needs."""

    year: int
    accounts: list[Account]
    series: list[ChartSeries]
    limits: ExpenseRange


__all__ = [
    "CumulativeAmountRow",
    "ChartSeries",
    "ExpenseRange",
    "CategoryExpensesSummary",
    "ChartData",
]
