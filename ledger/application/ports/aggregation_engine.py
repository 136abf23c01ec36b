"""Port for time-windowed aggregations."""

from typing import Protocol

from ledger.domain.models import (
    CategoryExpensesSummary,
    ChartSeries,
    EntryType,
    ExpenseRange,
)


class AggregationEnginePort(Protocol):
    """Port computing chart series, expense ranges and category totals."""

    def expense_range_for_year(self, year: int) -> ExpenseRange:
        """Return min and max cumulative amounts within the year."""

    def month_start_balances_for_year(self, year: int) -> list[ChartSeries]:
        """Return one month-start balance per account and month."""

    def category_expense_totals(
        self,
        account_id: int,
        year: int,
        month: int,
        entry_type: EntryType,
    ) -> list[CategoryExpensesSummary]:
        """Return per-category sums for one account and month."""


__all__ = ["AggregationEnginePort"]
