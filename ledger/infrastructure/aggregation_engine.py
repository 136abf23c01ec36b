"""SQLAlchemy-backed aggregations for charts and category totals."""

from sqlalchemy import text

from ledger.application.ports.aggregation_engine import AggregationEnginePort
from ledger.application.ports.database import DatabaseEnginePort
from ledger.application.ports.projections import CumulativeAmountProjectionPort
from ledger.domain.exceptions import ValidationError
from ledger.domain.models import (
    Category,
    CategoryExpensesSummary,
    ChartSeries,
    DateRange,
    EntryType,
    ExpenseRange,
)
from ledger.infrastructure.db import translate_db_errors
from ledger.infrastructure.logging.logger import get_app_logger
from ledger.utils.decimal_utils import quantize_amount


SELECT_CATEGORY_TOTALS_SQL = text(
    """
    SELECT c.id AS category_id,
           c.account_id AS account_id,
           c.name AS name,
           c.type AS type,
           SUM(e.amount) AS amount
    FROM entry e
    JOIN category c ON e.category = c.id
    WHERE e.account_id = :account_id
      AND e.type = :type
      AND e.date >= :start_date
      AND e.date <= :end_date
    GROUP BY c.id, c.account_id, c.name, c.type
    ORDER BY c.name
    """
)


class SqlAlchemyAggregationEngine(AggregationEnginePort):
    """Compute chart series, expense ranges and per-category totals.

    Chart figures come from the cumulative amount projection it is given;
    category totals are summed from the entry table.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        cumulative_projection: CumulativeAmountProjectionPort,
        logger=None,
    ) -> None:
        """Initialize the engine.

        Args:
            db_port: Port providing access to the ledger engine.
            cumulative_projection: Read-only month-start balances.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._cumulative_projection = cumulative_projection
        self._logger = logger or get_app_logger()

    def expense_range_for_year(self, year: int) -> ExpenseRange:
        """Return the lowest and highest month-start balance of the year.

        Args:
            year: Calendar year; balances of other years are ignored.

        Returns:
            ExpenseRange: Zero range when the year has no data.
        """
        rows = self._cumulative_projection.fetch_cumulative_amounts(year)
        amounts = [row.amount for row in rows]
        if not amounts:
            return ExpenseRange(
                min_amount=quantize_amount(0),
                max_amount=quantize_amount(0),
            )
        return ExpenseRange(min_amount=min(amounts), max_amount=max(amounts))

    def month_start_balances_for_year(self, year: int) -> list[ChartSeries]:
        """Return one point per account and month with data in the year."""
        rows = self._cumulative_projection.fetch_cumulative_amounts(year)
        return [
            ChartSeries(
                account_id=row.account_id,
                month=int(row.month[5:7]),
                amount=row.amount,
            )
            for row in rows
        ]

    def category_expense_totals(
        self,
        account_id: int,
        year: int,
        month: int,
        entry_type: EntryType,
    ) -> list[CategoryExpensesSummary]:
        """Sum entries of one type per category for a month of a year.

        Args:
            account_id: Owning account of the entries.
            year: Calendar year of the month.
            month: Month number, 1 to 12.
            entry_type: Income or Expense.

        Returns:
            list[CategoryExpensesSummary]: One summary per category, by name.

        Raises:
            ValidationError: If the month is out of range or the type does
                not carry categories.
        """
        resolved_type = self._category_type(entry_type)
        if not 1 <= month <= 12:
            raise ValidationError(
                f"Month must be between 1 and 12: {month}",
                details={"month": month},
            )
        date_range = DateRange.for_month(year, month)
        params = {
            "account_id": account_id,
            "type": resolved_type.value,
            "start_date": date_range.start_date.isoformat(),
            "end_date": date_range.end_date.isoformat(),
        }
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Category totals read"):
            with engine.connect() as conn:
                rows = conn.execute(SELECT_CATEGORY_TOTALS_SQL, params).all()
        summaries = [
            CategoryExpensesSummary(
                category=Category(
                    id=row.category_id,
                    account_id=row.account_id,
                    name=row.name,
                    type=EntryType.from_code(row.type),
                ),
                month=month,
                expense=quantize_amount(row.amount),
            )
            for row in rows
        ]
        self._logger.info(
            f"Computed {len(summaries)} {resolved_type.name.lower()} category "
            f"totals for account {account_id}, {year:04d}-{month:02d}"
        )
        return summaries

    @staticmethod
    def _category_type(entry_type) -> EntryType:
        try:
            resolved_type = EntryType.from_code(entry_type)
        except (TypeError, ValueError):
            raise ValidationError(
                f"Unknown entry type: {entry_type!r}",
                details={"type": entry_type},
            ) from None
        if not resolved_type.accepts_category:
            raise ValidationError(
                f"{resolved_type.name.title()} entries have no categories",
                details={"type": resolved_type.name},
            )
        return resolved_type


__all__ = ["SqlAlchemyAggregationEngine", "SELECT_CATEGORY_TOTALS_SQL"]
