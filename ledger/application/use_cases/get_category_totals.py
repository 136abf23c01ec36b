"""Use case to sum a month's entries per category."""

from ledger.application.ports.aggregation_engine import AggregationEnginePort
from ledger.domain.models import CategoryExpensesSummary, EntryType
from ledger.infrastructure.logging.logger import get_app_logger


class GetCategoryTotalsUseCase:
    """Return per-category totals of one account for one month."""

    def __init__(
        self,
        aggregation_engine: AggregationEnginePort,
        logger=None,
    ) -> None:
        self._aggregation_engine = aggregation_engine
        self._logger = logger or get_app_logger()

    def execute(
        self,
        account_id: int,
        year: int,
        month: int,
        entry_type: EntryType = EntryType.EXPENSE,
    ) -> list[CategoryExpensesSummary]:
        """Return category totals ordered by category name.

        Args:
            account_id: Owning account of the entries.
            year: Calendar year.
            month: Month number, 1 to 12.
            entry_type: Income or Expense.

        Returns:
            list[CategoryExpensesSummary]: One summary per category.
        """
        summaries = self._aggregation_engine.category_expense_totals(
            account_id,
            year,
            month,
            entry_type,
        )
        if not summaries:
            self._logger.warning(
                f"No categorized entries for account {account_id} in "
                f"{year:04d}-{month:02d}"
            )
        return summaries


__all__ = ["GetCategoryTotalsUseCase"]
