"""Use case to assemble the yearly balance chart."""

from datetime import date

from ledger.application.ports.account_store import AccountStorePort
from ledger.application.ports.aggregation_engine import AggregationEnginePort
from ledger.domain.models import ChartData
from ledger.domain.services import round_chart_limits
from ledger.infrastructure.logging.logger import get_app_logger


class GetChartDataUseCase:
    """Combine accounts, month-start balances and axis limits for a year."""

    def __init__(
        self,
        account_store: AccountStorePort,
        aggregation_engine: AggregationEnginePort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            account_store: Store listing accounts with totals.
            aggregation_engine: Engine computing series and ranges.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._account_store = account_store
        self._aggregation_engine = aggregation_engine
        self._logger = logger or get_app_logger()

    def execute(self, year: int | None = None) -> ChartData:
        """Return chart data for the year.

        Args:
            year: Calendar year; defaults to the current year.

        Returns:
            ChartData: Accounts, series and rounded limits.
        """
        resolved_year = year if year is not None else date.today().year
        accounts = self._account_store.list_accounts()
        series = self._aggregation_engine.month_start_balances_for_year(
            resolved_year
        )
        expense_range = self._aggregation_engine.expense_range_for_year(
            resolved_year
        )
        limits = round_chart_limits(expense_range)
        self._logger.info(
            f"Chart data for {resolved_year}: {len(accounts)} accounts, "
            f"{len(series)} points, limits {limits.min_amount}..{limits.max_amount}"
        )
        return ChartData(
            year=resolved_year,
            accounts=accounts,
            series=series,
            limits=limits,
        )


__all__ = ["GetChartDataUseCase"]
