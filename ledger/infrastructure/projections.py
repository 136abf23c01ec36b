"""Read-only projections backed by database views."""

from sqlalchemy import text

from ledger.application.ports.database import DatabaseEnginePort
from ledger.application.ports.projections import (
    AccountBalanceProjectionPort,
    CumulativeAmountProjectionPort,
)
from ledger.domain.models import AccountBalanceRow, CumulativeAmountRow
from ledger.infrastructure.db import translate_db_errors
from ledger.utils.decimal_utils import coerce_decimal, quantize_amount


SELECT_ACCOUNT_TOTALS_SQL = """
    SELECT id, name, initial_amount, total
    FROM account_total
"""

SELECT_CUMULATIVE_AMOUNTS_SQL = text(
    """
    SELECT account_id, month, amount
    FROM cumulative_amount
    WHERE month >= :first_month AND month <= :last_month
    ORDER BY account_id, month
    """
)


class AccountTotalViewProjection(AccountBalanceProjectionPort):
    """Account balances read from the ``account_total`` view.

    The view is evaluated by the database on each read, so totals always
    match the entries committed at that time.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the projection.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def fetch_account_balances(self) -> list[AccountBalanceRow]:
        query = text(SELECT_ACCOUNT_TOTALS_SQL + " ORDER BY name, id")
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Account balance read"):
            with engine.connect() as conn:
                rows = conn.execute(query).all()
        return [self._row_to_balance(row) for row in rows]

    def fetch_account_balance(self, account_id: int) -> AccountBalanceRow | None:
        query = text(SELECT_ACCOUNT_TOTALS_SQL + " WHERE id = :account_id")
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Account balance read"):
            with engine.connect() as conn:
                row = conn.execute(query, {"account_id": account_id}).first()
        if row is None:
            return None
        return self._row_to_balance(row)

    @staticmethod
    def _row_to_balance(row) -> AccountBalanceRow:
        return AccountBalanceRow(
            account_id=row.id,
            name=row.name,
            initial_amount=coerce_decimal(row.initial_amount),
            total=quantize_amount(row.total),
        )


class CumulativeAmountViewProjection(CumulativeAmountProjectionPort):
    """Month-start balances read from the ``cumulative_amount`` view."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the projection.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def fetch_cumulative_amounts(self, year: int) -> list[CumulativeAmountRow]:
        """Return running balances for the months of one year.

        Args:
            year: Calendar year; months outside it are excluded.

        Returns:
            list[CumulativeAmountRow]: Rows ordered by account then month.
        """
        params = {
            "first_month": f"{year:04d}-01",
            "last_month": f"{year:04d}-12",
        }
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Cumulative amount read"):
            with engine.connect() as conn:
                rows = conn.execute(SELECT_CUMULATIVE_AMOUNTS_SQL, params).all()
        return [
            CumulativeAmountRow(
                account_id=row.account_id,
                month=row.month,
                amount=quantize_amount(row.amount),
            )
            for row in rows
        ]


__all__ = [
    "AccountTotalViewProjection",
    "CumulativeAmountViewProjection",
    "SELECT_ACCOUNT_TOTALS_SQL",
    "SELECT_CUMULATIVE_AMOUNTS_SQL",
]
