"""Ports for the read-only projections maintained by the store.

Both projections are derived from the account and entry tables by the
storage layer. Implementations must reflect the current entry state at
read time; this core never writes to them.
"""

from typing import Protocol

from ledger.domain.models import AccountBalanceRow, CumulativeAmountRow


class AccountBalanceProjectionPort(Protocol):
    """Projection exposing (account, name, initial amount, total)."""

    def fetch_account_balances(self) -> list[AccountBalanceRow]:
        """Return balances of every account ordered by name."""

    def fetch_account_balance(self, account_id: int) -> AccountBalanceRow | None:
        """Return the balance row of one account, if it exists."""


class CumulativeAmountProjectionPort(Protocol):
    """Projection exposing month-start running balances per account."""

    def fetch_cumulative_amounts(self, year: int) -> list[CumulativeAmountRow]:
        """Return running balances for months of the given year."""


__all__ = [
    "AccountBalanceProjectionPort",
    "CumulativeAmountProjectionPort",
]
