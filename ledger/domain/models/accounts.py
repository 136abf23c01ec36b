"""Domain models for ledger accounts."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Account:
    """Financial account.

    Attributes:
        name: Display name.
        initial_amount: Signed opening balance.
        id: Store identity, None until persisted.
        total: Current balance read from the balance projection; None for
            accounts that have not been read back from the store.
    """

    name: str
    initial_amount: Decimal
    id: int | None = None
    total: Decimal | None = None


@dataclass(frozen=True)
class AccountBalanceRow:
    """Raw row of the account balance projection."""

    account_id: int
    name: str
    initial_amount: Decimal
    total: Decimal


__all__ = ["Account", "AccountBalanceRow"]
