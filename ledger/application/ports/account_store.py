"""Port for account CRUD."""

from collections.abc import Sequence
from typing import Protocol

from ledger.domain.models import Account, DeleteResult


class AccountStorePort(Protocol):
    """Port exposing accounts together with their derived totals."""

    def list_accounts(self) -> list[Account]:
        """Return every account ordered by name."""

    def find_by_id(self, account_id: int) -> Account:
        """Return one account or raise NotFoundError."""

    def save(self, account: Account) -> Account:
        """Insert an account and return it with its identity."""

    def update(self, account: Account) -> Account:
        """Update name and initial amount of an existing account."""

    def delete_many(self, ids: Sequence[int]) -> DeleteResult:
        """Delete accounts by identity and report how many were removed."""


__all__ = ["AccountStorePort"]
