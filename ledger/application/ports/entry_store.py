"""Port for persisting and reading ledger entries."""

from collections.abc import Sequence
from typing import Protocol

from ledger.domain.models import DateRange, DeleteResult, Entry


class EntryStorePort(Protocol):
    """Port exposing CRUD and bulk import of ledger entries."""

    def list_entries(
        self,
        account_id: int,
        date_range: DateRange | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Entry]:
        """Return entries touching the account, newest first."""

    def count_entries(self, account_id: int) -> int:
        """Return how many entries touch the account."""

    def find_entry(self, entry_id: int) -> Entry:
        """Return one entry with account and category names."""

    def save_entry(self, entry: Entry) -> Entry:
        """Persist one entry and return it with its identity."""

    def save_entries(self, entries: Sequence[Entry]) -> list[Entry]:
        """Persist a batch atomically and return the stored entries."""

    def update_entry(self, entry: Entry) -> None:
        """Update the mutable fields of an existing entry."""

    def delete_entries(self, ids: Sequence[int]) -> DeleteResult:
        """Delete entries by identity and report how many were removed."""


__all__ = ["EntryStorePort"]
