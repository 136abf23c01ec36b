"""Use case to export an account's entries with signed amounts."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ledger.application.ports.account_store import AccountStorePort
from ledger.application.ports.entry_store import EntryStorePort
from ledger.domain.services import signed_amount
from ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ExportRow:
    """One exported line, signed from the exporting account's view."""

    date: date
    amount: Decimal
    category: str | None
    description: str | None


class ExportEntriesUseCase:
    """Export every entry touching an account, newest first."""

    def __init__(
        self,
        account_store: AccountStorePort,
        entry_store: EntryStorePort,
        logger=None,
    ) -> None:
        self._account_store = account_store
        self._entry_store = entry_store
        self._logger = logger or get_app_logger()

    def execute(self, account_id: int) -> list[ExportRow]:
        """Return export rows for the account.

        Raises:
            NotFoundError: If the account does not exist.
        """
        self._account_store.find_by_id(account_id)
        entries = self._entry_store.list_entries(account_id)
        rows = [
            ExportRow(
                date=entry.date,
                amount=signed_amount(entry, account_id),
                category=entry.category,
                description=entry.description,
            )
            for entry in entries
        ]
        self._logger.info(f"Exported {len(rows)} entries of account {account_id}")
        return rows


__all__ = ["ExportEntriesUseCase", "ExportRow"]
