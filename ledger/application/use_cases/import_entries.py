"""Use case to import entries from CSV-like rows."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ledger.application.ports.entry_store import EntryStorePort
from ledger.domain.exceptions import ValidationError
from ledger.domain.models import Entry, EntryType
from ledger.domain.services import (
    normalize_category_name,
    normalize_description,
    parse_amount,
    parse_entry_date,
)
from ledger.infrastructure.logging.logger import get_app_logger


DATE_COLUMN = "Date"
AMOUNT_COLUMN = "Amount"
CATEGORY_COLUMN = "Category"
DESCRIPTION_COLUMN = "Description"
MANDATORY_COLUMNS = (DATE_COLUMN, AMOUNT_COLUMN)


@dataclass(frozen=True)
class ImportResult:
    """Summary of an import.

    Attributes:
        imported_count: Number of entries persisted.
        category_count: Number of distinct categories referenced.
        entries: Persisted entries in input order.
    """

    imported_count: int
    category_count: int
    entries: list[Entry]


class ImportEntriesUseCase:
    """Turn signed CSV rows into Income/Expense entries of one account.

    The whole batch is validated before anything is written; the first
    invalid row aborts the import.
    """

    def __init__(self, entry_store: EntryStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            entry_store: Store the entries are saved to in one transaction.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._entry_store = entry_store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        account_id: int,
        rows: Iterable[Mapping[str, str | None]],
    ) -> ImportResult:
        """Validate and persist the rows.

        Args:
            account_id: Account owning every imported entry.
            rows: Mappings keyed by CSV header. ``Date`` and ``Amount`` are
                mandatory; ``Category`` and ``Description`` are optional.

        Returns:
            ImportResult: Counts and the persisted entries.

        Raises:
            ValidationError: If a mandatory column is missing or any row is
                invalid. Nothing is persisted in that case.
        """
        entries = []
        for row_number, row in enumerate(rows, start=1):
            self._check_columns(row, row_number)
            try:
                entries.append(self._row_to_entry(account_id, row))
            except ValidationError as exc:
                raise ValidationError(
                    f"Row {row_number}: {exc.message}",
                    details={"row": row_number, **exc.details},
                ) from exc
        if not entries:
            self._logger.warning(f"Nothing to import for account {account_id}")
            return ImportResult(imported_count=0, category_count=0, entries=[])

        saved = self._entry_store.save_entries(entries)
        category_count = len(
            {entry.category_key for entry in saved if entry.category_key}
        )
        self._logger.info(
            f"Imported {len(saved)} entries into account {account_id} "
            f"({category_count} categories)"
        )
        return ImportResult(
            imported_count=len(saved),
            category_count=category_count,
            entries=saved,
        )

    @staticmethod
    def _check_columns(row: Mapping[str, str | None], row_number: int) -> None:
        missing = [column for column in MANDATORY_COLUMNS if column not in row]
        if missing:
            raise ValidationError(
                "'Date' and 'Amount' columns are mandatory",
                details={"row": row_number, "missing": missing},
            )

    @staticmethod
    def _row_to_entry(account_id: int, row: Mapping[str, str | None]) -> Entry:
        amount = parse_amount(row[AMOUNT_COLUMN])
        entry_type = EntryType.INCOME
        if amount < 0:
            entry_type = EntryType.EXPENSE
            amount = abs(amount)
        return Entry(
            account_id=account_id,
            type=entry_type,
            amount=amount,
            date=parse_entry_date(row[DATE_COLUMN]),
            category=normalize_category_name(row.get(CATEGORY_COLUMN)),
            description=normalize_description(row.get(DESCRIPTION_COLUMN)),
        )


__all__ = [
    "ImportEntriesUseCase",
    "ImportResult",
    "DATE_COLUMN",
    "AMOUNT_COLUMN",
    "CATEGORY_COLUMN",
    "DESCRIPTION_COLUMN",
]
