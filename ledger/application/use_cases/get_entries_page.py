"""Use case to read one page of an account's entries."""

from dataclasses import dataclass
import math

from ledger.application.ports.account_store import AccountStorePort
from ledger.application.ports.entry_store import EntryStorePort
from ledger.domain.models import Entry
from ledger.infrastructure.logging.logger import get_app_logger
from ledger.infrastructure.settings import DEFAULT_PAGE_LENGTH


@dataclass(frozen=True)
class EntriesPage:
    """Page of entries plus paging metadata.

    Attributes:
        page: Page actually returned, after clamping.
        max_page: Number of pages available for the account.
        entries: Entries of the page, newest first.
    """

    page: int
    max_page: int
    entries: list[Entry]


class GetEntriesPageUseCase:
    """Read entries touching an account one page at a time."""

    def __init__(
        self,
        account_store: AccountStorePort,
        entry_store: EntryStorePort,
        page_length: int = DEFAULT_PAGE_LENGTH,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            account_store: Store used to check that the account exists.
            entry_store: Store the entries are read from.
            page_length: Number of entries per page.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        if page_length <= 0:
            raise ValueError(f"page_length must be positive: {page_length}")
        self._account_store = account_store
        self._entry_store = entry_store
        self._page_length = page_length
        self._logger = logger or get_app_logger()

    def execute(self, account_id: int, page: int = 1) -> EntriesPage:
        """Return the requested page, clamped to the available range.

        Args:
            account_id: Account whose entries are listed.
            page: 1-based page number; values below 1 read the first page
                and values past the end read the last one.

        Returns:
            EntriesPage: Entries of the page with paging metadata.

        Raises:
            NotFoundError: If the account does not exist.
        """
        self._account_store.find_by_id(account_id)
        count = self._entry_store.count_entries(account_id)
        max_page = math.ceil(count / self._page_length)
        current = max(page, 1)
        if max_page > 0:
            current = min(current, max_page)
        entries = self._entry_store.list_entries(
            account_id,
            limit=self._page_length,
            offset=(current - 1) * self._page_length,
        )
        self._logger.info(
            f"Read page {current}/{max_page} of account {account_id} "
            f"({len(entries)} entries)"
        )
        return EntriesPage(page=current, max_page=max_page, entries=entries)


__all__ = ["GetEntriesPageUseCase", "EntriesPage"]
