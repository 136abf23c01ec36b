"""Domain models for ledger entries and categories."""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import NamedTuple


class EntryType(Enum):
    """Closed set of entry kinds, stored as integer codes."""

    INCOME = 1
    EXPENSE = 2
    TRANSFER = 3

    @classmethod
    def from_code(cls, code) -> "EntryType":
        """Return the variant for a stored integer code.

        Args:
            code: Raw value read from the store or a request.

        Returns:
            EntryType: Matching variant.

        Raises:
            ValueError: If the code is not a known entry type.
        """
        if isinstance(code, cls):
            return code
        if isinstance(code, bool):
            raise ValueError(f"Entry type code must be an integer: {code!r}")
        number = int(code)
        if not isinstance(code, str) and number != code:
            raise ValueError(f"Entry type code must be an integer: {code!r}")
        return cls(number)

    @property
    def accepts_category(self) -> bool:
        """Return True when entries of this type may carry a category."""
        if self is EntryType.INCOME or self is EntryType.EXPENSE:
            return True
        if self is EntryType.TRANSFER:
            return False
        raise ValueError(f"Unhandled entry type: {self!r}")


class CategoryKey(NamedTuple):
    """Canonical identity of a category: unique per account, name and type."""

    account_id: int
    name: str
    type: EntryType


@dataclass(frozen=True)
class Category:
    """Named classification of income or expense entries of one account."""

    account_id: int
    name: str
    type: EntryType
    id: int | None = None

    @property
    def key(self) -> CategoryKey:
        return CategoryKey(self.account_id, self.name, self.type)


@dataclass(frozen=True)
class Entry:
    """Ledger row representing an income, expense or transfer.

    Attributes:
        account_id: Owning account (the sender for transfers).
        type: Entry kind.
        amount: Non-negative magnitude; the sign is derived from type.
        date: Calendar date of the entry.
        affected_account_id: Receiving account for transfers.
        description: Optional free text.
        category: Optional category name (Income/Expense only).
        id: Store identity, None until persisted.
        account: Owning account name, filled on reads.
        affected_account: Receiving account name, filled on reads.
    """

    account_id: int
    type: EntryType
    amount: Decimal
    date: date
    affected_account_id: int | None = None
    description: str | None = None
    category: str | None = None
    id: int | None = None
    account: str | None = None
    affected_account: str | None = None

    @property
    def category_key(self) -> CategoryKey | None:
        """Return the category identity, or None when uncategorized."""
        if not self.category:
            return None
        return CategoryKey(self.account_id, self.category, self.type)


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range."""

    start_date: date
    end_date: date

    @classmethod
    def for_month(cls, year: int, month: int) -> "DateRange":
        start = date(year, month, 1)
        if month == 12:
            end = date(year, 12, 31)
        else:
            end = date(year, month + 1, 1) - timedelta(days=1)
        return cls(start_date=start, end_date=end)

    @classmethod
    def for_year(cls, year: int) -> "DateRange":
        return cls(start_date=date(year, 1, 1), end_date=date(year, 12, 31))


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a multi-row delete.

    Attributes:
        requested_count: Number of distinct identities asked for.
        deleted_count: Number of rows the store actually removed.
    """

    requested_count: int
    deleted_count: int

    @property
    def missing_count(self) -> int:
        """Return how many requested rows did not exist."""
        return self.requested_count - self.deleted_count

    @property
    def is_complete(self) -> bool:
        """Return True when every requested row was deleted."""
        return self.deleted_count == self.requested_count


__all__ = [
    "EntryType",
    "CategoryKey",
    "Category",
    "Entry",
    "DateRange",
    "DeleteResult",
]
