"""Port for create-or-get category resolution."""

from collections.abc import Sequence
from typing import Protocol

from sqlalchemy.engine import Connection

from ledger.domain.models import Category, CategoryKey, EntryType


class CategoryResolverPort(Protocol):
    """Port resolving category names into persisted category records.

    Every method accepts an optional open connection so callers can fold
    category creation into their own transaction.
    """

    def resolve_or_create(
        self,
        account_id: int,
        name: str,
        entry_type: EntryType,
        conn: Connection | None = None,
    ) -> Category:
        """Return the category for the triple, inserting it when missing."""

    def resolve_or_create_batch(
        self,
        categories: Sequence[CategoryKey],
        conn: Connection | None = None,
    ) -> dict[CategoryKey, Category]:
        """Return canonical categories for every requested triple."""

    def list_categories(self, account_id: int) -> list[Category]:
        """Return the categories of an account ordered by name."""


__all__ = ["CategoryResolverPort"]
