"""SQLAlchemy-backed repository for ledger entries."""

from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy import delete, insert, text, update
from sqlalchemy.engine import Connection

from ledger.application.ports.category_resolver import CategoryResolverPort
from ledger.application.ports.database import DatabaseEnginePort
from ledger.application.ports.entry_store import EntryStorePort
from ledger.domain.exceptions import NotFoundError, ValidationError
from ledger.domain.models import (
    Category,
    DateRange,
    DeleteResult,
    Entry,
    EntryType,
)
from ledger.domain.services import (
    normalize_category_name,
    normalize_description,
    parse_amount,
    parse_entry_date,
    validate_entry,
)
from ledger.infrastructure.db import translate_db_errors
from ledger.infrastructure.logging.logger import get_app_logger
from ledger.infrastructure.schema import entry_table
from ledger.utils.decimal_utils import coerce_decimal


SELECT_ENTRIES_SQL = """
    SELECT e.id,
           e.account_id,
           e.affected_account_id,
           a1.name AS account,
           a2.name AS affected_account,
           e.type,
           e.description,
           c.name AS category,
           e.amount,
           e.date
    FROM entry e
    LEFT JOIN account a1 ON e.account_id = a1.id
    LEFT JOIN account a2 ON e.affected_account_id = a2.id
    LEFT JOIN category c ON e.category = c.id
"""

COUNT_ENTRIES_SQL = text(
    """
    SELECT COUNT(*) AS count
    FROM entry
    WHERE account_id = :account_id OR affected_account_id = :account_id
    """
)


class SqlAlchemyEntryStore(EntryStorePort):
    """Repository persisting entries and resolving their categories.

    Each write runs in a single transaction that also covers any category
    it creates, so a failure leaves neither entries nor categories behind.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        category_resolver: CategoryResolverPort,
        logger=None,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            category_resolver: Resolver joining the store's transactions.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._category_resolver = category_resolver
        self._logger = logger or get_app_logger()

    def list_entries(
        self,
        account_id: int,
        date_range: DateRange | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Entry]:
        """Return entries owned by or affecting the account.

        Args:
            account_id: Account whose entries are listed.
            date_range: Optional inclusive date bounds.
            limit: Optional maximum number of rows.
            offset: Number of rows to skip, used with limit.

        Returns:
            list[Entry]: Entries ordered by date then id, newest first.
        """
        sql = SELECT_ENTRIES_SQL + (
            " WHERE (e.account_id = :account_id"
            " OR e.affected_account_id = :account_id)"
        )
        params: dict[str, object] = {"account_id": account_id}
        if date_range is not None:
            sql += " AND e.date >= :start_date AND e.date <= :end_date"
            params["start_date"] = date_range.start_date.isoformat()
            params["end_date"] = date_range.end_date.isoformat()
        sql += " ORDER BY e.date DESC, e.id DESC"
        if limit is not None:
            sql += " LIMIT :limit OFFSET :offset"
            params["limit"] = limit
            params["offset"] = offset
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Entry listing"):
            with engine.connect() as conn:
                rows = conn.execute(text(sql), params).all()
        return [self._row_to_entry(row) for row in rows]

    def count_entries(self, account_id: int) -> int:
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Entry count"):
            with engine.connect() as conn:
                result = conn.execute(
                    COUNT_ENTRIES_SQL,
                    {"account_id": account_id},
                ).first()
        return int(result.count) if result else 0

    def find_entry(self, entry_id: int) -> Entry:
        """Return one entry with account and category names.

        Raises:
            NotFoundError: If no entry has this identity.
        """
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Entry lookup"):
            with engine.connect() as conn:
                return self._fetch_entry(conn, entry_id)

    def save_entry(self, entry: Entry) -> Entry:
        """Resolve the entry's category and insert the entry atomically.

        Args:
            entry: Entry to persist; its id is ignored.

        Returns:
            Entry: Stored entry read back with its identity and names.

        Raises:
            ValidationError: If the entry breaks a bookkeeping rule or
                references an unknown account.
        """
        prepared = self._prepare(entry)
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Entry insert"):
            with engine.begin() as conn:
                category = self._resolve_category(conn, prepared)
                result = conn.execute(
                    insert(entry_table).values(
                        **self._entry_params(prepared, category)
                    )
                )
                entry_id = result.inserted_primary_key[0]
                stored = self._fetch_entry(conn, entry_id)
        self._logger.info(
            f"Saved entry {entry_id} for account {prepared.account_id}"
        )
        return stored

    def save_entries(self, entries: Sequence[Entry]) -> list[Entry]:
        """Persist a batch of entries and their categories atomically.

        All distinct categories of the batch are resolved first, then every
        entry is inserted; everything happens in one transaction.

        Args:
            entries: Entries to persist.

        Returns:
            list[Entry]: Entries with their new identities, in input order.

        Raises:
            ValidationError: If any entry is invalid; nothing is persisted.
        """
        if not entries:
            return []
        prepared = [self._prepare(entry) for entry in entries]
        keys = list(
            dict.fromkeys(
                entry.category_key
                for entry in prepared
                if entry.category_key is not None
            )
        )
        engine = self._db_port.get_ledger_engine()
        saved: list[Entry] = []
        with translate_db_errors("Entry import"):
            with engine.begin() as conn:
                categories = {}
                if keys:
                    categories = self._category_resolver.resolve_or_create_batch(
                        keys,
                        conn=conn,
                    )
                for entry in prepared:
                    category = (
                        categories[entry.category_key]
                        if entry.category_key is not None
                        else None
                    )
                    result = conn.execute(
                        insert(entry_table).values(
                            **self._entry_params(entry, category)
                        )
                    )
                    saved.append(
                        replace(entry, id=result.inserted_primary_key[0])
                    )
        self._logger.info(
            f"Saved {len(saved)} entries with {len(keys)} categories"
        )
        return saved

    def update_entry(self, entry: Entry) -> None:
        """Update type, affected account, description, amount, date and category.

        The row is matched on both id and account id so an entry cannot be
        modified through another account.

        Args:
            entry: Entry carrying its identity and the new values.

        Raises:
            ValidationError: If the entry has no id or breaks a rule.
            NotFoundError: If no row matches (id, account_id).
        """
        if not entry.id:
            raise ValidationError("Can't update an entry without id")
        prepared = self._prepare(entry)
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Entry update"):
            with engine.begin() as conn:
                category = self._resolve_category(conn, prepared)
                params = self._entry_params(prepared, category)
                result = conn.execute(
                    update(entry_table)
                    .where(entry_table.c.id == prepared.id)
                    .where(entry_table.c.account_id == prepared.account_id)
                    .values(
                        type=params["type"],
                        affected_account_id=params["affected_account_id"],
                        description=params["description"],
                        amount=params["amount"],
                        date=params["date"],
                        category=params["category"],
                    )
                )
                if result.rowcount == 0:
                    raise NotFoundError(
                        f"Entry not found: {prepared.id}",
                        details={
                            "entry_id": prepared.id,
                            "account_id": prepared.account_id,
                        },
                    )
        self._logger.info(f"Updated entry {prepared.id}")

    def delete_entries(self, ids: Sequence[int]) -> DeleteResult:
        """Delete entries in one statement.

        Args:
            ids: Identities to delete; duplicates are ignored.

        Returns:
            DeleteResult: Requested and actually deleted row counts.
        """
        unique_ids = list(dict.fromkeys(ids))
        if not unique_ids:
            return DeleteResult(requested_count=0, deleted_count=0)
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Entry delete"):
            with engine.begin() as conn:
                result = conn.execute(
                    delete(entry_table).where(entry_table.c.id.in_(unique_ids))
                )
        outcome = DeleteResult(
            requested_count=len(unique_ids),
            deleted_count=result.rowcount,
        )
        if not outcome.is_complete:
            self._logger.warning(
                f"Deleted {outcome.deleted_count} of {outcome.requested_count} "
                f"entries; {outcome.missing_count} did not exist"
            )
        else:
            self._logger.info(f"Deleted {outcome.deleted_count} entries")
        return outcome

    def _resolve_category(
        self,
        conn: Connection,
        entry: Entry,
    ) -> Category | None:
        key = entry.category_key
        if key is None:
            return None
        return self._category_resolver.resolve_or_create(
            key.account_id,
            key.name,
            key.type,
            conn=conn,
        )

    def _fetch_entry(self, conn: Connection, entry_id: int) -> Entry:
        row = conn.execute(
            text(SELECT_ENTRIES_SQL + " WHERE e.id = :entry_id"),
            {"entry_id": entry_id},
        ).first()
        if row is None:
            raise NotFoundError(
                f"Entry not found: {entry_id}",
                details={"entry_id": entry_id},
            )
        return self._row_to_entry(row)

    @staticmethod
    def _prepare(entry: Entry) -> Entry:
        try:
            entry_type = EntryType.from_code(entry.type)
        except (TypeError, ValueError):
            raise ValidationError(
                f"Unknown entry type: {entry.type!r}",
                details={"entry_id": entry.id},
            ) from None
        prepared = replace(
            entry,
            type=entry_type,
            amount=parse_amount(entry.amount),
            date=parse_entry_date(entry.date),
            category=normalize_category_name(entry.category),
            description=normalize_description(entry.description),
        )
        validate_entry(prepared)
        return prepared

    @staticmethod
    def _entry_params(entry: Entry, category: Category | None) -> dict:
        return {
            "account_id": entry.account_id,
            "affected_account_id": entry.affected_account_id,
            "type": entry.type.value,
            "description": entry.description,
            "category": category.id if category is not None else None,
            "amount": entry.amount,
            "date": entry.date.isoformat(),
        }

    @staticmethod
    def _row_to_entry(row) -> Entry:
        return Entry(
            id=row.id,
            account_id=row.account_id,
            affected_account_id=row.affected_account_id,
            account=row.account,
            affected_account=row.affected_account,
            type=EntryType.from_code(row.type),
            description=row.description,
            category=row.category,
            amount=coerce_decimal(row.amount),
            date=parse_entry_date(row.date),
        )


__all__ = ["SqlAlchemyEntryStore", "SELECT_ENTRIES_SQL", "COUNT_ENTRIES_SQL"]
