"""SQLAlchemy-backed create-or-get resolution of categories."""

from collections.abc import Sequence
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError

from ledger.application.ports.category_resolver import CategoryResolverPort
from ledger.application.ports.database import DatabaseEnginePort
from ledger.domain.exceptions import ConflictError
from ledger.domain.models import Category, CategoryKey, EntryType
from ledger.domain.services import validate_category_request
from ledger.infrastructure.db import translate_db_errors
from ledger.infrastructure.logging.logger import get_app_logger


SELECT_ACCOUNT_CATEGORIES_SQL = text(
    """
    SELECT id, account_id, name, type
    FROM category
    WHERE account_id = :account_id
    ORDER BY name, type
    """
)

# Re-read after insert-or-ignore. MySQL/MariaDB snapshot reads would miss a
# row committed by a concurrent writer, so they read with a share lock.
SELECT_ACCOUNT_CATEGORIES_LOCKING_SQL = {
    "mysql": text(
        """
        SELECT id, account_id, name, type
        FROM category
        WHERE account_id = :account_id
        ORDER BY name, type
        LOCK IN SHARE MODE
        """
    ),
}
SELECT_ACCOUNT_CATEGORIES_LOCKING_SQL["mariadb"] = (
    SELECT_ACCOUNT_CATEGORIES_LOCKING_SQL["mysql"]
)

INSERT_CATEGORY_SQL = text(
    """
    INSERT INTO category (account_id, name, type)
    VALUES (:account_id, :name, :type)
    """
)

# Atomic insert-or-ignore primitives keyed on the unique
# (account_id, name, type) constraint.
INSERT_CATEGORY_IF_ABSENT_SQL = {
    "sqlite": text(
        """
        INSERT INTO category (account_id, name, type)
        VALUES (:account_id, :name, :type)
        ON CONFLICT (account_id, name, type) DO NOTHING
        """
    ),
    "postgresql": text(
        """
        INSERT INTO category (account_id, name, type)
        VALUES (:account_id, :name, :type)
        ON CONFLICT (account_id, name, type) DO NOTHING
        """
    ),
    "mysql": text(
        """
        INSERT IGNORE INTO category (account_id, name, type)
        VALUES (:account_id, :name, :type)
        """
    ),
}
INSERT_CATEGORY_IF_ABSENT_SQL["mariadb"] = INSERT_CATEGORY_IF_ABSENT_SQL["mysql"]


class SqlAlchemyCategoryResolver(CategoryResolverPort):
    """Resolve category names into rows, creating missing ones.

    At most one row exists per (account_id, name, type): the table carries
    a unique constraint and new rows are written with the store's
    insert-or-ignore primitive, then re-read. A writer that loses the race
    therefore fetches the winner's row instead of inserting a duplicate.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the resolver.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def resolve_or_create(
        self,
        account_id: int,
        name: str,
        entry_type: EntryType,
        conn: Connection | None = None,
    ) -> Category:
        """Return the category matching the triple, inserting it if absent.

        Callers must skip resolution entirely for uncategorized entries.

        Args:
            account_id: Owning account.
            name: Non-empty category name.
            entry_type: Income or Expense.
            conn: Optional connection whose transaction the insert joins.

        Returns:
            Category: Persisted category with its identity.

        Raises:
            ValidationError: If the name is empty or the type is Transfer.
        """
        resolved_type = validate_category_request(name, entry_type)
        key = CategoryKey(account_id, name, resolved_type)
        return self.resolve_or_create_batch([key], conn=conn)[key]

    def resolve_or_create_batch(
        self,
        categories: Sequence[CategoryKey],
        conn: Connection | None = None,
    ) -> dict[CategoryKey, Category]:
        """Return canonical categories for every requested triple.

        Existing categories of each account are fetched in one query, the
        missing triples are inserted in one batched statement and the
        account's categories are read again to build the mapping.

        Args:
            categories: Requested (account_id, name, type) triples.
            conn: Optional connection whose transaction the inserts join.

        Returns:
            dict[CategoryKey, Category]: Mapping keyed by the requested triple.

        Raises:
            ValidationError: If any name is empty or any type is Transfer.
            ConflictError: If a category cannot be read back after insert.
        """
        keys = self._validated_keys(categories)
        if not keys:
            return {}
        with translate_db_errors("Category resolution"):
            with self._transaction(conn) as active_conn:
                return self._resolve(active_conn, keys)

    def list_categories(self, account_id: int) -> list[Category]:
        """Return the categories of an account ordered by name.

        Args:
            account_id: Owning account.

        Returns:
            list[Category]: Categories of the account.
        """
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Category listing"):
            with engine.connect() as conn:
                categories = self._fetch_account_categories(conn, account_id)
        return list(categories.values())

    def _resolve(
        self,
        conn: Connection,
        keys: list[CategoryKey],
    ) -> dict[CategoryKey, Category]:
        keys_by_account: dict[int, list[CategoryKey]] = {}
        for key in keys:
            keys_by_account.setdefault(key.account_id, []).append(key)

        resolved: dict[CategoryKey, Category] = {}
        for account_id, account_keys in keys_by_account.items():
            existing = self._fetch_account_categories(conn, account_id)
            missing = [key for key in account_keys if key not in existing]
            if missing:
                self._insert_missing(conn, missing)
                existing = self._fetch_account_categories(
                    conn,
                    account_id,
                    locking=True,
                )
                self._logger.info(
                    f"Created up to {len(missing)} categories for account "
                    f"{account_id}"
                )
            for key in account_keys:
                category = existing.get(key)
                if category is None:
                    raise ConflictError(
                        f"Category {key.name!r} ({key.type.name}) missing "
                        f"for account {account_id} after insert",
                        details={
                            "account_id": account_id,
                            "name": key.name,
                            "type": key.type.name,
                        },
                    )
                resolved[key] = category
        return resolved

    def _insert_missing(
        self,
        conn: Connection,
        keys: list[CategoryKey],
    ) -> None:
        payload = [
            {"account_id": key.account_id, "name": key.name, "type": key.type.value}
            for key in keys
        ]
        statement = INSERT_CATEGORY_IF_ABSENT_SQL.get(conn.dialect.name)
        if statement is not None:
            conn.execute(statement, payload)
            return
        for row in payload:
            try:
                self._insert_in_savepoint(conn, row)
            except ConflictError as exc:
                self._logger.info(
                    f"{exc.message}; using the existing row"
                )

    @staticmethod
    def _insert_in_savepoint(conn: Connection, row: dict) -> None:
        try:
            with conn.begin_nested():
                conn.execute(INSERT_CATEGORY_SQL, row)
        except IntegrityError as exc:
            raise ConflictError(
                f"Category {row['name']!r} was created concurrently",
                details=row,
            ) from exc

    @staticmethod
    def _fetch_account_categories(
        conn: Connection,
        account_id: int,
        locking: bool = False,
    ) -> dict[CategoryKey, Category]:
        statement = SELECT_ACCOUNT_CATEGORIES_SQL
        if locking:
            statement = SELECT_ACCOUNT_CATEGORIES_LOCKING_SQL.get(
                conn.dialect.name,
                SELECT_ACCOUNT_CATEGORIES_SQL,
            )
        rows = conn.execute(
            statement,
            {"account_id": account_id},
        ).all()
        categories = [
            Category(
                id=row.id,
                account_id=row.account_id,
                name=row.name,
                type=EntryType.from_code(row.type),
            )
            for row in rows
        ]
        return {category.key: category for category in categories}

    @staticmethod
    def _validated_keys(categories: Sequence[CategoryKey]) -> list[CategoryKey]:
        keys: dict[CategoryKey, None] = {}
        for account_id, name, entry_type in categories:
            resolved_type = validate_category_request(name, entry_type)
            keys[CategoryKey(account_id, name, resolved_type)] = None
        return list(keys)

    @contextmanager
    def _transaction(self, conn: Connection | None) -> Iterator[Connection]:
        if conn is not None:
            yield conn
            return
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as new_conn:
            yield new_conn


__all__ = [
    "SqlAlchemyCategoryResolver",
    "SELECT_ACCOUNT_CATEGORIES_SQL",
    "SELECT_ACCOUNT_CATEGORIES_LOCKING_SQL",
    "INSERT_CATEGORY_SQL",
    "INSERT_CATEGORY_IF_ABSENT_SQL",
]
