"""Database infrastructure for the ledger engine.

This module exposes concrete helpers to create and reuse the SQLAlchemy
engine connected to the ledger database, and to translate driver errors
into ledger exceptions. It belongs to the infrastructure layer because it
deals with external systems (PostgreSQL, SQLite).
"""

from contextlib import contextmanager
import os
from typing import Iterator, Optional

import dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.pool import QueuePool

from ledger.application.ports.database import DatabaseEnginePort
from ledger.domain.exceptions import TransientError, ValidationError


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine for the ledger database.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance with a small connection pool and
        health checks enabled. SQLite connections enforce foreign keys.
    """
    engine = create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_ledger_engine(db_url: str) -> Engine:
    """Create a standalone engine, bypassing the process-wide singleton."""
    return _create_engine(db_url)


_ledger_engine: Optional[Engine] = None


def get_ledger_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the ledger database.

    Returns:
        Engine: Lazily initialized engine connected to the ledger store.
    """
    global _ledger_engine
    if _ledger_engine is None:
        db_url = _get_env_var("LEDGER_DB_URL")
        _ledger_engine = _create_engine(db_url)
    return _ledger_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by SQLAlchemy engines.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so stores can depend only on the protocol.
    """

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the ledger database.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger store.
        """
        return get_ledger_engine()


class EngineDatabaseAdapter(DatabaseEnginePort):
    """DatabaseEnginePort wrapping an already created engine."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_ledger_engine(self) -> Engine:
        return self._engine


@contextmanager
def translate_db_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy errors as ledger exceptions.

    Args:
        operation: Short description used in the error message.

    Raises:
        ValidationError: On integrity violations (unknown references,
            broken constraints).
        TransientError: On connection-level failures.
    """
    try:
        yield
    except IntegrityError as exc:
        raise ValidationError(
            f"{operation} violates a store constraint",
            details={"error": str(exc.orig)},
        ) from exc
    except (OperationalError, InterfaceError, DisconnectionError) as exc:
        raise TransientError(
            f"{operation} failed on the database connection",
            details={"error": str(exc)},
        ) from exc


__all__ = [
    "get_ledger_engine",
    "create_ledger_engine",
    "SqlAlchemyDatabaseEngineAdapter",
    "EngineDatabaseAdapter",
    "translate_db_errors",
]
