"""Shared fixtures backed by a throwaway SQLite ledger database."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from ledger.domain.models import Account, Entry, EntryType
from ledger.infrastructure.account_store import SqlAlchemyAccountStore
from ledger.infrastructure.aggregation_engine import SqlAlchemyAggregationEngine
from ledger.infrastructure.category_resolver import SqlAlchemyCategoryResolver
from ledger.infrastructure.db import EngineDatabaseAdapter, create_ledger_engine
from ledger.infrastructure.entry_store import SqlAlchemyEntryStore
from ledger.infrastructure.projections import (
    AccountTotalViewProjection,
    CumulativeAmountViewProjection,
)
from ledger.infrastructure.schema import create_schema


@pytest.fixture
def quiet_logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def ledger_engine(tmp_path, quiet_logger):
    """Engine on a fresh SQLite file with tables and views created."""
    engine = create_ledger_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    create_schema(engine, logger=quiet_logger)
    yield engine
    engine.dispose()


@pytest.fixture
def db_port(ledger_engine) -> EngineDatabaseAdapter:
    return EngineDatabaseAdapter(ledger_engine)


@pytest.fixture
def category_resolver(db_port, quiet_logger) -> SqlAlchemyCategoryResolver:
    return SqlAlchemyCategoryResolver(db_port, logger=quiet_logger)


@pytest.fixture
def entry_store(db_port, category_resolver, quiet_logger) -> SqlAlchemyEntryStore:
    return SqlAlchemyEntryStore(db_port, category_resolver, logger=quiet_logger)


@pytest.fixture
def account_store(db_port, quiet_logger) -> SqlAlchemyAccountStore:
    return SqlAlchemyAccountStore(
        db_port,
        AccountTotalViewProjection(db_port),
        logger=quiet_logger,
    )


@pytest.fixture
def aggregation_engine(db_port, quiet_logger) -> SqlAlchemyAggregationEngine:
    return SqlAlchemyAggregationEngine(
        db_port,
        CumulativeAmountViewProjection(db_port),
        logger=quiet_logger,
    )


@pytest.fixture
def seeded_ledger(account_store, entry_store) -> dict:
    """Two accounts with a year-crossing set of entries.

    Checking starts at 100 and ends at 105; Savings only receives a
    transfer of 30 in February 2024.
    """
    checking = account_store.save(Account(name="Checking", initial_amount=Decimal("100")))
    savings = account_store.save(Account(name="Savings", initial_amount=Decimal("0")))
    entries = entry_store.save_entries(
        [
            Entry(
                account_id=checking.id,
                type=EntryType.INCOME,
                amount=Decimal("10"),
                date=date(2023, 12, 31),
                category="Salary",
            ),
            Entry(
                account_id=checking.id,
                type=EntryType.INCOME,
                amount=Decimal("50"),
                date=date(2024, 1, 10),
                category="Salary",
                description="January pay",
            ),
            Entry(
                account_id=checking.id,
                type=EntryType.EXPENSE,
                amount=Decimal("20"),
                date=date(2024, 1, 15),
                category="Food",
            ),
            Entry(
                account_id=checking.id,
                type=EntryType.EXPENSE,
                amount=Decimal("5"),
                date=date(2024, 2, 3),
                category="Food",
            ),
            Entry(
                account_id=checking.id,
                type=EntryType.TRANSFER,
                amount=Decimal("30"),
                date=date(2024, 2, 10),
                affected_account_id=savings.id,
                description="Move to savings",
            ),
        ]
    )
    return {"checking": checking, "savings": savings, "entries": entries}
