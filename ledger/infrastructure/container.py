"""Composition root for wiring infrastructure adapters."""

from ledger.application.ports.account_store import AccountStorePort
from ledger.application.ports.aggregation_engine import AggregationEnginePort
from ledger.application.ports.category_resolver import CategoryResolverPort
from ledger.application.ports.database import DatabaseEnginePort
from ledger.application.ports.entry_store import EntryStorePort
from ledger.application.use_cases.get_entries_page import GetEntriesPageUseCase
from ledger.infrastructure.account_store import SqlAlchemyAccountStore
from ledger.infrastructure.aggregation_engine import SqlAlchemyAggregationEngine
from ledger.infrastructure.category_resolver import SqlAlchemyCategoryResolver
from ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from ledger.infrastructure.entry_store import SqlAlchemyEntryStore
from ledger.infrastructure.logging.logger import get_app_logger
from ledger.infrastructure.projections import (
    AccountTotalViewProjection,
    CumulativeAmountViewProjection,
)
from ledger.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_category_resolver(
    db_port: DatabaseEnginePort | None = None,
) -> CategoryResolverPort:
    """Return the category resolver."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyCategoryResolver(resolved_db, logger=get_app_logger())


def build_entry_store(
    db_port: DatabaseEnginePort | None = None,
) -> EntryStorePort:
    """Return the entry store sharing the resolver's database."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyEntryStore(
        resolved_db,
        build_category_resolver(resolved_db),
        logger=get_app_logger(),
    )


def build_account_store(
    db_port: DatabaseEnginePort | None = None,
) -> AccountStorePort:
    """Return the account store reading totals from the balance view."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyAccountStore(
        resolved_db,
        AccountTotalViewProjection(resolved_db),
        logger=get_app_logger(),
    )


def build_aggregation_engine(
    db_port: DatabaseEnginePort | None = None,
) -> AggregationEnginePort:
    """Return the aggregation engine reading the cumulative amount view."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyAggregationEngine(
        resolved_db,
        CumulativeAmountViewProjection(resolved_db),
        logger=get_app_logger(),
    )


def build_entries_page_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetEntriesPageUseCase:
    """Return the paged entry listing sized by LEDGER_PAGE_LENGTH."""
    resolved_db = db_port or build_database_adapter()
    settings = LedgerSettings.from_env()
    return GetEntriesPageUseCase(
        build_account_store(resolved_db),
        build_entry_store(resolved_db),
        page_length=settings.page_length,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_category_resolver",
    "build_entry_store",
    "build_account_store",
    "build_aggregation_engine",
    "build_entries_page_use_case",
]
