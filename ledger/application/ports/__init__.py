"""Application ports package."""

from .account_store import AccountStorePort
from .aggregation_engine import AggregationEnginePort
from .category_resolver import CategoryResolverPort
from .database import DatabaseEnginePort
from .entry_store import EntryStorePort
from .projections import (
    AccountBalanceProjectionPort,
    CumulativeAmountProjectionPort,
)

__all__ = [
    "AccountStorePort",
    "AggregationEnginePort",
    "CategoryResolverPort",
    "DatabaseEnginePort",
    "EntryStorePort",
    "AccountBalanceProjectionPort",
    "CumulativeAmountProjectionPort",
]
