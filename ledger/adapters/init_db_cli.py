"""CLI adapter creating the ledger tables and projection views."""

from ledger.infrastructure.container import build_database_adapter
from ledger.infrastructure.logging.logger import get_app_logger
from ledger.infrastructure.schema import create_schema


def main() -> None:
    """Create the schema on the configured ledger database."""
    logger = get_app_logger()
    engine = build_database_adapter().get_ledger_engine()
    create_schema(engine, logger=logger)
    print(f"Ledger schema ready on {engine.url}")


if __name__ == "__main__":  # pragma: no cover
    main()
