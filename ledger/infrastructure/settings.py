"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from ledger.infrastructure.logging.logger import get_app_logger


DEFAULT_PAGE_LENGTH = 50


@dataclass(frozen=True)
class LedgerSettings:
    """Runtime settings of the ledger engine.

    Attributes:
        db_url: SQLAlchemy URL of the ledger database, if configured.
        page_length: Number of entries per page for paged listings.
    """

    db_url: str | None = None
    page_length: int = DEFAULT_PAGE_LENGTH

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        db_url = os.getenv("LEDGER_DB_URL") or None
        page_length = cls._parse_page_length(
            os.getenv("LEDGER_PAGE_LENGTH"),
            logger=logger,
        )
        return cls(db_url=db_url, page_length=page_length)

    @staticmethod
    def _parse_page_length(raw_value: str | None, logger) -> int:
        """Parse the page length, falling back to the default.

        Args:
            raw_value: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            int: Positive page length.
        """
        if not raw_value:
            return DEFAULT_PAGE_LENGTH
        try:
            value = int(raw_value)
        except ValueError:
            logger.warning(
                f"Invalid LEDGER_PAGE_LENGTH '{raw_value}', "
                f"using {DEFAULT_PAGE_LENGTH}"
            )
            return DEFAULT_PAGE_LENGTH
        if value <= 0:
            logger.warning(
                f"LEDGER_PAGE_LENGTH must be positive, using {DEFAULT_PAGE_LENGTH}"
            )
            return DEFAULT_PAGE_LENGTH
        return value


__all__ = ["LedgerSettings", "DEFAULT_PAGE_LENGTH"]
