"""Exception hierarchy for ledger operations.

Every store operation either returns a typed result or raises one of the
exceptions below. Callers (HTTP handlers, CLIs) map them to their own
transport-level responses.
"""

from typing import Any


class LedgerError(Exception):
    """Base exception for all ledger errors.

    Attributes:
        message: Human readable description of the failure.
        details: Additional context about the error (for logging).
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human readable description of the failure.
            details: Additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(LedgerError):
    """Raised when an update or lookup target does not exist."""


class ValidationError(LedgerError):
    """Raised when input data violates a ledger rule.

    Common causes:
    - Empty category name or a category on a Transfer
    - Unknown entry type
    - Non-parseable amount or date
    - A reference to an account that does not exist
    """


class ConflictError(LedgerError):
    """Raised when a concurrent writer created the same category first.

    The category resolver handles it by re-fetching. It only escapes a
    public operation when the re-read still cannot see the winning row.
    """


class TransientError(LedgerError):
    """Raised on connection-level failures of the backing store."""


__all__ = [
    "LedgerError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "TransientError",
]
