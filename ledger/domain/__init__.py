"""Domain package for bookkeeping rules and core models."""

from .constants import DATE_INPUT_FORMATS, ISO_DATE_FORMAT
from .exceptions import (
    ConflictError,
    LedgerError,
    NotFoundError,
    TransientError,
    ValidationError,
)
from .models import (
    Account,
    Category,
    CategoryExpensesSummary,
    CategoryKey,
    ChartSeries,
    DateRange,
    DeleteResult,
    Entry,
    EntryType,
    ExpenseRange,
)
from .services import (
    normalize_category_name,
    normalize_date,
    parse_amount,
    parse_entry_date,
    round_chart_limits,
    signed_amount,
    validate_category_request,
    validate_entry,
)

__all__ = [
    "DATE_INPUT_FORMATS",
    "ISO_DATE_FORMAT",
    "ConflictError",
    "LedgerError",
    "NotFoundError",
    "TransientError",
    "ValidationError",
    "Account",
    "Category",
    "CategoryExpensesSummary",
    "CategoryKey",
    "ChartSeries",
    "DateRange",
    "DeleteResult",
    "Entry",
    "EntryType",
    "ExpenseRange",
    "normalize_category_name",
    "normalize_date",
    "parse_amount",
    "parse_entry_date",
    "round_chart_limits",
    "signed_amount",
    "validate_category_request",
    "validate_entry",
]
