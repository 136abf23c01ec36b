"""Domain services package."""

from .charts import round_chart_limits
from .normalization import (
    normalize_category_name,
    normalize_date,
    normalize_description,
    parse_amount,
    parse_entry_date,
)
from .signs import signed_amount
from .validation import validate_category_request, validate_entry

__all__ = [
    "round_chart_limits",
    "normalize_category_name",
    "normalize_date",
    "normalize_description",
    "parse_amount",
    "parse_entry_date",
    "signed_amount",
    "validate_category_request",
    "validate_entry",
]
