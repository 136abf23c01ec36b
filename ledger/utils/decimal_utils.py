"""Helpers for Decimal normalization."""

from decimal import Decimal

from ledger.domain.constants import AMOUNT_QUANTUM


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_amount(value) -> Decimal:
    """Coerce an aggregated value and round it to the amount precision.

    SQLite sums NUMERIC columns as floats, so projection totals are
    rounded before leaving the infrastructure layer.

    Args:
        value: Raw aggregated value.

    Returns:
        Decimal: Amount rounded to three decimal places.
    """
    return coerce_decimal(value).quantize(Decimal(AMOUNT_QUANTUM))


__all__ = ["coerce_decimal", "quantize_amount"]
