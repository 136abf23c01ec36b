"""Domain normalization helpers for raw entry fields."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from ledger.domain.constants import DATE_INPUT_FORMATS, ISO_DATE_FORMAT
from ledger.domain.exceptions import ValidationError


def parse_entry_date(raw: str | date) -> date:
    """Parse an entry date written in any accepted layout.

    Args:
        raw: Date string such as 2024-01-05, 2024-1-5, 2024-Jan-05 or
            05/01/2024 (day/month/year), or an existing date.

    Returns:
        date: Parsed calendar date.

    Raises:
        ValidationError: If the value matches none of the layouts.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    candidate = (raw or "").strip()
    for layout in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(candidate, layout).date()
        except ValueError:
            continue
    raise ValidationError(
        f"Date must look like one of {', '.join(DATE_INPUT_FORMATS)}: "
        f"{raw!r}",
        details={"value": raw},
    )


def normalize_date(raw: str | date) -> str:
    """Return the ISO (YYYY-MM-DD) form of an entry date.

    Args:
        raw: Date in any accepted layout.

    Returns:
        str: ISO formatted date.
    """
    return parse_entry_date(raw).strftime(ISO_DATE_FORMAT)


def parse_amount(raw) -> Decimal:
    """Parse a signed decimal amount.

    Args:
        raw: String, int or Decimal amount.

    Returns:
        Decimal: Parsed finite amount.

    Raises:
        ValidationError: If the value is empty, not a number or infinite.
    """
    if isinstance(raw, Decimal):
        amount = raw
    else:
        text = str(raw).strip() if raw is not None else ""
        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise ValidationError(
                f"Amount is not a number: {raw!r}",
                details={"value": raw},
            ) from None
    if not amount.is_finite():
        raise ValidationError(
            f"Amount must be finite: {raw!r}",
            details={"value": raw},
        )
    return amount


def normalize_category_name(name: str | None) -> str | None:
    """Strip a category name; empty names mean "no category".

    Args:
        name: Raw category name.

    Returns:
        str | None: Cleaned name, or None when blank.
    """
    if not name:
        return None
    cleaned = name.strip()
    return cleaned or None


def normalize_description(description: str | None) -> str | None:
    if description is None:
        return None
    cleaned = description.strip()
    return cleaned or None


__all__ = [
    "parse_entry_date",
    "normalize_date",
    "parse_amount",
    "normalize_category_name",
    "normalize_description",
]
