"""Tests for raw field normalization."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from ledger.domain.exceptions import ValidationError
from ledger.domain.services import (
    normalize_category_name,
    normalize_date,
    normalize_description,
    parse_amount,
    parse_entry_date,
)


@pytest.mark.parametrize(
    "raw",
    ["2024-01-05", "2024-1-5", "2024-Jan-05", "2024-Jan-5", "5/01/2024", " 2024-01-05 "],
)
def test_accepted_layouts_normalize_to_iso(raw: str) -> None:
    assert normalize_date(raw) == "2024-01-05"


def test_parse_entry_date_passes_dates_through() -> None:
    assert parse_entry_date(date(2024, 3, 1)) == date(2024, 3, 1)
    assert parse_entry_date(datetime(2024, 3, 1, 10, 30)) == date(2024, 3, 1)


@pytest.mark.parametrize("raw", ["", "2024/01/05", "13/13/2024", "yesterday", None])
def test_unparseable_dates_raise_validation_error(raw) -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_entry_date(raw)

    assert "Date must look like one of" in excinfo.value.message


def test_parse_amount_keeps_sign_and_precision() -> None:
    assert parse_amount("-12.345") == Decimal("-12.345")
    assert parse_amount(7) == Decimal("7")
    assert parse_amount(Decimal("0.5")) == Decimal("0.5")


@pytest.mark.parametrize("raw", ["", "abc", None, "NaN", "Infinity"])
def test_parse_amount_rejects_non_numbers(raw) -> None:
    with pytest.raises(ValidationError):
        parse_amount(raw)


def test_blank_category_means_uncategorized() -> None:
    assert normalize_category_name("  ") is None
    assert normalize_category_name(None) is None
    assert normalize_category_name(" Food ") == "Food"


def test_normalize_description_strips_and_drops_blank() -> None:
    assert normalize_description(" rent ") == "rent"
    assert normalize_description("") is None
