"""Tests for the ExportEntriesUseCase."""

from datetime import date
from decimal import Decimal

from ledger.application.use_cases.export_entries import (
    ExportEntriesUseCase,
    ExportRow,
)
from ledger.application.use_cases.import_entries import ImportEntriesUseCase
from ledger.domain.models import Account


def test_export_signs_amounts_for_each_account(account_store, entry_store, seeded_ledger, quiet_logger) -> None:
    use_case = ExportEntriesUseCase(account_store, entry_store, logger=quiet_logger)

    checking_rows = use_case.execute(seeded_ledger["checking"].id)
    savings_rows = use_case.execute(seeded_ledger["savings"].id)

    assert [(r.date, r.amount) for r in checking_rows] == [
        (date(2024, 2, 10), Decimal("-30")),
        (date(2024, 2, 3), Decimal("-5")),
        (date(2024, 1, 15), Decimal("-20")),
        (date(2024, 1, 10), Decimal("50")),
        (date(2023, 12, 31), Decimal("10")),
    ]
    assert savings_rows == [
        ExportRow(
            date=date(2024, 2, 10),
            amount=Decimal("30"),
            category=None,
            description="Move to savings",
        )
    ]


def test_export_then_import_keeps_income_and_expenses(account_store, entry_store, seeded_ledger, quiet_logger) -> None:
    """Re-importing an account's own Income/Expense rows reproduces them."""
    exported = ExportEntriesUseCase(account_store, entry_store, logger=quiet_logger).execute(
        seeded_ledger["checking"].id
    )
    copy = account_store.save(Account(name="Copy", initial_amount=Decimal("100")))
    rows = [
        {
            "Date": row.date.isoformat(),
            "Amount": str(row.amount),
            "Category": row.category or "",
            "Description": row.description or "",
        }
        for row in exported
        if row.category is not None
    ]

    ImportEntriesUseCase(entry_store, logger=quiet_logger).execute(copy.id, rows)

    reimported = ExportEntriesUseCase(account_store, entry_store, logger=quiet_logger).execute(copy.id)
    original = [r for r in exported if r.category is not None]
    assert reimported == original
