"""Tests for the SQLAlchemy entry store."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from ledger.domain.exceptions import NotFoundError, ValidationError
from ledger.domain.models import Account, DateRange, Entry, EntryType


def _income(account_id: int, **kwargs) -> Entry:
    values = {
        "account_id": account_id,
        "type": EntryType.INCOME,
        "amount": Decimal("12.5"),
        "date": date(2024, 3, 1),
    }
    values.update(kwargs)
    return Entry(**values)


@pytest.fixture
def account_id(account_store) -> int:
    return account_store.save(Account(name="Main", initial_amount=Decimal("0"))).id


def test_save_entry_returns_stored_row_with_names(entry_store, account_id) -> None:
    saved = entry_store.save_entry(
        _income(account_id, category=" Salary ", description="pay")
    )

    assert saved.id is not None
    assert saved.account == "Main"
    assert saved.category == "Salary"
    assert saved.amount == Decimal("12.5")
    assert entry_store.find_entry(saved.id) == saved


def test_dates_are_stored_in_iso_form(entry_store, ledger_engine, account_id) -> None:
    saved = entry_store.save_entry(_income(account_id, date="2024-Jan-5"))
    other = entry_store.save_entry(_income(account_id, date="7/02/2024"))

    with ledger_engine.connect() as conn:
        stored = conn.exec_driver_sql("SELECT date FROM entry ORDER BY id").scalars().all()

    assert stored == ["2024-01-05", "2024-02-07"]
    assert saved.date == date(2024, 1, 5)
    assert other.date == date(2024, 2, 7)


def test_save_entries_returns_entries_with_ids(entry_store, account_id, category_resolver) -> None:
    saved = entry_store.save_entries(
        [
            _income(account_id, category="Salary"),
            _income(account_id, category="Salary"),
            _income(account_id, type=EntryType.EXPENSE, category="Food"),
            _income(account_id),
        ]
    )

    assert [entry.id for entry in saved] == [1, 2, 3, 4]
    assert entry_store.count_entries(account_id) == 4
    names = [(c.name, c.type) for c in category_resolver.list_categories(account_id)]
    assert names == [("Food", EntryType.EXPENSE), ("Salary", EntryType.INCOME)]


def test_failed_batch_persists_nothing(entry_store, account_id, category_resolver) -> None:
    """An entry referencing an unknown account rolls back the whole batch."""
    with pytest.raises(ValidationError):
        entry_store.save_entries(
            [
                _income(account_id, category="Salary"),
                _income(account_id, type=EntryType.EXPENSE, category="Food"),
                _income(999, category="Ghost"),
            ]
        )

    assert entry_store.count_entries(account_id) == 0
    assert category_resolver.list_categories(account_id) == []
    assert category_resolver.list_categories(999) == []


def test_invalid_entry_is_rejected_before_any_write(entry_store, account_id) -> None:
    with pytest.raises(ValidationError):
        entry_store.save_entries(
            [
                _income(account_id),
                _income(account_id, type=EntryType.TRANSFER, category="Food"),
            ]
        )

    assert entry_store.count_entries(account_id) == 0


def test_list_entries_is_newest_first_and_filters_by_range(entry_store, account_id) -> None:
    entry_store.save_entries(
        [
            _income(account_id, date=date(2024, 1, 31)),
            _income(account_id, date=date(2024, 2, 1)),
            _income(account_id, date=date(2024, 2, 1)),
        ]
    )

    every = entry_store.list_entries(account_id)
    january = entry_store.list_entries(account_id, DateRange.for_month(2024, 1))
    paged = entry_store.list_entries(account_id, limit=1, offset=1)

    assert [entry.id for entry in every] == [3, 2, 1]
    assert [entry.id for entry in january] == [1]
    assert [entry.id for entry in paged] == [2]


def test_transfers_are_listed_for_both_accounts(entry_store, account_store, account_id) -> None:
    target = account_store.save(Account(name="Target", initial_amount=Decimal("0")))
    transfer = entry_store.save_entry(
        _income(account_id, type=EntryType.TRANSFER, affected_account_id=target.id)
    )

    assert entry_store.list_entries(target.id) == [transfer]
    assert transfer.affected_account == "Target"


def test_update_entry_changes_fields_and_category(entry_store, account_id) -> None:
    saved = entry_store.save_entry(_income(account_id, category="Salary"))

    entry_store.update_entry(
        replace(saved, type=EntryType.EXPENSE, amount=Decimal("3"), category="Food")
    )

    updated = entry_store.find_entry(saved.id)
    assert updated.type is EntryType.EXPENSE
    assert updated.amount == Decimal("3")
    assert updated.category == "Food"


def test_update_entry_can_turn_an_expense_into_a_transfer(
    entry_store, account_store, account_id
) -> None:
    target = account_store.save(Account(name="Target", initial_amount=Decimal("0")))
    saved = entry_store.save_entry(
        _income(account_id, type=EntryType.EXPENSE, amount=Decimal("30"))
    )

    entry_store.update_entry(
        replace(saved, type=EntryType.TRANSFER, affected_account_id=target.id)
    )

    updated = entry_store.find_entry(saved.id)
    assert updated.type is EntryType.TRANSFER
    assert updated.affected_account_id == target.id
    assert updated.affected_account == "Target"
    assert entry_store.list_entries(target.id) == [updated]
    assert account_store.find_by_id(target.id).total == Decimal("30")
    assert account_store.find_by_id(account_id).total == Decimal("-30")


def test_update_entry_can_turn_a_transfer_into_an_expense(
    entry_store, account_store, account_id
) -> None:
    target = account_store.save(Account(name="Target", initial_amount=Decimal("5")))
    saved = entry_store.save_entry(
        _income(
            account_id,
            type=EntryType.TRANSFER,
            amount=Decimal("30"),
            affected_account_id=target.id,
        )
    )
    assert account_store.find_by_id(target.id).total == Decimal("35")

    entry_store.update_entry(
        replace(saved, type=EntryType.EXPENSE, affected_account_id=None)
    )

    updated = entry_store.find_entry(saved.id)
    assert updated.type is EntryType.EXPENSE
    assert updated.affected_account_id is None
    assert entry_store.list_entries(target.id) == []
    assert account_store.find_by_id(target.id).total == Decimal("5")
    assert entry_store.list_entries(account_id) == [updated]
    assert account_store.find_by_id(account_id).total == Decimal("-30")


def test_update_through_another_account_is_not_found(entry_store, account_store, account_id) -> None:
    other = account_store.save(Account(name="Other", initial_amount=Decimal("0")))
    saved = entry_store.save_entry(_income(account_id))

    with pytest.raises(NotFoundError):
        entry_store.update_entry(replace(saved, account_id=other.id, amount=Decimal("1")))

    assert entry_store.find_entry(saved.id).amount == Decimal("12.5")


def test_update_without_id_is_rejected(entry_store, account_id) -> None:
    with pytest.raises(ValidationError):
        entry_store.update_entry(_income(account_id))


def test_partial_delete_reports_counts(entry_store, account_id, quiet_logger) -> None:
    first, second = entry_store.save_entries([_income(account_id), _income(account_id)])

    result = entry_store.delete_entries([first.id, second.id, 404, first.id])

    assert result.requested_count == 3
    assert result.deleted_count == 2
    assert result.missing_count == 1
    quiet_logger.warning.assert_called_once()
    assert entry_store.count_entries(account_id) == 0


def test_find_missing_entry_raises(entry_store) -> None:
    with pytest.raises(NotFoundError):
        entry_store.find_entry(1)


def test_listed_range_round_trips_amounts_and_categories(entry_store, account_id) -> None:
    entry_store.save_entries(
        [
            _income(
                account_id,
                type=EntryType.EXPENSE,
                amount=Decimal("50"),
                date="2024-01-05",
                category="Food",
            ),
            _income(account_id, amount=Decimal("100"), date="2024-01-06", category=""),
        ]
    )

    listed = entry_store.list_entries(
        account_id,
        DateRange(date(2024, 1, 1), date(2024, 1, 31)),
    )

    assert [(e.date, e.type, e.amount, e.category) for e in listed] == [
        (date(2024, 1, 6), EntryType.INCOME, Decimal("100"), None),
        (date(2024, 1, 5), EntryType.EXPENSE, Decimal("50"), "Food"),
    ]
