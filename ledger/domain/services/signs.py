"""Sign derivation for stored entry magnitudes."""

from decimal import Decimal

from ledger.domain.models import Entry, EntryType


def signed_amount(entry: Entry, viewer_account_id: int) -> Decimal:
    """Return the entry amount signed from one account's point of view.

    Income is positive and Expense negative. A Transfer is negative for
    the owning account and positive for the affected account.

    Args:
        entry: Entry holding a non-negative magnitude.
        viewer_account_id: Account the amount is presented to.

    Returns:
        Decimal: Signed amount.

    Raises:
        ValueError: If a transfer is viewed from an unrelated account or
            the entry type is unknown.
    """
    magnitude = abs(entry.amount)
    if entry.type is EntryType.INCOME:
        return magnitude
    if entry.type is EntryType.EXPENSE:
        return -magnitude
    if entry.type is EntryType.TRANSFER:
        if viewer_account_id == entry.account_id:
            return -magnitude
        if viewer_account_id == entry.affected_account_id:
            return magnitude
        raise ValueError(
            f"Account {viewer_account_id} is not part of transfer {entry.id}"
        )
    raise ValueError(f"Unhandled entry type: {entry.type!r}")


__all__ = ["signed_amount"]
