"""Domain validation helpers."""

from ledger.domain.exceptions import ValidationError
from ledger.domain.models import Entry, EntryType


def validate_category_request(name: str | None, entry_type) -> EntryType:
    """Check that a category may be resolved for the given name and type.

    Args:
        name: Category name; must not be blank.
        entry_type: Entry type of the category.

    Returns:
        EntryType: The validated type.

    Raises:
        ValidationError: If the name is blank or the type is not Income or
            Expense.
    """
    try:
        resolved_type = EntryType.from_code(entry_type)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Unknown entry type: {entry_type!r}",
            details={"type": entry_type},
        ) from None
    if not resolved_type.accepts_category:
        raise ValidationError(
            f"Category is neither income nor expense. Type {resolved_type.name}",
            details={"name": name, "type": resolved_type.name},
        )
    if not name or not name.strip():
        raise ValidationError(
            "Category name must not be empty",
            details={"type": resolved_type.name},
        )
    return resolved_type


def validate_entry(entry: Entry) -> None:
    """Check the bookkeeping rules an entry must satisfy before a write.

    Args:
        entry: Entry about to be persisted.

    Raises:
        ValidationError: If any rule is violated.
    """
    if not isinstance(entry.type, EntryType):
        raise ValidationError(
            f"Unknown entry type: {entry.type!r}",
            details={"entry_id": entry.id},
        )
    if entry.amount < 0:
        raise ValidationError(
            f"Entry amount must be a non-negative magnitude: {entry.amount}",
            details={"entry_id": entry.id},
        )
    if entry.type is EntryType.TRANSFER:
        if entry.affected_account_id is None:
            raise ValidationError(
                "Transfer requires an affected account",
                details={"entry_id": entry.id},
            )
        if entry.affected_account_id == entry.account_id:
            raise ValidationError(
                "Transfer cannot target its own account",
                details={"entry_id": entry.id},
            )
        if entry.category:
            raise ValidationError(
                "Transfer entries cannot have a category",
                details={"entry_id": entry.id},
            )
    elif entry.affected_account_id is not None:
        raise ValidationError(
            f"{entry.type.name.title()} entries cannot have an affected account",
            details={"entry_id": entry.id},
        )


__all__ = ["validate_category_request", "validate_entry"]
