"""Chart helpers for yearly balance charts."""

from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal

from ledger.domain.models import ExpenseRange


def round_chart_limits(expense_range: ExpenseRange) -> ExpenseRange:
    """Round an expense range outward to the leading power of ten.

    The divisor is derived from the number of integer digits of the
    maximum, e.g. a maximum of 1234 rounds both bounds to thousands.

    Args:
        expense_range: Raw minimum and maximum cumulative amounts.

    Returns:
        ExpenseRange: Bounds suitable for a chart axis.
    """
    max_digits = len(str(expense_range.max_amount.quantize(Decimal("1"))))
    divisor = Decimal(10) ** max(max_digits - 1, 0)
    upper = (expense_range.max_amount / divisor).to_integral_value(
        rounding=ROUND_CEILING
    ) * divisor
    lower = (expense_range.min_amount / divisor).to_integral_value(
        rounding=ROUND_FLOOR
    ) * divisor
    return ExpenseRange(min_amount=lower, max_amount=upper)


__all__ = ["round_chart_limits"]
