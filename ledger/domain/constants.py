"""Domain constants for the ledger engine."""

# Accepted input layouts for entry dates, tried in order.
DATE_INPUT_FORMATS = (
    "%Y-%m-%d",
    "%Y-%b-%d",
    "%d/%m/%Y",
)

ISO_DATE_FORMAT = "%Y-%m-%d"

AMOUNT_QUANTUM = "0.001"


__all__ = ["DATE_INPUT_FORMATS", "ISO_DATE_FORMAT", "AMOUNT_QUANTUM"]
