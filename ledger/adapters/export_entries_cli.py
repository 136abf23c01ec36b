"""CLI adapter exporting an account's entries as CSV."""

import argparse
import csv
from pathlib import Path
import sys
from typing import TextIO

from ledger.application.use_cases.export_entries import (
    ExportEntriesUseCase,
    ExportRow,
)
from ledger.domain.exceptions import LedgerError
from ledger.infrastructure.container import (
    build_account_store,
    build_database_adapter,
    build_entry_store,
)
from ledger.infrastructure.logging.logger import get_app_logger


EXPORT_HEADER = ("Date", "Amount", "Category", "Description")


def write_rows(rows: list[ExportRow], handle: TextIO) -> None:
    """Write export rows with a header line."""
    writer = csv.writer(handle)
    writer.writerow(EXPORT_HEADER)
    for row in rows:
        writer.writerow(
            [
                row.date.isoformat(),
                str(row.amount),
                row.category or "",
                row.description or "",
            ]
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export a ledger account's entries as CSV"
    )
    parser.add_argument("account_id", type=int, help="Account id to export")
    parser.add_argument(
        "file",
        type=Path,
        nargs="?",
        help="Output file; standard output when omitted",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the export and return a process exit code."""
    args = _build_parser().parse_args(argv)
    logger = get_app_logger()
    db_adapter = build_database_adapter()
    use_case = ExportEntriesUseCase(
        build_account_store(db_adapter),
        build_entry_store(db_adapter),
        logger=logger,
    )
    try:
        rows = use_case.execute(args.account_id)
    except LedgerError as exc:
        logger.error(f"Export of account {args.account_id} failed: {exc.message}")
        print(f"Export failed: {exc.message}", file=sys.stderr)
        return 1

    if args.file is None:
        write_rows(rows, sys.stdout)
    else:
        with args.file.open("w", newline="", encoding="utf-8") as handle:
            write_rows(rows, handle)
        print(f"Exported {len(rows)} entries to {args.file}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
