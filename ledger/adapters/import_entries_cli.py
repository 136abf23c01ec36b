"""CLI adapter importing a CSV file into an account.

The file needs ``Date`` and ``Amount`` columns; ``Category`` and
``Description`` are optional. Negative amounts are imported as expenses.
"""

import argparse
import csv
from pathlib import Path
import sys

from ledger.application.use_cases.import_entries import ImportEntriesUseCase
from ledger.domain.exceptions import LedgerError
from ledger.infrastructure.container import build_entry_store
from ledger.infrastructure.logging.logger import get_app_logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Import signed CSV entries into a ledger account"
    )
    parser.add_argument("account_id", type=int, help="Target account id")
    parser.add_argument("file", type=Path, help="CSV file to import")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the import and return a process exit code."""
    args = _build_parser().parse_args(argv)
    logger = get_app_logger()
    use_case = ImportEntriesUseCase(build_entry_store(), logger=logger)

    try:
        with args.file.open(newline="", encoding="utf-8") as handle:
            reader = csv.DictReader(handle)
            result = use_case.execute(args.account_id, reader)
    except LedgerError as exc:
        logger.error(f"Import of {args.file} failed: {exc.message}")
        print(f"Import failed: {exc.message}", file=sys.stderr)
        return 1
    except (UnicodeDecodeError, csv.Error) as exc:
        logger.error(f"Import of {args.file} failed: {exc}")
        print(
            f"Import failed: {args.file} is not a readable UTF-8 CSV file ({exc})",
            file=sys.stderr,
        )
        return 1

    print(
        f"Imported {result.imported_count} entries "
        f"({result.category_count} categories) into account {args.account_id}."
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
