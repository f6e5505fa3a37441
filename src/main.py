import argparse
import io
import logging
import os
import sys
from typing import List, Optional, TextIO

from csv_io import CsvAccountsReportWriter, CsvTransactionsReader
from ledger import LedgerEngine
from processor import run

LOG_LEVEL_ENV = "LEDGER_LOG_LEVEL"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ledger",
        description="Apply a CSV of transactions to client accounts and print the final balances.",
    )
    parser.add_argument("input", nargs="?", help="transactions CSV (defaults to stdin)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every rejected transaction")
    parser.add_argument("--stats", action="store_true", help="print processing counts to stderr")
    return parser


def resolve_log_level(verbose: bool):
    if verbose:
        return logging.INFO
    level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        return logging.WARNING
    return level


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=resolve_log_level(verbose),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def open_stdin() -> TextIO:
    """Standard input decoded like input files, so bad bytes reach the reader."""
    return io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors="surrogateescape", newline="")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    engine = LedgerEngine()
    writer = CsvAccountsReportWriter(sys.stdout)

    try:
        if args.input is None:
            stats = run(CsvTransactionsReader(open_stdin()), engine, writer)
        else:
            with open(args.input, "r", encoding="utf-8", errors="surrogateescape", newline="") as f:
                stats = run(CsvTransactionsReader(f), engine, writer)
    except OSError as e:
        logging.getLogger(__name__).error(f"I/O error: {e}")
        return 1

    if args.stats:
        print(stats, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
