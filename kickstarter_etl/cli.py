"""
Kickstarter ETL Command Line

Usage:
    # Load the default archive into the configured store:
    python -m kickstarter_etl.cli

    # With options:
    python -m kickstarter_etl.cli --datasource sqlite:///kickstarter.db
    python -m kickstarter_etl.cli --delete  # Drop all tables (asks first)
"""

from __future__ import annotations

import argparse
import sys
import time

from kickstarter_etl.core.config import settings
from kickstarter_etl.core.exceptions import KickstarterETLError
from kickstarter_etl.core.logging import get_logger, setup_logging
from kickstarter_etl.database.engine import check_connection, create_store_engine
from kickstarter_etl.etl.loader import ETLLoader
from kickstarter_etl.etl.writer import percent_complete

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Load the Kickstarter projects dataset into a relational store"
    )
    parser.add_argument(
        "--datasource",
        default=settings.database_url,
        help="database configuration (SQLAlchemy URL)"
    )
    parser.add_argument(
        "--delete",
        action="store_true",
        help="delete all tables (WARNING: destroys data)"
    )
    parser.add_argument(
        "--archive",
        default=settings.data_archive_path,
        help="zip archive holding the projects CSV"
    )
    parser.add_argument(
        "--entry",
        default=settings.data_archive_entry,
        help="name of the CSV entry inside the archive"
    )
    parser.add_argument(
        "--schema",
        default=settings.database_schema,
        help="schema that must be empty before loading (default: connection default)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser


def print_progress(processed: int, total: int) -> None:
    end = "\n" if processed == total else ""
    print(f"\r{processed}/{total} ({percent_complete(processed, total)}%)", end=end, flush=True)


def confirm_delete() -> bool:
    try:
        answer = input("Delete all data from kickstarter table? (y/n) ")
    except EOFError:
        return False
    return "y" in answer.lower()


def run(args: argparse.Namespace) -> int:
    """
    Run the ETL (or the reset) for parsed arguments.

    Returns:
        Process exit code

    Raises:
        KickstarterETLError: On any decode, store or configuration failure
    """
    engine = create_store_engine(args.datasource)
    try:
        check_connection(engine)
        loader = ETLLoader(engine, schema=args.schema)

        if args.delete:
            if not confirm_delete():
                print("Doing nothing")
                return 0
            print("Deleting all tables")
            loader.reset()
            return 0

        start = time.perf_counter()
        status = loader.run(args.archive, args.entry, progress=print_progress)
        if status.status == "skipped":
            print(status.message)
            return 0

        print(f"Finished ETL in {time.perf_counter() - start:.2f}s")
        return 0
    finally:
        engine.dispose()


def main(argv: list[str] | None = None) -> int:
    """Command-line interface for the Kickstarter ETL."""
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    try:
        return run(args)
    except KickstarterETLError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
