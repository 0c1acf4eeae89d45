"""
main.py
-------
Entry point for the repeat command-line flashcard tool.

Responsibilities:
    - Parse the command line.
    - Initialize the card database and schema.
    - Dispatch to the handler of the chosen subcommand.
"""

import argparse
import sqlite3
import sys
from pathlib import Path
from typing import Optional, Sequence

from db.connection import close_connection, init_connection
from db.init_db import create_tables, schema_exists
from handlers.check_handler import check_command
from handlers.create_handler import create_command
from handlers.db_handler import delete_db_command
from handlers.drill_handler import drill_command
from handlers.export_handler import export_command
from utils.logger import get_logger, set_level

logger = get_logger(__name__)

__version__ = "0.3.0"


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or more: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every subcommand."""
    parser = argparse.ArgumentParser(
        prog="repeat",
        description="Spaced-repetition flashcards kept in markdown files.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--db", type=Path, default=None,
                        help="Card database file (default: REPEAT_DB_PATH or the user data dir).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr.")

    sub = parser.add_subparsers(dest="command", required=True)

    # ── create ────────────────────────────────────────────
    create = sub.add_parser("create", help="Create or append to a card file.")
    create.add_argument("card_path", help="Markdown file to append the card to.")
    create.set_defaults(handler=create_command)

    # ── check ─────────────────────────────────────────────
    check = sub.add_parser("check", help="Register cards and show collection statistics.")
    check.add_argument("paths", nargs="*", default=["."],
                       help="Markdown files or directories (default: current directory).")
    check.add_argument("--prune", action="store_true",
                       help="Delete database rows for cards not found in the given paths.")
    check.add_argument("--chart", type=Path, default=None, metavar="PNG",
                       help="Also save the statistics as a PNG chart.")
    check.set_defaults(handler=check_command)

    # ── drill ─────────────────────────────────────────────
    drill = sub.add_parser("drill", help="Drill the cards that are due.")
    drill.add_argument("paths", nargs="*", default=["."],
                       help="Markdown files or directories (default: current directory).")
    drill.add_argument("--card-limit", type=_non_negative_int, default=None,
                       help="Maximum number of cards in this session. By default all due cards are drilled.")
    drill.add_argument("--new-card-limit", type=_non_negative_int, default=None,
                       help="Maximum number of new cards in this session.")
    drill.set_defaults(handler=drill_command)

    # ── export ────────────────────────────────────────────
    export = sub.add_parser("export", help="Export card scheduling data to CSV or Excel.")
    export.add_argument("destination", type=Path, help="Output file ending in .csv or .xlsx.")
    export.add_argument("paths", nargs="*", default=["."],
                        help="Markdown files or directories (default: current directory).")
    export.set_defaults(handler=export_command)

    # ── delete-db ─────────────────────────────────────────
    delete_db = sub.add_parser("delete-db", help="Delete the card database.")
    delete_db.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation.")
    delete_db.set_defaults(handler=delete_db_command, skip_db_init=True)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return its exit code."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_level("INFO")

    # ── 1. Database setup ─────────────────────────────────
    if not getattr(args, "skip_db_init", False):
        try:
            init_connection(args.db)
            if not schema_exists():
                create_tables()
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Database setup failed: {e}")
            print(f"error: could not open card database: {e}", file=sys.stderr)
            return 1

    # ── 2. Dispatch ───────────────────────────────────────
    try:
        return args.handler(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    finally:
        close_connection()


if __name__ == "__main__":
    sys.exit(main())
