"""
handlers/db_handler.py
----------------------
Handles ``repeat delete-db``.
"""

import argparse

from db.connection import close_connection, get_db_path
from db.init_db import delete_database
from handlers.errors import reports_errors
from utils.logger import get_logger

logger = get_logger(__name__)


@reports_errors
def delete_db_command(args: argparse.Namespace) -> int:
    """Delete the card database after confirmation (or with ``--yes``)."""
    path = args.db or get_db_path()
    if not args.yes:
        try:
            answer = input(f"Delete all review history in '{path}'? [y/N]: ")
        except EOFError:
            answer = ""
        if answer.strip().lower() not in ("y", "yes"):
            print("Aborting; database kept.")
            return 0

    close_connection()
    delete_database(path)
    print(f"Deleted {path}")
    return 0
