"""
db/connection.py
----------------
Manages access to the local SQLite card database.
Each caller takes a connection with get_connection() and hands it back
with release_connection() inside a ``finally`` block.
"""

import sqlite3
from pathlib import Path

from config import DB_PATH
from utils.logger import get_logger

logger = get_logger(__name__)

_db_path: Path | None = None


def init_connection(db_path: Path | None = None) -> Path:
    """
    Point the database layer at a SQLite file, creating its directory.

    Args:
        db_path: Database file. Defaults to ``config.DB_PATH``.

    Returns:
        The resolved database path.

    Raises:
        sqlite3.OperationalError: If the database file cannot be opened.
    """
    global _db_path
    path = Path(db_path) if db_path is not None else DB_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        probe = sqlite3.connect(path)
        probe.close()
    except sqlite3.OperationalError as e:
        logger.error(f"Failed to open database at {path}: {e}")
        raise
    _db_path = path
    logger.info(f"Using card database at {path}")
    return path


def get_db_path() -> Path:
    """Return the active database path (or the configured default)."""
    return _db_path if _db_path is not None else DB_PATH


def get_connection() -> sqlite3.Connection:
    """
    Open a connection to the active database.

    Returns:
        A sqlite3 connection object.

    Raises:
        RuntimeError: If init_connection() has not been called.
    """
    if _db_path is None:
        raise RuntimeError("Database not initialized. Call init_connection() first.")
    return sqlite3.connect(_db_path)


def release_connection(conn: sqlite3.Connection) -> None:
    """
    Close a connection obtained from get_connection().

    Args:
        conn: The sqlite3 connection to release.
    """
    conn.close()


def close_connection() -> None:
    """Forget the active database path."""
    global _db_path
    if _db_path is not None:
        logger.info(f"Closed card database at {_db_path}")
        _db_path = None
