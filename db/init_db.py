"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist,
and deletes the database file on request.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from pathlib import Path

from db.connection import get_connection, get_db_path, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Cards table: one row per unique card content, keyed by its hash
CREATE TABLE IF NOT EXISTS cards (
    card_hash           TEXT PRIMARY KEY,
    added_at            TEXT NOT NULL,
    last_reviewed_at    TEXT,
    stability           REAL,
    difficulty          REAL,
    interval_raw        REAL,
    interval_days       INTEGER NOT NULL DEFAULT 0,
    due_date            TEXT,
    review_count        INTEGER NOT NULL DEFAULT 0
);

-- Index for the "what is due" query
CREATE INDEX IF NOT EXISTS idx_cards_due_date ON cards(due_date);
"""


def schema_exists() -> bool:
    """Return True if the ``cards`` table is already present."""
    sql = "SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name = ?;"
    conn = get_connection()
    try:
        (count,) = conn.execute(sql, ("cards",)).fetchone()
        return count > 0
    finally:
        release_connection(conn)


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


def delete_database(db_path: Path | None = None) -> Path:
    """
    Remove the database file.

    Args:
        db_path: File to delete. Defaults to the active database path.

    Returns:
        The deleted path.

    Raises:
        FileNotFoundError: If there is no database at that path.
    """
    path = Path(db_path) if db_path is not None else get_db_path()
    path.unlink()
    logger.info(f"Deleted card database at {path}")
    return path


if __name__ == "__main__":
    from db.connection import init_connection
    init_connection()
    create_tables()
    print(f"Database schema created at {get_db_path()}")
