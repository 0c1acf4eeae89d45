"""
repositories/card_repo.py
-------------------------
Data access layer for card scheduling state.
All SQL queries related to the `cards` table live here.
"""

from datetime import datetime
from typing import Iterable, Optional

from db.connection import get_connection, release_connection
from models.card import Card
from models.performance import CardPerformance, ReviewStatus
from services.fsrs import update_performance
from utils.clock import from_db, to_db, utcnow
from utils.logger import get_logger

logger = get_logger(__name__)

_INSERT_SQL = """
    INSERT OR IGNORE INTO cards (
        card_hash, added_at, last_reviewed_at, stability, difficulty,
        interval_raw, interval_days, due_date, review_count
    )
    VALUES (?, ?, NULL, NULL, NULL, NULL, 0, NULL, 0);
"""

_PERFORMANCE_COLUMNS = (
    "card_hash, last_reviewed_at, stability, difficulty, "
    "interval_raw, interval_days, due_date, review_count"
)


class CardRepository:
    """Repository for CRUD operations on the cards table."""

    # ── CREATE ────────────────────────────────────────────

    def add_card(self, card: Card) -> bool:
        """
        Register a card. Existing rows are left untouched.

        Returns:
            True if a new row was inserted.
        """
        conn = get_connection()
        try:
            cur = conn.execute(_INSERT_SQL, (card.card_hash, to_db(utcnow())))
            inserted = cur.rowcount > 0
            conn.commit()
            return inserted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add card {card.card_hash[:12]}: {e}")
            raise
        finally:
            release_connection(conn)

    def add_cards_batch(self, cards: Iterable[Card]) -> int:
        """
        Register many cards in a single transaction.

        Returns:
            Number of cards that were new to the database.
        """
        now = to_db(utcnow())
        conn = get_connection()
        try:
            inserted = 0
            for card in cards:
                cur = conn.execute(_INSERT_SQL, (card.card_hash, now))
                inserted += cur.rowcount
            conn.commit()
            if inserted:
                logger.info(f"Registered {inserted} new cards")
            return inserted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to register card batch: {e}")
            raise
        finally:
            release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def card_exists(self, card: Card) -> bool:
        sql = "SELECT COUNT(1) FROM cards WHERE card_hash = ?;"
        conn = get_connection()
        try:
            (count,) = conn.execute(sql, (card.card_hash,)).fetchone()
            return count > 0
        finally:
            release_connection(conn)

    def count_all(self) -> int:
        """Total number of cards in the database, across every collection."""
        conn = get_connection()
        try:
            (count,) = conn.execute("SELECT COUNT(*) FROM cards;").fetchone()
            return count
        finally:
            release_connection(conn)

    def get_card_performance(self, card: Card) -> CardPerformance:
        """
        Load the memory state of a card.

        Raises:
            KeyError: If the card was never registered.
        """
        sql = f"SELECT {_PERFORMANCE_COLUMNS} FROM cards WHERE card_hash = ?;"
        conn = get_connection()
        try:
            row = conn.execute(sql, (card.card_hash,)).fetchone()
        finally:
            release_connection(conn)
        if row is None:
            raise KeyError(f"Card is not registered: {card}")
        return self._row_to_performance(row)

    def get_performances(self, hashes: Iterable[str]) -> dict[str, CardPerformance]:
        """
        Load memory states for many cards at once.
        Unknown hashes are simply absent from the result.
        """
        wanted = set(hashes)
        sql = f"SELECT {_PERFORMANCE_COLUMNS} FROM cards;"
        conn = get_connection()
        try:
            rows = conn.execute(sql).fetchall()
        finally:
            release_connection(conn)
        return {row[0]: self._row_to_performance(row) for row in rows if row[0] in wanted}

    def all_hashes(self) -> set[str]:
        conn = get_connection()
        try:
            return {row[0] for row in conn.execute("SELECT card_hash FROM cards;")}
        finally:
            release_connection(conn)

    def due_today(
        self,
        cards_by_hash: dict[str, Card],
        card_limit: Optional[int] = None,
        new_card_limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> list[Card]:
        """
        Select the cards of a collection that should be drilled now.

        Reviewed cards come first, oldest due date first, followed by new
        cards in the order they were added.

        Args:
            cards_by_hash: The collection, keyed by card hash.
            card_limit: Maximum number of cards overall.
            new_card_limit: Maximum number of never-reviewed cards.
            now: Reference time. Defaults to the current time.

        Returns:
            Cards from the collection, in drill order.
        """
        now_text = to_db(now or utcnow())
        reviewed_sql = """
            SELECT card_hash FROM cards
            WHERE review_count > 0 AND due_date <= ?
            ORDER BY due_date ASC, card_hash ASC;
        """
        new_sql = """
            SELECT card_hash FROM cards
            WHERE review_count = 0 OR due_date IS NULL
            ORDER BY added_at ASC, card_hash ASC;
        """
        conn = get_connection()
        try:
            reviewed = [row[0] for row in conn.execute(reviewed_sql, (now_text,))]
            fresh = [row[0] for row in conn.execute(new_sql)]
        finally:
            release_connection(conn)

        selected = [cards_by_hash[h] for h in reviewed if h in cards_by_hash]
        new_cards = [cards_by_hash[h] for h in fresh if h in cards_by_hash]
        if new_card_limit is not None:
            new_cards = new_cards[:new_card_limit]
        selected.extend(new_cards)

        if card_limit is not None:
            selected = selected[:card_limit]
        return selected

    # ── UPDATE ────────────────────────────────────────────

    def update_card_performance(
        self,
        card: Card,
        status: ReviewStatus,
        now: Optional[datetime] = None,
    ) -> bool:
        """
        Record a review: run the scheduler and persist the new state.

        Returns:
            True if the card's row was updated.
        """
        current = self.get_card_performance(card)
        updated = update_performance(current, status, now or utcnow())

        sql = """
            UPDATE cards
            SET last_reviewed_at = ?, stability = ?, difficulty = ?,
                interval_raw = ?, interval_days = ?, due_date = ?, review_count = ?
            WHERE card_hash = ?;
        """
        conn = get_connection()
        try:
            cur = conn.execute(sql, (
                to_db(updated.last_reviewed_at), updated.stability, updated.difficulty,
                updated.interval_raw, updated.interval_days, to_db(updated.due_date),
                updated.review_count, card.card_hash,
            ))
            changed = cur.rowcount > 0
            conn.commit()
            logger.info(
                f"Reviewed {card.card_hash[:12]} ({status.value}); "
                f"next due in {updated.interval_days} days"
            )
            return changed
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update card {card.card_hash[:12]}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete_cards(self, hashes: Iterable[str]) -> int:
        """Delete rows by hash. Returns how many were removed."""
        sql = "DELETE FROM cards WHERE card_hash = ?;"
        conn = get_connection()
        try:
            deleted = 0
            for card_hash in hashes:
                deleted += conn.execute(sql, (card_hash,)).rowcount
            conn.commit()
            if deleted:
                logger.info(f"Deleted {deleted} cards")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete cards: {e}")
            raise
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_performance(row: tuple) -> CardPerformance:
        """Convert a database row tuple to a CardPerformance domain object."""
        return CardPerformance(
            last_reviewed_at=from_db(row[1]),
            stability=row[2],
            difficulty=row[3],
            interval_raw=row[4],
            interval_days=row[5] or 0,
            due_date=from_db(row[6]),
            review_count=row[7],
        )
