"""
services/export_service.py
--------------------------
Writes a collection's scheduling data to CSV or Excel.
"""

from pathlib import Path
from typing import Optional

import pandas as pd

from models.card import Card
from repositories.card_repo import CardRepository
from services.fsrs import SECONDS_PER_DAY, calculate_recall
from utils.clock import utcnow
from utils.logger import get_logger

logger = get_logger(__name__)

COLUMNS = [
    "card_hash", "file", "line", "kind", "question", "review_count",
    "stability", "difficulty", "interval_days", "due_date", "retrievability",
]


class ExportService:
    """Generates card reports in CSV and Excel formats."""

    def __init__(self, repo: Optional[CardRepository] = None):
        self.repo = repo or CardRepository()

    def build_frame(self, cards_by_hash: dict[str, Card]) -> pd.DataFrame:
        """One row per card, ordered by file and line."""
        now = utcnow()
        performances = self.repo.get_performances(cards_by_hash)
        data = []
        for card_hash, card in cards_by_hash.items():
            perf = performances.get(card_hash)
            retrievability = None
            if perf is not None and perf.last_reviewed_at and perf.stability:
                elapsed = (now - perf.last_reviewed_at).total_seconds() / SECONDS_PER_DAY
                retrievability = round(calculate_recall(elapsed, perf.stability), 4)
            data.append({
                "card_hash": card_hash,
                "file": str(card.file_path),
                "line": card.line_range[0],
                "kind": card.kind.value,
                "question": card.question,
                "review_count": perf.review_count if perf else 0,
                "stability": perf.stability if perf else None,
                "difficulty": perf.difficulty if perf else None,
                "interval_days": perf.interval_days if perf else 0,
                "due_date": perf.due_date.isoformat() if perf and perf.due_date else "",
                "retrievability": retrievability,
            })

        df = pd.DataFrame(data, columns=COLUMNS)
        if not df.empty:
            df = df.sort_values(["file", "line"]).reset_index(drop=True)
        return df

    def export_cards(self, cards_by_hash: dict[str, Card], destination: Path) -> int:
        """
        Export the collection to ``destination`` (``.csv`` or ``.xlsx``).

        Returns:
            Number of exported cards.

        Raises:
            ValueError: For any other file extension.
        """
        destination = Path(destination)
        suffix = destination.suffix.lower()
        if suffix not in (".csv", ".xlsx"):
            raise ValueError(f"Export file must end in .csv or .xlsx: {destination}")

        df = self.build_frame(cards_by_hash)
        destination.parent.mkdir(parents=True, exist_ok=True)

        if suffix == ".csv":
            df.to_csv(destination, index=False, encoding="utf-8")
        else:
            with pd.ExcelWriter(destination, engine="openpyxl") as writer:
                df.to_excel(writer, sheet_name="cards", index=False)
                if not df.empty:
                    summary = df.groupby("file").size().reset_index(name="cards")
                    summary.to_excel(writer, sheet_name="summary", index=False)

        logger.info(f"Exported {len(df)} cards to {destination}")
        return len(df)
