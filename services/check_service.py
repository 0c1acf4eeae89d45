"""
services/check_service.py
-------------------------
Business logic behind ``repeat check``: register a collection and
summarize its state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from repositories.card_repo import CardRepository
from services.card_parser import ParseIssue
from services.collection_service import register_all_cards
from services.stats import CardStats
from utils.clock import utcnow
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class CheckReport:
    stats: CardStats
    issues: list[ParseIssue] = field(default_factory=list)
    pruned: int = 0


class CheckService:
    """
    Handles the ``check`` workflow.

    Workflow:
        1. Parse the collection and register new cards.
        2. Optionally delete rows whose card no longer exists.
        3. Fold every card's performance into CardStats.
    """

    def __init__(self, repo: Optional[CardRepository] = None):
        self.repo = repo or CardRepository()

    def run(
        self,
        paths: Iterable[str | Path],
        prune: bool = False,
        now: Optional[datetime] = None,
    ) -> CheckReport:
        now = now or utcnow()
        cards, issues = register_all_cards(paths, self.repo)

        pruned = 0
        if prune:
            stale = self.repo.all_hashes() - set(cards)
            pruned = self.repo.delete_cards(stale)

        stats = CardStats(total_cards_in_db=self.repo.count_all())
        performances = self.repo.get_performances(cards)
        for card_hash, card in cards.items():
            stats.update(card, performances[card_hash], now)

        logger.info(f"Checked {stats.num_cards} cards, {len(issues)} issues")
        return CheckReport(stats=stats, issues=issues, pruned=pruned)
