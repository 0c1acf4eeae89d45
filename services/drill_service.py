"""
services/drill_service.py
-------------------------
Interactive review session behind ``repeat drill``.
Each answer is written to the database as soon as it is given, so
quitting part-way keeps every review made so far.
"""

from collections import deque
from dataclasses import dataclass
from typing import Iterable, Optional

from models.card import Card
from models.performance import ReviewStatus
from repositories.card_repo import CardRepository
from services.card_parser import CLOZE_MASK
from utils.logger import get_logger

logger = get_logger(__name__)

REVEAL_PROMPT = "Press Enter to reveal the answer (q to quit): "
GRADE_PROMPT = "Did you remember it? [y]es / [n]o / [q]uit: "

_ANSWERS = {
    "y": ReviewStatus.PASS,
    "yes": ReviewStatus.PASS,
    "p": ReviewStatus.PASS,
    "pass": ReviewStatus.PASS,
    "n": ReviewStatus.FAIL,
    "no": ReviewStatus.FAIL,
    "f": ReviewStatus.FAIL,
    "fail": ReviewStatus.FAIL,
}
_QUIT = {"q", "quit"}


class _Quit(Exception):
    """Raised inside a session when the user asks to stop."""


@dataclass
class DrillSummary:
    reviewed: int = 0
    passed: int = 0
    failed: int = 0
    quit_early: bool = False

    def __str__(self) -> str:
        text = f"Reviewed {self.reviewed} cards: {self.passed} passed, {self.failed} failed."
        if self.quit_early:
            text += " Session ended early."
        return text


class DrillSession:
    """
    Walks through due cards one by one.

    Cards answered wrong are shown once more at the end of the session;
    the second answer is recorded as another review.
    """

    def __init__(self, cards: Iterable[Card], repo: Optional[CardRepository] = None):
        self.cards = list(cards)
        self.repo = repo or CardRepository()

    def _ask(self, prompt: str) -> str:
        try:
            return input(prompt).strip().lower()
        except EOFError:
            raise _Quit()

    def _show_card(self, card: Card, position: int, total: int) -> ReviewStatus:
        print(f"\n[{position}/{total}] {card.file_path}")
        print(card.question)
        if self._ask(REVEAL_PROMPT) in _QUIT:
            raise _Quit()

        if card.is_cloze():
            print(f"{CLOZE_MASK} -> {', '.join(card.cloze_answers)}")
        print(card.answer)

        while True:
            reply = self._ask(GRADE_PROMPT)
            if reply in _QUIT:
                raise _Quit()
            if reply in _ANSWERS:
                return _ANSWERS[reply]
            print("Please answer y, n or q.")

    def run(self) -> DrillSummary:
        summary = DrillSummary()
        if not self.cards:
            return summary

        queue = deque((card, False) for card in self.cards)
        total = len(queue)
        position = 0
        while queue:
            card, is_retry = queue.popleft()
            position += 1
            try:
                status = self._show_card(card, position, total)
            except _Quit:
                summary.quit_early = True
                break

            self.repo.update_card_performance(card, status)
            summary.reviewed += 1
            if status is ReviewStatus.PASS:
                summary.passed += 1
            else:
                summary.failed += 1
                if not is_retry:
                    queue.append((card, True))
                    total += 1

        logger.info(str(summary))
        return summary


def select_due_cards(
    cards_by_hash: dict[str, Card],
    card_limit: Optional[int] = None,
    new_card_limit: Optional[int] = None,
    repo: Optional[CardRepository] = None,
) -> list[Card]:
    """Pick the cards of a collection that are due, in drill order."""
    repo = repo or CardRepository()
    return repo.due_today(cards_by_hash, card_limit=card_limit, new_card_limit=new_card_limit)
