"""
models/performance.py
---------------------
Domain models for a card's review history and memory state.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from config import MATURE_INTERVAL_DAYS


class ReviewStatus(str, Enum):
    """Outcome of a single review."""
    PASS = "pass"
    FAIL = "fail"

    @property
    def rating(self) -> int:
        """FSRS grade: Good (3) for a pass, Again (1) for a fail."""
        return 3 if self is ReviewStatus.PASS else 1


class CardLifeCycle(str, Enum):
    NEW = "new"
    YOUNG = "young"
    MATURE = "mature"


@dataclass
class CardPerformance:
    """
    Memory state of a card as stored in the ``cards`` table.

    Attributes:
        last_reviewed_at: When the card was last answered.
        stability: Days until recall probability drops to 90%.
        difficulty: FSRS difficulty, 1 (easy) to 10 (hard).
        interval_raw: Unrounded interval in days from the scheduler.
        interval_days: Interval actually used to compute due_date.
        due_date: When the card is next due. None for new cards.
        review_count: Number of reviews so far; 0 means new.
    """
    last_reviewed_at: Optional[datetime] = None
    stability: Optional[float] = None
    difficulty: Optional[float] = None
    interval_raw: Optional[float] = None
    interval_days: int = 0
    due_date: Optional[datetime] = None
    review_count: int = 0

    def is_new(self) -> bool:
        """Returns True if the card has never been reviewed."""
        return self.review_count == 0

    @property
    def lifecycle(self) -> CardLifeCycle:
        if self.is_new():
            return CardLifeCycle.NEW
        if (self.interval_raw or 0.0) > MATURE_INTERVAL_DAYS:
            return CardLifeCycle.MATURE
        return CardLifeCycle.YOUNG
