"""
services/stats.py
-----------------
Collection statistics: lifecycle counts, due forecast, and
difficulty / retrievability distributions.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path

from models.card import Card
from models.performance import CardLifeCycle, CardPerformance
from services.fsrs import SECONDS_PER_DAY, calculate_recall

WEEK = timedelta(days=7)
MONTH = timedelta(days=30)


@dataclass
class Histogram:
    """Fixed-width histogram over [0, 1]."""
    num_bins: int = 5
    bins: list[int] = field(default_factory=list)
    count: int = 0
    total: float = 0.0

    def __post_init__(self) -> None:
        if not self.bins:
            self.bins = [0] * self.num_bins

    def update(self, value: float) -> None:
        clamped = min(max(value, 0.0), 1.0)
        index = min(int(clamped * self.num_bins), self.num_bins - 1)
        self.bins[index] += 1
        self.count += 1
        self.total += value

    def mean(self) -> float:
        return self.total / self.count if self.count else 0.0


@dataclass
class CardStats:
    """
    Aggregated view of a collection.

    Attributes:
        total_cards_in_db: Rows in the database, any collection.
        num_cards: Cards in this collection.
        card_lifecycles: Count per CardLifeCycle.
        due_cards: Cards due now (new cards included).
        overdue_cards: Reviewed cards whose due date has passed.
        upcoming_week: ``YYYY-MM-DD`` -> cards due that day, next 7 days.
        upcoming_month: Cards coming due in the next 30 days.
        file_paths: Cards per markdown file.
    """
    total_cards_in_db: int = 0
    num_cards: int = 0
    card_lifecycles: Counter = field(default_factory=Counter)
    due_cards: int = 0
    overdue_cards: int = 0
    upcoming_week: dict[str, int] = field(default_factory=dict)
    upcoming_month: int = 0
    file_paths: Counter = field(default_factory=Counter)
    difficulty_histogram: Histogram = field(default_factory=Histogram)
    retrievability_histogram: Histogram = field(default_factory=Histogram)

    def update(self, card: Card, performance: CardPerformance, now: datetime) -> None:
        """Fold one card of the collection into the statistics."""
        self.num_cards += 1
        self.file_paths[Path(card.file_path)] += 1
        self.card_lifecycles[performance.lifecycle] += 1

        due_date = performance.due_date
        if due_date is None or due_date <= now:
            self.due_cards += 1
            if due_date is not None and due_date < now and not performance.is_new():
                self.overdue_cards += 1
        else:
            if due_date <= now + WEEK:
                day = due_date.strftime("%Y-%m-%d")
                self.upcoming_week[day] = self.upcoming_week.get(day, 0) + 1
            if due_date <= now + MONTH:
                self.upcoming_month += 1

        if performance.is_new():
            return

        self.difficulty_histogram.update((performance.difficulty or 0.0) / 10.0)
        if performance.last_reviewed_at is not None and performance.stability:
            elapsed_days = (now - performance.last_reviewed_at).total_seconds() / SECONDS_PER_DAY
            self.retrievability_histogram.update(
                calculate_recall(max(elapsed_days, 0.0), performance.stability)
            )

    def count(self, lifecycle: CardLifeCycle) -> int:
        return self.card_lifecycles.get(lifecycle, 0)

    def upcoming_week_total(self) -> int:
        return sum(self.upcoming_week.values())


def _bins(histogram: Histogram) -> str:
    return " ".join(str(b) for b in histogram.bins)


def format_stats(stats: CardStats) -> str:
    """Render statistics as the plain-text report printed by ``check``."""
    lines = [
        f"Cards: total {stats.num_cards} • new {stats.count(CardLifeCycle.NEW)} • "
        f"young {stats.count(CardLifeCycle.YOUNG)} • mature {stats.count(CardLifeCycle.MATURE)}",
        f"Due now: {stats.due_cards} ({stats.overdue_cards} overdue)",
    ]

    if stats.upcoming_week:
        lines.append(f"Due in next 7 days: {stats.upcoming_week_total()}")
        for day, count in sorted(stats.upcoming_week.items()):
            lines.append(f"  {day}: {count}")
    lines.append(f"Due in next 30 days: {stats.upcoming_month}")

    if stats.difficulty_histogram.count:
        lines.append(
            f"Difficulty: mean {stats.difficulty_histogram.mean() * 10:.2f}  "
            f"[{_bins(stats.difficulty_histogram)}]"
        )
    if stats.retrievability_histogram.count:
        lines.append(
            f"Retrievability: mean {stats.retrievability_histogram.mean():.2f}  "
            f"[{_bins(stats.retrievability_histogram)}]"
        )

    if stats.file_paths:
        lines.append("Files:")
        for path, count in sorted(stats.file_paths.items()):
            lines.append(f"  {path}: {count}")

    if stats.total_cards_in_db > stats.num_cards:
        lines.append(f"Database holds {stats.total_cards_in_db} cards in total.")
    return "\n".join(lines)
