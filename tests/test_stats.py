from datetime import timedelta
from pathlib import Path

import pytest

from models.card import Card, CardKind
from models.performance import CardLifeCycle, CardPerformance
from services.stats import CardStats, Histogram, format_stats


def card(question: str, path: str = "deck.md") -> Card:
    return Card(Path(path), (1, 2), CardKind.BASIC, question, "a")


def reviewed(now, due_in_days: float, interval: float) -> CardPerformance:
    return CardPerformance(
        last_reviewed_at=now - timedelta(days=2),
        stability=interval,
        difficulty=5.0,
        interval_raw=interval,
        interval_days=round(interval),
        due_date=now + timedelta(days=due_in_days),
        review_count=1,
    )


def test_histogram_bins_and_mean():
    hist = Histogram()
    for value in (1.0, -0.2, 0.39, 0.5):
        hist.update(value)

    assert hist.bins == [1, 1, 1, 0, 1]
    assert hist.count == 4
    assert hist.mean() == pytest.approx((1.0 - 0.2 + 0.39 + 0.5) / 4)


def test_empty_histogram_mean_is_zero():
    assert Histogram().mean() == 0.0


def test_stats_buckets(now):
    stats = CardStats()
    stats.update(card("new"), CardPerformance(), now)
    stats.update(card("overdue"), reviewed(now, -2, 4), now)
    stats.update(card("soon", "other.md"), reviewed(now, 3, 30), now)
    stats.update(card("later", "other.md"), reviewed(now, 20, 25), now)

    assert stats.num_cards == 4
    assert stats.count(CardLifeCycle.NEW) == 1
    assert stats.count(CardLifeCycle.YOUNG) == 1
    assert stats.count(CardLifeCycle.MATURE) == 2
    assert stats.due_cards == 2
    assert stats.overdue_cards == 1
    assert stats.upcoming_week == {"2026-01-13": 1}
    assert stats.upcoming_month == 2
    assert stats.file_paths == {Path("deck.md"): 2, Path("other.md"): 2}
    assert stats.difficulty_histogram.count == 3
    assert stats.difficulty_histogram.bins[2] == 3
    assert stats.retrievability_histogram.count == 3


def test_format_stats(now):
    stats = CardStats(total_cards_in_db=9)
    stats.update(card("new"), CardPerformance(), now)
    stats.update(card("overdue"), reviewed(now, -2, 4), now)
    stats.update(card("soon"), reviewed(now, 3, 30), now)
    stats.update(card("later"), reviewed(now, 20, 25), now)

    text = format_stats(stats)

    assert "Cards: total 4 • new 1 • young 1 • mature 2" in text
    assert "Due now: 2 (1 overdue)" in text
    assert "Due in next 7 days: 1\n  2026-01-13: 1" in text
    assert "Due in next 30 days: 2" in text
    assert "Difficulty: mean 5.00  [0 0 3 0 0]" in text
    assert "  deck.md: 4" in text
    assert "Database holds 9 cards in total." in text


def test_format_stats_for_empty_collection():
    text = format_stats(CardStats())
    assert text.splitlines() == [
        "Cards: total 0 • new 0 • young 0 • mature 0",
        "Due now: 0 (0 overdue)",
        "Due in next 30 days: 0",
    ]
