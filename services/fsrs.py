"""
services/fsrs.py
----------------
FSRS-4.5 memory model: recall probability, difficulty and stability
updates, and the next review interval.

Reference: https://github.com/open-spaced-repetition/fsrs4anki/wiki/The-Algorithm
"""

import math
from datetime import datetime, timedelta

from config import DESIRED_RETENTION, MAX_INTERVAL_DAYS
from models.performance import CardPerformance, ReviewStatus

# Default FSRS-4.5 parameters w[0] .. w[16]
WEIGHTS: tuple[float, ...] = (
    0.4872, 1.4003, 3.7145, 13.8206,
    5.1618, 1.2298, 0.8975, 0.031,
    1.6474, 0.1367, 1.0461, 2.1072,
    0.0793, 0.3246, 1.587, 0.2272,
    2.8755,
)
DECAY = -0.5
FACTOR = 0.9 ** (1 / DECAY) - 1  # 19/81

MIN_DIFFICULTY = 1.0
MAX_DIFFICULTY = 10.0
SECONDS_PER_DAY = 86_400.0


def calculate_recall(elapsed_days: float, stability: float) -> float:
    """Probability of recalling a card ``elapsed_days`` after the last review."""
    if stability <= 0:
        return 0.0
    return (1 + FACTOR * max(elapsed_days, 0.0) / stability) ** DECAY


def next_interval(stability: float, desired_retention: float = DESIRED_RETENTION) -> float:
    """Days until recall probability falls to ``desired_retention``."""
    return stability / FACTOR * (desired_retention ** (1 / DECAY) - 1)


def _clamp_difficulty(difficulty: float) -> float:
    return min(max(difficulty, MIN_DIFFICULTY), MAX_DIFFICULTY)


def initial_stability(rating: int) -> float:
    return WEIGHTS[rating - 1]


def initial_difficulty(rating: int) -> float:
    return _clamp_difficulty(WEIGHTS[4] - (rating - 3) * WEIGHTS[5])


def next_difficulty(difficulty: float, rating: int) -> float:
    """Shift difficulty by the grade, then revert towards the default."""
    shifted = difficulty - WEIGHTS[6] * (rating - 3)
    reverted = WEIGHTS[7] * initial_difficulty(3) + (1 - WEIGHTS[7]) * shifted
    return _clamp_difficulty(reverted)


def stability_after_recall(difficulty: float, stability: float, retrievability: float) -> float:
    growth = (
        math.exp(WEIGHTS[8])
        * (11 - difficulty)
        * stability ** -WEIGHTS[9]
        * (math.exp(WEIGHTS[10] * (1 - retrievability)) - 1)
    )
    return stability * (growth + 1)


def stability_after_lapse(difficulty: float, stability: float, retrievability: float) -> float:
    lapsed = (
        WEIGHTS[11]
        * difficulty ** -WEIGHTS[12]
        * ((stability + 1) ** WEIGHTS[13] - 1)
        * math.exp(WEIGHTS[14] * (1 - retrievability))
    )
    # Forgetting never makes a memory more stable.
    return min(lapsed, stability)


def update_performance(
    performance: CardPerformance,
    status: ReviewStatus,
    now: datetime,
    desired_retention: float = DESIRED_RETENTION,
    max_interval_days: int = MAX_INTERVAL_DAYS,
) -> CardPerformance:
    """
    Apply one review to a card's memory state.

    Args:
        performance: Current state (``review_count == 0`` for a new card).
        status: Pass or fail.
        now: Time of the review (timezone-aware).
        desired_retention: Target recall probability at the due date.
        max_interval_days: Upper bound for the scheduled interval.

    Returns:
        A new CardPerformance; the input is not modified.
    """
    rating = status.rating

    if performance.is_new() or performance.stability is None or performance.difficulty is None:
        stability = initial_stability(rating)
        difficulty = initial_difficulty(rating)
    else:
        last = performance.last_reviewed_at or now
        elapsed_days = (now - last).total_seconds() / SECONDS_PER_DAY
        retrievability = calculate_recall(elapsed_days, performance.stability)
        difficulty = next_difficulty(performance.difficulty, rating)
        if status is ReviewStatus.PASS:
            stability = stability_after_recall(performance.difficulty, performance.stability, retrievability)
        else:
            stability = stability_after_lapse(performance.difficulty, performance.stability, retrievability)

    interval_raw = next_interval(stability, desired_retention)
    interval_days = int(min(max(round(interval_raw), 1), max_interval_days))

    return CardPerformance(
        last_reviewed_at=now,
        stability=stability,
        difficulty=difficulty,
        interval_raw=interval_raw,
        interval_days=interval_days,
        due_date=now + timedelta(days=interval_days),
        review_count=performance.review_count + 1,
    )
