from datetime import timedelta

import pytest

from models.performance import CardPerformance, ReviewStatus
from services import fsrs


def test_recall_is_certain_right_after_review():
    assert fsrs.calculate_recall(0, 5.0) == pytest.approx(1.0)


def test_recall_is_ninety_percent_after_one_stability():
    assert fsrs.calculate_recall(12.0, 12.0) == pytest.approx(0.9)


def test_interval_equals_stability_at_ninety_percent_retention():
    assert fsrs.next_interval(7.5, 0.9) == pytest.approx(7.5)
    assert fsrs.next_interval(7.5, 0.8) > 7.5


def test_first_pass(now):
    updated = fsrs.update_performance(CardPerformance(), ReviewStatus.PASS, now)

    assert updated.stability == pytest.approx(fsrs.WEIGHTS[2])
    assert updated.difficulty == pytest.approx(fsrs.WEIGHTS[4])
    assert updated.interval_days == 4
    assert updated.due_date == now + timedelta(days=4)
    assert updated.last_reviewed_at == now
    assert updated.review_count == 1


def test_first_fail_is_harder_and_due_tomorrow(now):
    updated = fsrs.update_performance(CardPerformance(), ReviewStatus.FAIL, now)

    assert updated.stability == pytest.approx(fsrs.WEIGHTS[0])
    assert updated.difficulty == pytest.approx(fsrs.WEIGHTS[4] + 2 * fsrs.WEIGHTS[5])
    assert updated.interval_days == 1
    assert updated.due_date == now + timedelta(days=1)


def test_pass_on_due_date_grows_stability(now):
    first = fsrs.update_performance(CardPerformance(), ReviewStatus.PASS, now)
    second = fsrs.update_performance(first, ReviewStatus.PASS, first.due_date)

    assert second.stability > first.stability
    assert second.interval_days > first.interval_days
    assert second.review_count == 2


def test_lapse_never_increases_stability(now):
    first = fsrs.update_performance(CardPerformance(), ReviewStatus.PASS, now)
    lapsed = fsrs.update_performance(first, ReviewStatus.FAIL, first.due_date)

    assert lapsed.stability <= first.stability
    assert lapsed.difficulty > first.difficulty
    assert lapsed.interval_days >= 1


def test_difficulty_stays_in_range(now):
    perf = CardPerformance()
    for day in range(30):
        perf = fsrs.update_performance(perf, ReviewStatus.FAIL, now + timedelta(days=day))
        assert fsrs.MIN_DIFFICULTY <= perf.difficulty <= fsrs.MAX_DIFFICULTY


def test_interval_is_capped(now):
    perf = CardPerformance()
    for _ in range(12):
        perf = fsrs.update_performance(perf, ReviewStatus.PASS, perf.due_date or now, max_interval_days=90)
    assert perf.interval_days == 90


def test_input_is_not_modified(now):
    original = CardPerformance()
    fsrs.update_performance(original, ReviewStatus.PASS, now)
    assert original.review_count == 0
    assert original.stability is None
