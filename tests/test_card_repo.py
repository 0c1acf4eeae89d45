from datetime import timedelta
from pathlib import Path

import pytest

from models.card import Card, CardKind
from models.performance import ReviewStatus
from repositories.card_repo import CardRepository


def make_card(question: str, answer: str = "answer", path: str = "deck.md") -> Card:
    return Card(
        file_path=Path(path),
        line_range=(1, 2),
        kind=CardKind.BASIC,
        question=question,
        answer=answer,
    )


def test_add_card_is_idempotent(db_path):
    repo = CardRepository()
    card = make_card("q1")

    assert repo.add_card(card) is True
    assert repo.add_card(card) is False
    assert repo.card_exists(card)
    assert repo.count_all() == 1


def test_add_cards_batch_counts_new_rows(db_path):
    repo = CardRepository()
    repo.add_card(make_card("q1"))

    inserted = repo.add_cards_batch([make_card("q1"), make_card("q2"), make_card("q3")])

    assert inserted == 2
    assert repo.count_all() == 3


def test_new_card_performance(db_path):
    repo = CardRepository()
    card = make_card("q1")
    repo.add_card(card)

    perf = repo.get_card_performance(card)

    assert perf.is_new()
    assert perf.due_date is None
    assert perf.stability is None


def test_unknown_card_raises_key_error(db_path):
    with pytest.raises(KeyError):
        CardRepository().get_card_performance(make_card("never added"))


def test_update_card_performance_persists_schedule(db_path, now):
    repo = CardRepository()
    card = make_card("q1")
    repo.add_card(card)

    assert repo.update_card_performance(card, ReviewStatus.PASS, now=now) is True

    perf = repo.get_card_performance(card)
    assert perf.review_count == 1
    assert perf.last_reviewed_at == now
    assert perf.due_date == now + timedelta(days=perf.interval_days)
    assert perf.due_date.tzinfo is not None


def test_due_today_orders_reviewed_before_new(db_path, now):
    repo = CardRepository()
    fresh, overdue, future, stranger = (make_card(q) for q in ("new", "overdue", "future", "stranger"))
    repo.add_cards_batch([fresh, overdue, future, stranger])
    repo.update_card_performance(overdue, ReviewStatus.PASS, now=now - timedelta(days=10))
    repo.update_card_performance(future, ReviewStatus.PASS, now=now)

    collection = {c.card_hash: c for c in (fresh, overdue, future)}
    due = repo.due_today(collection, now=now)

    assert [c.question for c in due] == ["overdue", "new"]


def test_due_today_limits(db_path, now):
    repo = CardRepository()
    cards = [make_card(f"q{i}") for i in range(4)]
    repo.add_cards_batch(cards)
    repo.update_card_performance(cards[0], ReviewStatus.PASS, now=now - timedelta(days=30))
    collection = {c.card_hash: c for c in cards}

    assert len(repo.due_today(collection, now=now)) == 4
    assert [c.question for c in repo.due_today(collection, new_card_limit=0, now=now)] == ["q0"]
    assert len(repo.due_today(collection, new_card_limit=2, now=now)) == 3
    assert len(repo.due_today(collection, card_limit=2, now=now)) == 2


def test_get_performances_skips_unknown(db_path):
    repo = CardRepository()
    known = make_card("known")
    repo.add_card(known)

    perfs = repo.get_performances([known.card_hash, "f" * 64])

    assert list(perfs) == [known.card_hash]


def test_delete_cards(db_path):
    repo = CardRepository()
    keep, drop = make_card("keep"), make_card("drop")
    repo.add_cards_batch([keep, drop])

    assert repo.delete_cards([drop.card_hash]) == 1
    assert repo.all_hashes() == {keep.card_hash}
