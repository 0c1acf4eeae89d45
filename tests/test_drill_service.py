from pathlib import Path

from models.card import Card, CardKind
from models.performance import ReviewStatus
from repositories.card_repo import CardRepository
from services.drill_service import DrillSession, select_due_cards


def registered(*questions):
    repo = CardRepository()
    cards = [Card(Path("deck.md"), (1, 2), CardKind.BASIC, q, f"answer to {q}") for q in questions]
    repo.add_cards_batch(cards)
    return repo, cards


def test_pass_and_fail_are_persisted_and_failures_repeat(db_path, feed_input, capsys):
    repo, (first, second) = registered("first", "second")
    feed_input(["", "y", "", "n", "", "y"])

    summary = DrillSession([first, second], repo).run()

    assert (summary.reviewed, summary.passed, summary.failed) == (3, 2, 1)
    assert summary.quit_early is False
    assert repo.get_card_performance(first).review_count == 1
    assert repo.get_card_performance(second).review_count == 2
    out = capsys.readouterr().out
    assert "[3/3] deck.md" in out
    assert "answer to second" in out


def test_quit_before_reveal_keeps_card_untouched(db_path, feed_input):
    repo, (card,) = registered("only")
    feed_input(["q"])

    summary = DrillSession([card], repo).run()

    assert summary.quit_early is True
    assert summary.reviewed == 0
    assert repo.get_card_performance(card).is_new()


def test_unknown_reply_asks_again(db_path, feed_input, capsys):
    repo, (card,) = registered("only")
    prompts = feed_input(["", "maybe", "p"])

    summary = DrillSession([card], repo).run()

    assert summary.passed == 1
    assert "Please answer y, n or q." in capsys.readouterr().out
    assert len(prompts) == 3


def test_end_of_input_ends_session(db_path, feed_input):
    repo, cards = registered("a", "b")
    feed_input(["", "yes"])

    summary = DrillSession(cards, repo).run()

    assert summary.reviewed == 1
    assert summary.quit_early is True
    assert str(summary) == "Reviewed 1 cards: 1 passed, 0 failed. Session ended early."


def test_cloze_answers_are_shown(db_path, feed_input, capsys):
    repo = CardRepository()
    card = Card(Path("c.md"), (1, 1), CardKind.CLOZE, "The [...] sat.", "The [cat] sat.", ["cat"])
    repo.add_card(card)
    feed_input(["", "y"])

    DrillSession([card], repo).run()

    assert "[...] -> cat" in capsys.readouterr().out


def test_empty_session():
    summary = DrillSession([]).run()
    assert summary.reviewed == 0


def test_select_due_cards_skips_reviewed_cards(db_path):
    repo, (done, waiting) = registered("done", "waiting")
    repo.update_card_performance(done, ReviewStatus.PASS)

    due = select_due_cards({c.card_hash: c for c in (done, waiting)}, repo=repo)

    assert due == [waiting]
