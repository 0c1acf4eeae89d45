from datetime import datetime, timezone

import pytest

from db.connection import close_connection, init_connection
from db.init_db import create_tables


@pytest.fixture
def db_path(tmp_path):
    path = init_connection(tmp_path / "cards.db")
    create_tables()
    yield path
    close_connection()


@pytest.fixture
def now():
    return datetime(2026, 1, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def feed_input(monkeypatch):
    """Replace input() with a scripted list of replies; EOF once exhausted."""
    def _feed(replies):
        remaining = list(replies)
        prompts = []

        def fake_input(prompt=""):
            prompts.append(prompt)
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        monkeypatch.setattr("builtins.input", fake_input)
        return prompts

    return _feed
