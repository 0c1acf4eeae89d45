import os
from pathlib import Path

import pytest

from utils.paths import collect_markdown_files, is_markdown, validate_file


def test_is_markdown_ignores_case(tmp_path):
    assert is_markdown(tmp_path / "Notes.MD")
    assert not is_markdown(tmp_path / "notes.txt")


def test_validate_file_strips_whitespace():
    assert str(validate_file("  deck.md ")) == "deck.md"


def test_collect_expands_directories_in_order(tmp_path):
    (tmp_path / "b.md").write_text("", encoding="utf-8")
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "z.md").write_text("", encoding="utf-8")
    (tmp_path / "a" / "image.png").write_bytes(b"")

    files = collect_markdown_files([tmp_path, tmp_path / "b.md"])

    assert files == [tmp_path / "a" / "z.md", tmp_path / "b.md"]


def test_collect_rejects_missing_and_non_markdown(tmp_path):
    with pytest.raises(FileNotFoundError):
        collect_markdown_files([tmp_path / "missing"])

    other = tmp_path / "notes.txt"
    other.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        collect_markdown_files([other])


def test_collect_does_not_enter_hidden_directories(tmp_path, monkeypatch):
    (tmp_path / ".git" / "objects").mkdir(parents=True)
    (tmp_path / ".git" / "objects" / "stray.md").write_text("", encoding="utf-8")
    (tmp_path / ".draft.md").write_text("", encoding="utf-8")
    (tmp_path / "deck.md").write_text("", encoding="utf-8")

    visited = []
    real_walk = os.walk

    def recording_walk(top, *args, **kwargs):
        for entry in real_walk(top, *args, **kwargs):
            visited.append(Path(entry[0]))
            yield entry

    monkeypatch.setattr(os, "walk", recording_walk)

    assert collect_markdown_files([tmp_path]) == [tmp_path / "deck.md"]
    assert visited == [tmp_path]
