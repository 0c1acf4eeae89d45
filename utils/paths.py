"""
utils/paths.py
--------------
Filesystem helpers: validating card files and discovering markdown files
inside a collection.
"""

import os
from pathlib import Path
from typing import Iterable

MARKDOWN_SUFFIX = ".md"


def is_markdown(path: Path) -> bool:
    """Returns True if the path has a ``.md`` extension (any case)."""
    return path.suffix.lower() == MARKDOWN_SUFFIX


def validate_file(raw_path: str) -> Path:
    """
    Validate a path given for a single card file.

    Args:
        raw_path: Path as typed by the user.

    Returns:
        The cleaned Path.

    Raises:
        ValueError: If the path is empty, a directory, or not markdown.
    """
    cleaned = raw_path.strip()
    if not cleaned:
        raise ValueError("Card path cannot be empty")

    card_path = Path(cleaned)
    if card_path.is_dir():
        raise ValueError(f"Card path cannot be a directory: {card_path}")
    if not is_markdown(card_path):
        raise ValueError(f"Card path must be a markdown file: {card_path}")
    return card_path


def collect_markdown_files(paths: Iterable[str | Path]) -> list[Path]:
    """
    Expand files and directories into a sorted, de-duplicated list of
    markdown files. Directories are walked recursively; hidden entries
    (names starting with ``.``) are skipped.

    Raises:
        FileNotFoundError: If a path does not exist.
        ValueError: If a file given explicitly is not markdown.
    """
    found: dict[Path, None] = {}
    for raw in paths:
        path = Path(raw)
        if not path.exists():
            raise FileNotFoundError(f"Path does not exist: {path}")

        if path.is_file():
            if not is_markdown(path):
                raise ValueError(f"Card path must be a markdown file: {path}")
            found[path] = None
            continue

        for candidate in _walk_markdown(path):
            found[candidate] = None

    return list(found)


def _walk_markdown(root: Path) -> list[Path]:
    """Markdown files under ``root``, sorted, without descending into hidden directories."""
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if not name.startswith(".")]
        files.extend(
            Path(dirpath) / name
            for name in filenames
            if not name.startswith(".") and is_markdown(Path(name))
        )
    return sorted(files)
