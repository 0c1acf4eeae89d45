"""
services/create_service.py
--------------------------
Business logic behind ``repeat create``: append a new card to a
markdown file, creating the file on confirmation.
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path

from services.card_parser import ParseIssue, first_loose_line, parse_cards
from utils.logger import get_logger
from utils.paths import validate_file

logger = get_logger(__name__)

CREATE_PROMPT = "Card '{path}' does not exist. Create it? [y/N]: "


@dataclass
class CreateResult:
    card_path: Path
    written: bool
    message: str
    issues: list[ParseIssue] = field(default_factory=list)


def prompt_create(path: Path) -> bool:
    """Ask whether a missing card file should be created."""
    try:
        answer = input(CREATE_PROMPT.format(path=path))
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def capture_card_text() -> str:
    """Read the card body from stdin until end of input."""
    if sys.stdin.isatty():
        print("Type the card, then press Ctrl-D to save (Ctrl-C to cancel).")
    return sys.stdin.read()


def append_to_card(path: Path, contents: str) -> bool:
    """
    Append text to a card file, separated from existing content by a
    blank line.

    Returns:
        True if anything was written.
    """
    trimmed = contents.rstrip("\n")
    if not trimmed.strip():
        return False

    has_existing_content = path.exists() and path.stat().st_size > 0
    with open(path, "a", encoding="utf-8") as f:
        if has_existing_content:
            f.write("\n")
        f.write(trimmed + "\n")
    return True


def create_card(raw_path: str) -> CreateResult:
    """
    Run the whole create flow for one card file.

    Raises:
        ValueError: If the path is not a usable markdown file path.
    """
    card_path = validate_file(raw_path)

    if not card_path.is_file():
        if not prompt_create(card_path):
            return CreateResult(card_path, False, "Aborting; card not created.")
        card_path.parent.mkdir(parents=True, exist_ok=True)

    existing_lines = len(card_path.read_text(encoding="utf-8").splitlines()) if card_path.is_file() else 0
    body = capture_card_text()

    # loose text would be read as the tail of the file's last card
    loose = first_loose_line(body) if existing_lines else None
    if loose is not None:
        issue = ParseIssue(
            card_path, existing_lines + 1 + loose,
            "Text before the first 'Q:' or 'C:' line would join the previous card",
        )
        logger.info(str(issue))
        message = "Card text must start with 'Q:' or 'C:'; nothing written."
        return CreateResult(card_path, False, message, [issue])

    if not append_to_card(card_path, body):
        return CreateResult(card_path, False, "No text captured; nothing written.")

    # only report problems in the text that was just added
    parsed = parse_cards(card_path.read_text(encoding="utf-8"), card_path)
    issues = [issue for issue in parsed.issues if issue.line > existing_lines]
    logger.info(f"Appended card text to {card_path}")
    return CreateResult(card_path, True, f"Card updated: {card_path}", issues)
