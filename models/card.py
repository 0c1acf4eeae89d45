"""
models/card.py
--------------
Domain model for a single flashcard parsed out of a markdown file.
"""

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class CardKind(str, Enum):
    """The two card shapes the parser understands."""
    BASIC = "basic"
    CLOZE = "cloze"


@dataclass
class Card:
    """
    Represents a single flashcard.

    Attributes:
        file_path: Markdown file that holds the card.
        line_range: First and last 1-based line numbers of the card.
        kind: Basic (question/answer) or cloze (fill in the blanks).
        question: Front side. For cloze cards, the text with spans masked.
        answer: Back side. For cloze cards, the full text.
        cloze_answers: The hidden spans of a cloze card, in order.
        card_hash: Content hash used as the database key.
    """
    file_path: Path
    line_range: tuple[int, int]
    kind: CardKind
    question: str
    answer: str
    cloze_answers: list[str] = field(default_factory=list)
    card_hash: str = ""

    def __post_init__(self) -> None:
        if not self.card_hash:
            self.card_hash = content_hash(self.kind, self.question, self.answer)

    def is_cloze(self) -> bool:
        """Returns True if this is a cloze card."""
        return self.kind is CardKind.CLOZE

    def __str__(self) -> str:
        start, end = self.line_range
        first_line = self.question.splitlines()[0] if self.question else ""
        return f"{self.file_path}:{start}-{end} [{self.kind.value}] {first_line}"


def content_hash(kind: CardKind, question: str, answer: str) -> str:
    """
    Hash the card content. Location never takes part, so the same card in
    two files maps to the same database row.
    """
    if kind is CardKind.CLOZE:
        payload = f"C:{answer}"
    else:
        payload = f"Q:{question}\nA:{answer}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
