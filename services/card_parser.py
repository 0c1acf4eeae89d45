"""
services/card_parser.py
-----------------------
Turns markdown text into Card objects.

Card syntax:
    Q: front of the card
    A: back of the card

    C: The [hidden] words are [cloze] spans.

A card starts on a ``Q:`` or ``C:`` line and runs until the next card,
a ``---`` separator line, or the end of the file. Anything before the
first card is ordinary markdown and is ignored.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

from models.card import Card, CardKind
from utils.logger import get_logger

logger = get_logger(__name__)

_CARD_START = re.compile(r"^(Q|C):\s?(.*)$")
_ANSWER_START = re.compile(r"^A:\s?(.*)$")
_SEPARATOR = "---"
# [span] but not a markdown link [text](url)
_CLOZE_SPAN = re.compile(r"\[([^\[\]]+)\](?!\()")
CLOZE_MASK = "[...]"


@dataclass
class ParseIssue:
    """A card that could not be read, with its location."""
    file_path: Path
    line: int
    message: str

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line}: {self.message}"


@dataclass
class ParseResult:
    cards: list[Card] = field(default_factory=list)
    issues: list[ParseIssue] = field(default_factory=list)


@dataclass
class _Block:
    prefix: str
    start: int
    lines: list[tuple[int, str]]

    def end(self) -> int:
        for number, text in reversed(self.lines):
            if text.strip():
                return number
        return self.start


def _clean(lines: list[str]) -> str:
    """Join lines and trim surrounding blank lines and whitespace."""
    return "\n".join(lines).strip()


def first_loose_line(text: str) -> int | None:
    """
    Line number of the first non-blank text that sits before any card or
    ``---`` separator, or None. Appended to a file, such text would become
    part of the file's last card.
    """
    for number, line in enumerate(text.splitlines(), start=1):
        if _CARD_START.match(line) or line.strip() == _SEPARATOR:
            return None
        if line.strip():
            return number
    return None


def _split_blocks(text: str) -> list[_Block]:
    blocks: list[_Block] = []
    current: _Block | None = None
    for number, line in enumerate(text.splitlines(), start=1):
        match = _CARD_START.match(line)
        if match:
            current = _Block(prefix=match.group(1), start=number, lines=[(number, match.group(2))])
            blocks.append(current)
        elif line.strip() == _SEPARATOR:
            current = None
        elif current is not None:
            current.lines.append((number, line))
    return blocks


def _basic_card(block: _Block, file_path: Path) -> Card | ParseIssue:
    question_lines: list[str] = []
    answer_lines: list[str] | None = None
    for index, (_, line) in enumerate(block.lines):
        if answer_lines is None:
            match = _ANSWER_START.match(line) if index > 0 else None
            if match:
                answer_lines = [match.group(1)]
            else:
                question_lines.append(line)
        else:
            answer_lines.append(line)

    if answer_lines is None:
        return ParseIssue(file_path, block.start, "Card is missing an 'A:' line")

    question = _clean(question_lines)
    answer = _clean(answer_lines)
    if not question:
        return ParseIssue(file_path, block.start, "Card question is empty")
    if not answer:
        return ParseIssue(file_path, block.start, "Card answer is empty")

    return Card(
        file_path=file_path,
        line_range=(block.start, block.end()),
        kind=CardKind.BASIC,
        question=question,
        answer=answer,
    )


def _cloze_card(block: _Block, file_path: Path) -> Card | ParseIssue:
    text = _clean([line for _, line in block.lines])
    spans = _CLOZE_SPAN.findall(text)
    if not spans:
        return ParseIssue(file_path, block.start, "Cloze card has no [bracketed] span")

    return Card(
        file_path=file_path,
        line_range=(block.start, block.end()),
        kind=CardKind.CLOZE,
        question=_CLOZE_SPAN.sub(CLOZE_MASK, text),
        answer=text,
        cloze_answers=[span.strip() for span in spans],
    )


def parse_cards(text: str, file_path: Path) -> ParseResult:
    """
    Parse every card in a markdown document.

    Args:
        text: Markdown content.
        file_path: Where the text came from, recorded on each card.

    Returns:
        ParseResult with the valid cards and one issue per malformed card.
    """
    result = ParseResult()
    for block in _split_blocks(text):
        builder = _cloze_card if block.prefix == "C" else _basic_card
        parsed = builder(block, file_path)
        if isinstance(parsed, ParseIssue):
            logger.info(str(parsed))
            result.issues.append(parsed)
        else:
            result.cards.append(parsed)
    return result


def parse_file(path: Path) -> ParseResult:
    """Read a markdown file and parse its cards."""
    result = parse_cards(path.read_text(encoding="utf-8"), path)
    logger.info(f"Parsed {len(result.cards)} cards from {path}")
    return result
