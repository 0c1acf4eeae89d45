"""
services/collection_service.py
------------------------------
Loads a collection (markdown files and directories) and registers its
cards in the database.
"""

from pathlib import Path
from typing import Iterable

from models.card import Card
from repositories.card_repo import CardRepository
from services.card_parser import ParseIssue, parse_file
from utils.logger import get_logger
from utils.paths import collect_markdown_files

logger = get_logger(__name__)


def load_collection(paths: Iterable[str | Path]) -> tuple[dict[str, Card], list[ParseIssue]]:
    """
    Parse every markdown file reachable from ``paths``.

    Returns:
        Cards keyed by hash (the first occurrence wins) and all parse issues.
        A file that cannot be decoded becomes an issue; the rest still load.
    """
    cards: dict[str, Card] = {}
    issues: list[ParseIssue] = []
    for path in collect_markdown_files(paths):
        try:
            result = parse_file(path)
        except UnicodeDecodeError as e:
            logger.info(f"Skipping {path}: {e}")
            issues.append(ParseIssue(path, 1, "File is not valid UTF-8"))
            continue
        issues.extend(result.issues)
        for card in result.cards:
            cards.setdefault(card.card_hash, card)
    return cards, issues


def register_all_cards(
    paths: Iterable[str | Path],
    repo: CardRepository | None = None,
) -> tuple[dict[str, Card], list[ParseIssue]]:
    """
    Load a collection and make sure every card has a database row.

    Returns:
        Same as load_collection().
    """
    repo = repo or CardRepository()
    cards, issues = load_collection(paths)
    repo.add_cards_batch(cards.values())
    logger.info(f"Found {len(cards)} unique cards and registered them to the DB")
    return cards, issues
