"""
handlers/drill_handler.py
-------------------------
Handles ``repeat drill [paths ...]``.
"""

import argparse

from handlers.errors import reports_errors
from services.collection_service import register_all_cards
from services.drill_service import DrillSession, select_due_cards
from utils.logger import get_logger

logger = get_logger(__name__)


@reports_errors
def drill_command(args: argparse.Namespace) -> int:
    """Review the due cards of a collection."""
    cards, issues = register_all_cards(args.paths)
    if issues:
        print(f"Skipped {len(issues)} malformed cards; run `repeat check` for details.")

    due = select_due_cards(cards, card_limit=args.card_limit, new_card_limit=args.new_card_limit)
    logger.info(f"drill {args.paths}: {len(due)} of {len(cards)} cards due")
    if not due:
        print("No cards due. Nice work!")
        return 0

    print(f"{len(due)} of {len(cards)} cards due.")
    summary = DrillSession(due).run()
    print(f"\n{summary}")
    return 0
