"""
handlers/export_handler.py
--------------------------
Handles ``repeat export <destination> [paths ...]``.
Delegates to ExportService.
"""

import argparse

from handlers.errors import reports_errors
from services.collection_service import register_all_cards
from services.export_service import ExportService
from utils.logger import get_logger

logger = get_logger(__name__)


@reports_errors
def export_command(args: argparse.Namespace) -> int:
    """Write the collection's scheduling data to CSV or Excel."""
    cards, _ = register_all_cards(args.paths)
    count = ExportService().export_cards(cards, args.destination)
    logger.info(f"export {args.paths} -> {args.destination}: {count} rows")
    print(f"Exported {count} cards to {args.destination}")
    return 0
