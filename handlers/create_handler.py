"""
handlers/create_handler.py
--------------------------
Handles ``repeat create <card_path>``.
"""

import argparse
import sys

from handlers.errors import reports_errors
from services.create_service import create_card
from utils.logger import get_logger

logger = get_logger(__name__)


@reports_errors
def create_command(args: argparse.Namespace) -> int:
    """Append a card read from stdin to a markdown file."""
    result = create_card(args.card_path)
    logger.info(f"create {result.card_path}: written={result.written}")
    print(result.message)
    for issue in result.issues:
        print(f"warning: {issue}", file=sys.stderr)
    return 0
