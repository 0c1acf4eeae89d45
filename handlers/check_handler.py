"""
handlers/check_handler.py
-------------------------
Handles ``repeat check [paths ...]``.
Registers the collection and prints its statistics.
"""

import argparse
import sys

from handlers.errors import reports_errors
from services.chart_service import render_stats_chart
from services.check_service import CheckService
from services.stats import format_stats
from utils.logger import get_logger

logger = get_logger(__name__)


@reports_errors
def check_command(args: argparse.Namespace) -> int:
    """
    Register every card under ``args.paths`` and print collection stats.

    Options:
        --prune: delete database rows for cards missing from the paths.
        --chart PNG: also save the statistics as a chart.
    """
    report = CheckService().run(args.paths, prune=args.prune)
    logger.info(f"check {args.paths}: {report.stats.num_cards} cards, {len(report.issues)} issues")

    for issue in report.issues:
        print(f"warning: {issue}", file=sys.stderr)
    print(f"Found {report.stats.num_cards} unique cards and registered them to the DB", file=sys.stderr)
    if report.pruned:
        print(f"Pruned {report.pruned} cards no longer in the collection.", file=sys.stderr)

    print(format_stats(report.stats))

    if args.chart:
        written = render_stats_chart(report.stats, args.chart)
        if written:
            print(f"Chart saved to {written}")
        else:
            print("No cards; chart not written.")
    return 0
