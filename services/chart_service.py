"""
services/chart_service.py
-------------------------
Renders collection statistics as a PNG: due forecast for the coming
week plus the difficulty and retrievability distributions.
"""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend, no display needed
import matplotlib.pyplot as plt

from services.stats import CardStats, Histogram
from utils.clock import utcnow
from utils.logger import get_logger

logger = get_logger(__name__)

_BAR_COLOR = "#45B7D1"
_HIST_COLORS = ["#FF6B6B", "#F8C471", "#FFEAA7", "#96CEB4", "#4ECDC4"]


def _week_days(now: datetime) -> list[str]:
    return [(now + timedelta(days=d)).strftime("%Y-%m-%d") for d in range(8)]


def _histogram_panel(ax, histogram: Histogram, title: str, scale: float = 1.0) -> None:
    edges = [i / histogram.num_bins * scale for i in range(histogram.num_bins + 1)]
    labels = [f"{lo:.1f}-{hi:.1f}" for lo, hi in zip(edges, edges[1:])]
    ax.bar(range(histogram.num_bins), histogram.bins,
           color=_HIST_COLORS[:histogram.num_bins], width=0.7, zorder=3)
    ax.set_xticks(range(histogram.num_bins))
    ax.set_xticklabels(labels, fontsize=8)
    ax.set_title(f"{title}\nmean {histogram.mean() * scale:.2f}", fontsize=11)
    ax.grid(axis="y", alpha=0.3)
    ax.set_axisbelow(True)


def render_stats_chart(
    stats: CardStats,
    destination: Path,
    now: Optional[datetime] = None,
) -> Optional[Path]:
    """
    Save a three-panel chart of ``stats`` to ``destination``.

    Returns:
        The written path, or None if the collection is empty.
    """
    if stats.num_cards == 0:
        logger.info("No cards; skipping chart")
        return None

    now = now or utcnow()
    days = _week_days(now)
    counts = [stats.upcoming_week.get(day, 0) for day in days]

    fig, axes = plt.subplots(1, 3, figsize=(14, 4.5))

    week_ax = axes[0]
    week_ax.bar(range(len(days)), counts, color=_BAR_COLOR, width=0.6, zorder=3)
    week_ax.set_xticks(range(len(days)))
    week_ax.set_xticklabels([d[5:] for d in days], fontsize=8)
    week_ax.set_title(
        f"Due in next 7 days: {sum(counts)}\n(due now: {stats.due_cards})", fontsize=11
    )
    week_ax.grid(axis="y", alpha=0.3)
    week_ax.set_axisbelow(True)

    _histogram_panel(axes[1], stats.difficulty_histogram, "Difficulty", scale=10.0)
    _histogram_panel(axes[2], stats.retrievability_histogram, "Retrievability")

    fig.suptitle(f"{stats.num_cards} cards", fontsize=13, fontweight="bold")
    plt.tight_layout()

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(destination, format="png", dpi=120, bbox_inches="tight")
    plt.close(fig)

    logger.info(f"Wrote stats chart to {destination}")
    return destination
