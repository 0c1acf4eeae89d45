from pathlib import Path

from models.card import Card, CardKind
from models.performance import CardPerformance
from services.chart_service import render_stats_chart
from services.stats import CardStats


def test_chart_is_written_as_png(tmp_path, now):
    stats = CardStats()
    stats.update(Card(Path("d.md"), (1, 2), CardKind.BASIC, "q", "a"), CardPerformance(), now)

    written = render_stats_chart(stats, tmp_path / "charts" / "stats.png", now=now)

    assert written == tmp_path / "charts" / "stats.png"
    assert written.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_empty_collection_has_no_chart(tmp_path):
    target = tmp_path / "stats.png"
    assert render_stats_chart(CardStats(), target) is None
    assert not target.exists()
