"""Test configuration ensuring the application package is importable."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_src_on_path() -> None:
    """Add the project's ``src`` directory to ``sys.path`` when missing."""

    project_root = Path(__file__).resolve().parents[1]
    src_path = project_root / "src"
    src_path_str = str(src_path)
    if src_path_str not in sys.path:
        sys.path.insert(0, src_path_str)


_ensure_src_on_path()


SAMPLE_FEED = """\
# Four-team sample season
POINTS|3|1
PRIZE|1|1|Champions
RELEGATION|4|4|Relegated

01082020|Arsenal|2|Burnley|0|40000
01082020|Chelsea|1|Derby|1|30000
08082020|Burnley|1|Chelsea|3|15000
08082020|Derby|0|Arsenal|0
15082020|Arsenal|1|Chelsea|1|41000
15082020|Burnley|2|Derby|1|14000
DEDUCTED|Derby|3
"""


@pytest.fixture
def sample_feed_text() -> str:
    """Return the text of a small, fully worked example season."""

    return SAMPLE_FEED


@pytest.fixture
def sample_season():
    """Return the season built from ``SAMPLE_FEED``."""

    from footballstats.domain.services.league_season import LeagueSeason
    from footballstats.infrastructure.parsers.results_feed_parser import ResultsFeedParser

    return LeagueSeason(ResultsFeedParser().parse_text(SAMPLE_FEED))
