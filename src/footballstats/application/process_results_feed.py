"""Use cases for ingesting a results feed and rebuilding the season from it."""
from __future__ import annotations

import logging
from typing import Iterable, Protocol

from footballstats.domain.models.results_feed import ResultsFeed
from footballstats.domain.repositories.results_feed_repository import ResultsFeedRepository
from footballstats.domain.services.league_season import LeagueSeason

logger = logging.getLogger(__name__)


class ResultsFeedParser(Protocol):
    """Represent a service capable of decoding the lines of a results feed."""

    def parse(self, lines: Iterable[str]) -> ResultsFeed:
        """Convert feed lines into a validated ``ResultsFeed``."""


def build_league_season(parser: ResultsFeedParser, lines: Iterable[str]) -> LeagueSeason:
    """Parse ``lines`` and aggregate them into a new season snapshot."""

    return LeagueSeason(parser.parse(lines))


class ProcessResultsFeedUseCase:
    """Validate an uploaded feed, store it and return the resulting season."""

    def __init__(self, parser: ResultsFeedParser, repository: ResultsFeedRepository) -> None:
        """Initialize the use case with its parser and repository."""

        self._parser = parser
        self._repository = repository

    def execute(self, feed_text: str) -> LeagueSeason:
        """Build the season from ``feed_text`` and persist the feed on success.

        Feed errors propagate before anything is stored, so a rejected upload
        leaves the previously stored feed in place.
        """

        season = build_league_season(self._parser, feed_text.splitlines())
        self._repository.save(feed_text)
        logger.info("Stored results feed with %d matches.", season.match_count)
        return season


class RetrieveLeagueSeasonUseCase:
    """Rebuild the season from the stored results feed."""

    def __init__(self, parser: ResultsFeedParser, repository: ResultsFeedRepository) -> None:
        """Initialize the use case with its parser and repository."""

        self._parser = parser
        self._repository = repository

    def execute(self) -> LeagueSeason | None:
        """Return a fresh season snapshot, or ``None`` when no feed is stored."""

        feed_text = self._repository.load()
        if feed_text is None:
            return None
        return build_league_season(self._parser, feed_text.splitlines())
