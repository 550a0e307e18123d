"""Use cases answering table, team and result queries against the season."""
from __future__ import annotations

from datetime import date
from typing import List

from footballstats.application.process_results_feed import RetrieveLeagueSeasonUseCase
from footballstats.domain.models.league_table import LeagueTable, Ranking
from footballstats.domain.models.result import Result
from footballstats.domain.models.sequence import SequenceType
from footballstats.domain.models.team import AttendanceType, Team
from footballstats.domain.models.venue import VenueType
from footballstats.domain.services.league_season import LeagueSeason
from footballstats.domain.services.rankings import TableType


class SeasonNotLoadedError(Exception):
    """Signal that no results feed has been processed yet."""


class _SeasonQuery:
    """Shared access to the current season snapshot."""

    def __init__(self, season_retriever: RetrieveLeagueSeasonUseCase) -> None:
        """Initialize the query with the use case rebuilding the season."""

        self._season_retriever = season_retriever

    def _require_season(self) -> LeagueSeason:
        season = self._season_retriever.execute()
        if season is None:
            raise SeasonNotLoadedError("No results feed has been processed yet.")
        return season


class RetrieveSeasonSummaryUseCase(_SeasonQuery):
    """Return the season snapshot used for aggregate statistics."""

    def execute(self) -> LeagueSeason:
        return self._require_season()


class RetrieveLeagueTableUseCase(_SeasonQuery):
    """Build one of the league table orderings."""

    def execute(self, table_type: TableType, venue: VenueType = VenueType.BOTH) -> LeagueTable:
        """Return the ``table_type`` table restricted to ``venue``."""

        return self._require_season().league_table(table_type, venue)


class RetrieveSequenceTableUseCase(_SeasonQuery):
    """Rank teams by a streak statistic."""

    def execute(
        self,
        sequence: SequenceType,
        venue: VenueType = VenueType.BOTH,
        current: bool = True,
    ) -> Ranking:
        """Return teams ordered by the current or best run of ``sequence``."""

        return self._require_season().sequence_table(sequence, venue, current)


class RetrieveAttendanceTableUseCase(_SeasonQuery):
    """Rank teams by a home attendance figure."""

    def execute(self, attendance_type: AttendanceType = AttendanceType.AVERAGE) -> Ranking:
        return self._require_season().attendance_table(attendance_type)


class RetrieveAttendanceExtremesUseCase(_SeasonQuery):
    """Return the best attended or the worst attended matches of the season."""

    def execute(self, highest: bool = True) -> List[Result]:
        season = self._require_season()
        return season.highest_attendances if highest else season.lowest_attendances


class RetrieveTeamUseCase(_SeasonQuery):
    """Look up a single team's records."""

    def execute(self, team_name: str) -> Team:
        """Return ``team_name``; unknown names raise ``UnknownTeamError``."""

        return self._require_season().get_team(team_name)


class RetrieveResultsByDateUseCase(_SeasonQuery):
    """List the results played on a given date."""

    def execute(self, match_date: date) -> List[Result]:
        return self._require_season().get_results(match_date)
