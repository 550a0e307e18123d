"""Season aggregator deriving tables and statistics from a results feed."""
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Any, Callable, Dict, List, Sequence

from footballstats.domain.errors import UnknownTeamError
from footballstats.domain.models.bounded_ranking_set import BoundedRankingSet
from footballstats.domain.models.league_table import (
    LeagueTable,
    LeagueTableRow,
    Ranking,
    RankingRow,
)
from footballstats.domain.models.result import Result
from footballstats.domain.models.results_feed import LeagueZone, ResultsFeed
from footballstats.domain.models.sequence import SequenceType
from footballstats.domain.models.team import AttendanceType, Team
from footballstats.domain.models.team_record import TeamRecord
from footballstats.domain.models.venue import VenueType
from footballstats.domain.services.rankings import (
    TableType,
    attendance_key,
    sequence_key,
    standard_key,
    table_key,
)

logger = logging.getLogger(__name__)

KEY_RESULTS_LIMIT = 5
ATTENDANCE_EXTREMES_LIMIT = 20


def _fixture_key(result: Result) -> tuple[int, str]:
    return (result.date.toordinal(), result.home_team)


class LeagueSeason:
    """Model a single season of a league built from a validated results feed.

    Global totals are accumulated once per result in feed order. Team records
    are then filled date by date and, after each date, every team's league
    position is recorded using the standard ordering of overall records.
    The season is meant to be queried only once it has been constructed;
    every table query sorts a fresh view of the live records.
    """

    def __init__(self, feed: ResultsFeed) -> None:
        """Aggregate ``feed`` into team records, positions and season totals."""

        self._points_system = feed.points_system
        self._teams: Dict[str, Team] = {
            name: Team(name, self._points_system) for name in feed.team_names
        }
        self._results_by_date: Dict[date, List[Result]] = defaultdict(list)

        self._biggest_home_wins: BoundedRankingSet[Result] = BoundedRankingSet(
            KEY_RESULTS_LIMIT, lambda result: (-result.margin, -result.home_goals, *_fixture_key(result))
        )
        self._biggest_away_wins: BoundedRankingSet[Result] = BoundedRankingSet(
            KEY_RESULTS_LIMIT, lambda result: (-result.margin, -result.away_goals, *_fixture_key(result))
        )
        self._highest_aggregates: BoundedRankingSet[Result] = BoundedRankingSet(
            KEY_RESULTS_LIMIT, lambda result: (-result.aggregate, *_fixture_key(result))
        )
        self._highest_attendances: BoundedRankingSet[Result] = BoundedRankingSet(
            ATTENDANCE_EXTREMES_LIMIT, lambda result: (-result.attendance, *_fixture_key(result))
        )
        self._lowest_attendances: BoundedRankingSet[Result] = BoundedRankingSet(
            ATTENDANCE_EXTREMES_LIMIT, lambda result: (result.attendance, *_fixture_key(result))
        )

        self._match_count = 0
        self._home_wins = 0
        self._away_wins = 0
        self._score_draws = 0
        self._no_score_draws = 0
        self._home_goals = 0
        self._away_goals = 0
        self._cleansheets = 0
        self._aggregate_attendance = 0
        self._highest_points_total = 0

        for result in feed.results:
            for name in (result.home_team, result.away_team):
                if name not in self._teams:
                    self._teams[name] = Team(name, self._points_system)
            self._results_by_date[result.date].append(result)
            self._update_global_totals(result)
        logger.info("Read %d results for %d teams.", self._match_count, len(self._teams))

        for adjustment in feed.adjustments:
            self.get_team(adjustment.team_name).adjust_points(
                adjustment.amount, adjustment.describe()
            )

        self._process_team_records()

        self._prize_zone_names = [zone.name for zone in feed.prize_zones]
        self._relegation_zone_names = [zone.name for zone in feed.relegation_zones]
        self._zones = self._build_zones(feed.prize_zones, feed.relegation_zones)

    def _update_global_totals(self, result: Result) -> None:
        self._match_count += 1
        if result.is_draw:
            if result.home_goals == 0:
                self._no_score_draws += 1
                # A goalless draw is a cleansheet for both teams.
                self._cleansheets += 2
            else:
                self._score_draws += 1
        else:
            if result.home_goals > result.away_goals:
                self._home_wins += 1
                self._biggest_home_wins.add(result)
            else:
                self._away_wins += 1
                self._biggest_away_wins.add(result)
            if result.home_goals == 0 or result.away_goals == 0:
                self._cleansheets += 1
        self._home_goals += result.home_goals
        self._away_goals += result.away_goals
        self._highest_aggregates.add(result)

        if result.has_attendance:
            self._aggregate_attendance += result.attendance
            self._highest_attendances.add(result)
            self._lowest_attendances.add(result)

    def _process_team_records(self) -> None:
        for match_date in sorted(self._results_by_date):
            for result in self._results_by_date[match_date]:
                self._teams[result.home_team].add_result(result)
                self._teams[result.away_team].add_result(result)

            table = self._sorted_records(VenueType.BOTH, standard_key)
            for position, record in enumerate(table, start=1):
                self._teams[record.team_name].add_league_position(match_date, position)
            # The last date processed is the most recent one.
            self._highest_points_total = table[0].points if table else 0
            logger.debug("Processed results for %s.", match_date.isoformat())

    def _build_zones(
        self, prize_zones: Sequence[LeagueZone], relegation_zones: Sequence[LeagueZone]
    ) -> List[int]:
        positions = max(
            [len(self._teams)]
            + [zone.end_position for zone in (*prize_zones, *relegation_zones)]
        )
        zones = [0] * positions
        # Later zones overwrite earlier ones where ranges overlap.
        for index, zone in enumerate(prize_zones, start=1):
            for position in zone.positions:
                zones[position - 1] = index
        for index, zone in enumerate(relegation_zones, start=1):
            for position in zone.positions:
                zones[position - 1] = -index
        return zones

    def _sorted_records(
        self, venue: VenueType, key: Callable[[TeamRecord], Any]
    ) -> List[Any]:
        records = [team.get_record(venue) for team in self._teams.values()]
        return sorted(records, key=key)

    def _build_table(self, table_type: TableType, records: List[TeamRecord], venue: VenueType) -> LeagueTable:
        rows = [
            LeagueTableRow(position=position, record=record, zone=self.zone_for_position(position))
            for position, record in enumerate(records, start=1)
        ]
        return LeagueTable(
            table_type=table_type.value,
            venue=venue,
            rows=rows,
            date=self.most_recent_date,
        )

    # Directory queries.

    @property
    def team_names(self) -> List[str]:
        """Return the names of all teams in alphabetical order."""

        return sorted(self._teams)

    @property
    def teams(self) -> List[Team]:
        return [self._teams[name] for name in self.team_names]

    def get_team(self, team_name: str) -> Team:
        """Return the team called ``team_name``."""

        try:
            return self._teams[team_name]
        except KeyError:
            raise UnknownTeamError(team_name) from None

    @property
    def dates(self) -> List[date]:
        """Return the dates on which matches were played, most recent first."""

        return sorted(self._results_by_date, reverse=True)

    @property
    def most_recent_date(self) -> date | None:
        return max(self._results_by_date) if self._results_by_date else None

    def get_results(self, match_date: date) -> List[Result]:
        """Return the results played on ``match_date`` in feed order."""

        return list(self._results_by_date.get(match_date, ()))

    # Table builders.

    def league_table(self, table_type: TableType, venue: VenueType = VenueType.BOTH) -> LeagueTable:
        """Return the table of ``table_type`` for matches at ``venue``."""

        table_type = TableType(table_type)
        venue = VenueType(venue)
        if table_type is TableType.FORM:
            records: List[TeamRecord] = [
                team.get_record(venue).form_record for team in self._teams.values()
            ]
            records.sort(key=table_key(table_type))
        else:
            records = self._sorted_records(venue, table_key(table_type))
        return self._build_table(table_type, records, venue)

    def standard_table(self, venue: VenueType = VenueType.BOTH) -> LeagueTable:
        return self.league_table(TableType.STANDARD, venue)

    def average_table(self, venue: VenueType = VenueType.BOTH) -> LeagueTable:
        return self.league_table(TableType.AVERAGE, venue)

    def dropped_points_table(self, venue: VenueType = VenueType.BOTH) -> LeagueTable:
        return self.league_table(TableType.DROPPED, venue)

    def form_table(self, venue: VenueType = VenueType.BOTH) -> LeagueTable:
        return self.league_table(TableType.FORM, venue)

    def sequence_table(
        self,
        sequence: SequenceType,
        venue: VenueType = VenueType.BOTH,
        current: bool = True,
    ) -> Ranking:
        """Rank teams by the current or season-best length of ``sequence``."""

        sequence = SequenceType(sequence)
        venue = VenueType(venue)
        records = self._sorted_records(venue, sequence_key(sequence, current))
        rows = [
            RankingRow(
                position=position,
                team=record.team_name,
                value=record.sequences.get(sequence, current),
            )
            for position, record in enumerate(records, start=1)
        ]
        return Ranking(statistic=sequence.value, rows=rows, venue=venue, current=current)

    def attendance_table(self, attendance_type: AttendanceType = AttendanceType.AVERAGE) -> Ranking:
        """Rank teams by a home attendance figure, highest first."""

        attendance_type = AttendanceType(attendance_type)
        teams = sorted(self._teams.values(), key=attendance_key(attendance_type))
        rows = [
            RankingRow(position=position, team=team.name, value=team.attendance(attendance_type))
            for position, team in enumerate(teams, start=1)
        ]
        return Ranking(statistic=attendance_type.value, rows=rows)

    # Season-level rankings.

    @property
    def biggest_home_wins(self) -> List[Result]:
        return self._biggest_home_wins.to_list()

    @property
    def biggest_away_wins(self) -> List[Result]:
        return self._biggest_away_wins.to_list()

    @property
    def highest_match_aggregates(self) -> List[Result]:
        return self._highest_aggregates.to_list()

    @property
    def highest_attendances(self) -> List[Result]:
        return self._highest_attendances.to_list()

    @property
    def lowest_attendances(self) -> List[Result]:
        return self._lowest_attendances.to_list()

    # Aggregates.

    @property
    def match_count(self) -> int:
        return self._match_count

    @property
    def home_wins(self) -> int:
        return self._home_wins

    @property
    def away_wins(self) -> int:
        return self._away_wins

    @property
    def score_draws(self) -> int:
        return self._score_draws

    @property
    def no_score_draws(self) -> int:
        return self._no_score_draws

    @property
    def home_goals(self) -> int:
        return self._home_goals

    @property
    def away_goals(self) -> int:
        return self._away_goals

    @property
    def cleansheets(self) -> int:
        return self._cleansheets

    @property
    def aggregate_attendance(self) -> int:
        return self._aggregate_attendance

    @property
    def average_attendance(self) -> int:
        """Return the aggregate attendance per match, rounded to the nearest unit."""

        if self._match_count == 0:
            return 0
        return int(self._aggregate_attendance / self._match_count + 0.5)

    @property
    def highest_points_total(self) -> int:
        """Return the league leader's points on the most recent date."""

        return self._highest_points_total

    @property
    def points_for_win(self) -> int:
        return self._points_system.points_for_win

    @property
    def points_for_draw(self) -> int:
        return self._points_system.points_for_draw

    @property
    def prize_zone_names(self) -> List[str]:
        return list(self._prize_zone_names)

    @property
    def relegation_zone_names(self) -> List[str]:
        return list(self._relegation_zone_names)

    def zone_for_position(self, position: int) -> int:
        """Return the zone id for a 1-based league position.

        Positive ids identify prize zones, negative ids relegation zones and
        zero means the position is in neither.
        """

        if position < 1 or position > len(self._zones):
            raise ValueError(f"League position {position} is out of range.")
        return self._zones[position - 1]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable summary of the season aggregates."""

        most_recent = self.most_recent_date
        return {
            "teams": len(self._teams),
            "most_recent_date": most_recent.isoformat() if most_recent else None,
            "points": self._points_system.to_dict(),
            "matches": {
                "played": self._match_count,
                "home_wins": self._home_wins,
                "away_wins": self._away_wins,
                "score_draws": self._score_draws,
                "no_score_draws": self._no_score_draws,
            },
            "goals": {
                "home": self._home_goals,
                "away": self._away_goals,
                "total": self._home_goals + self._away_goals,
                "cleansheets": self._cleansheets,
            },
            "attendance": {
                "aggregate": self._aggregate_attendance,
                "average": self.average_attendance,
            },
            "highest_points_total": self._highest_points_total,
            "zones": {
                "prize": self.prize_zone_names,
                "relegation": self.relegation_zone_names,
                "by_position": list(self._zones),
            },
            "key_results": {
                "biggest_home_wins": [result.to_dict() for result in self.biggest_home_wins],
                "biggest_away_wins": [result.to_dict() for result in self.biggest_away_wins],
                "highest_aggregates": [
                    result.to_dict() for result in self.highest_match_aggregates
                ],
            },
        }


__all__ = ["LeagueSeason", "ATTENDANCE_EXTREMES_LIMIT", "KEY_RESULTS_LIMIT"]
