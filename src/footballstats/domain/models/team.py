"""Domain model aggregating everything known about one team in a season."""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from footballstats.domain.models.result import Result
from footballstats.domain.models.results_feed import PointsSystem
from footballstats.domain.models.team_record import StandardRecord
from footballstats.domain.models.venue import VenueType


class AttendanceType(str, Enum):
    """Home attendance statistics available for ranking teams."""

    AVERAGE = "average"
    HIGHEST = "highest"
    LOWEST = "lowest"
    AGGREGATE = "aggregate"


class Team:
    """Hold a team's home, away and overall records plus its league positions."""

    def __init__(self, name: str, points_system: PointsSystem | None = None) -> None:
        """Create a team with empty records; data arrives through ``add_result``."""

        self._name = name
        self._points_system = points_system or PointsSystem()
        self._records: Dict[VenueType, StandardRecord] = {
            venue: StandardRecord(name, venue, self._points_system) for venue in VenueType
        }
        self._league_positions: Dict[date, int] = {}
        self._aggregate_crowd = 0
        self._highest_crowd: Optional[int] = None
        self._lowest_crowd: Optional[int] = None
        self._notes: List[str] = []

    @property
    def name(self) -> str:
        return self._name

    def get_record(self, venue: VenueType) -> StandardRecord:
        """Return the record scoped to ``venue``."""

        return self._records[VenueType(venue)]

    @property
    def notes(self) -> List[str]:
        """Return human-readable notes such as points deductions."""

        return list(self._notes)

    def add_result(self, result: Result) -> None:
        """Add ``result`` to the overall record and to the matching venue record."""

        if not result.involves(self._name):
            raise ValueError(f"{self._name!r} did not play in {result}.")

        self._records[VenueType.BOTH].add_result(result)
        if result.is_home_team(self._name):
            self._records[VenueType.HOME].add_result(result)
            # Only home matches count towards a team's attendance figures.
            self._update_attendance_figures(result)
        else:
            self._records[VenueType.AWAY].add_result(result)

    def add_league_position(self, match_date: date, position: int) -> None:
        self._league_positions[match_date] = position

    def adjust_points(self, amount: int, note: str | None = None) -> None:
        """Apply a points adjustment to the overall record only."""

        self._records[VenueType.BOTH].adjust_points(amount)
        if note:
            self._notes.append(note)

    @property
    def league_positions(self) -> List[Tuple[date, int]]:
        """Return ``(date, position)`` pairs in chronological order."""

        return sorted(self._league_positions.items())

    @property
    def last_league_position(self) -> Optional[int]:
        """Return the position on the most recent match date, if any."""

        if not self._league_positions:
            return None
        return self._league_positions[max(self._league_positions)]

    def points_series(self) -> List[Tuple[int, int]]:
        """Return cumulative points after each match, starting from ``(0, 0)``.

        Points adjustments are not part of the series.
        """

        series = [(0, 0)]
        total = 0
        for index, result in enumerate(self._records[VenueType.BOTH].results, start=1):
            if result.is_draw:
                total += self._points_system.points_for_draw
            elif result.is_win(self._name):
                total += self._points_system.points_for_win
            series.append((index, total))
        return series

    def attendance(self, attendance_type: AttendanceType) -> int:
        """Return the requested home attendance figure, ``0`` when unknown."""

        attendance_type = AttendanceType(attendance_type)
        if attendance_type is AttendanceType.AVERAGE:
            played = self._records[VenueType.HOME].played
            if played == 0:
                return 0
            return int(self._aggregate_crowd / played + 0.5)
        if attendance_type is AttendanceType.HIGHEST:
            return self._highest_crowd or 0
        if attendance_type is AttendanceType.LOWEST:
            return self._lowest_crowd or 0
        return self._aggregate_crowd

    def _update_attendance_figures(self, result: Result) -> None:
        if not result.has_attendance:
            return
        self._aggregate_crowd += result.attendance
        if self._highest_crowd is None or result.attendance > self._highest_crowd:
            self._highest_crowd = result.attendance
        if self._lowest_crowd is None or result.attendance < self._lowest_crowd:
            self._lowest_crowd = result.attendance

    def to_dict(self, venue: VenueType = VenueType.BOTH) -> Dict[str, Any]:
        """Return a JSON-serializable description of the team for ``venue``."""

        return {
            "name": self._name,
            "position": self.last_league_position,
            "record": self.get_record(venue).to_dict(),
            "notes": self.notes if VenueType(venue) is VenueType.BOTH else [],
            "attendance": {
                attendance_type.value: self.attendance(attendance_type)
                for attendance_type in AttendanceType
            },
            "league_positions": [
                {"date": match_date.isoformat(), "position": position}
                for match_date, position in self.league_positions
            ],
            "points_series": [
                {"match": match, "points": points} for match, points in self.points_series()
            ],
        }

    def __repr__(self) -> str:
        return f"Team(name={self._name!r})"


__all__ = ["AttendanceType", "Team"]
