"""Per-team aggregate records for the whole season and for recent form."""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional

from footballstats.domain.models.bounded_ranking_set import BoundedRankingSet
from footballstats.domain.models.result import Result
from footballstats.domain.models.results_feed import PointsSystem
from footballstats.domain.models.sequence import SequenceTracker
from footballstats.domain.models.venue import VenueType

FORM_PLACEHOLDER = "-"
OVERALL_FORM_LENGTH = 6
VENUE_FORM_LENGTH = 4


class KeyResultType(str, Enum):
    """Notable results remembered for every record."""

    BIGGEST_WIN = "biggest_win"
    BIGGEST_DEFEAT = "biggest_defeat"
    MOST_RECENT = "most_recent"


def _most_recent_first(result: Result) -> tuple[int]:
    return (-result.date.toordinal(),)


class TeamRecord(ABC):
    """Counters and derived metrics shared by season and form records."""

    def __init__(self, team_name: str, venue: VenueType, points_system: PointsSystem) -> None:
        self._team_name = team_name
        self._venue = venue
        self._points_system = points_system

    @property
    def team_name(self) -> str:
        return self._team_name

    @property
    def venue(self) -> VenueType:
        return self._venue

    @property
    def points_system(self) -> PointsSystem:
        return self._points_system

    @property
    @abstractmethod
    def played(self) -> int:
        """Return the number of matches covered by the record."""

    @property
    @abstractmethod
    def won(self) -> int:
        """Return the number of matches won."""

    @property
    @abstractmethod
    def drawn(self) -> int:
        """Return the number of matches drawn."""

    @property
    @abstractmethod
    def lost(self) -> int:
        """Return the number of matches lost."""

    @property
    @abstractmethod
    def scored(self) -> int:
        """Return the number of goals scored."""

    @property
    @abstractmethod
    def conceded(self) -> int:
        """Return the number of goals conceded."""

    @property
    def points_adjustment(self) -> int:
        return 0

    @property
    def points(self) -> int:
        """Return the points earned, including any manual adjustment."""

        return self._points_system.points_for(self.won, self.drawn) + self.points_adjustment

    @property
    def goal_difference(self) -> int:
        return self.scored - self.conceded

    @property
    def average_points(self) -> float:
        """Return points per game, or ``0.0`` when nothing has been played."""

        if self.played == 0:
            return 0.0
        return self.points / self.played

    @property
    def dropped_points(self) -> int:
        """Return the points missed relative to winning every match played."""

        return self.played * self._points_system.points_for_win - self.points

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable summary of the record's counters."""

        return {
            "team": self._team_name,
            "venue": self._venue.value,
            "points": self.points,
            "matches": {
                "played": self.played,
                "wins": self.won,
                "draws": self.drawn,
                "losses": self.lost,
            },
            "goals": {
                "for": self.scored,
                "against": self.conceded,
                "difference": self.goal_difference,
            },
            "average_points": round(self.average_points, 2),
            "dropped_points": self.dropped_points,
        }


class FormRecord(TeamRecord):
    """Record restricted to a team's most recent matches."""

    def __init__(
        self,
        team_name: str,
        venue: VenueType,
        points_system: PointsSystem,
        length: Optional[int] = None,
    ) -> None:
        super().__init__(team_name, venue, points_system)
        if length is None:
            length = OVERALL_FORM_LENGTH if venue is VenueType.BOTH else VENUE_FORM_LENGTH
        self._results: BoundedRankingSet[Result] = BoundedRankingSet(length, _most_recent_first)

    @property
    def length(self) -> int:
        """Return the number of matches the form window can hold."""

        return self._results.capacity

    @property
    def results(self) -> List[Result]:
        """Return the results in the window, most recent first."""

        return self._results.to_list()

    def add_result(self, result: Result) -> None:
        self._results.add(result)

    @property
    def played(self) -> int:
        return len(self._results)

    @property
    def won(self) -> int:
        return sum(1 for result in self._results if result.is_win(self._team_name))

    @property
    def drawn(self) -> int:
        return sum(1 for result in self._results if result.is_draw)

    @property
    def lost(self) -> int:
        return sum(1 for result in self._results if result.is_defeat(self._team_name))

    @property
    def scored(self) -> int:
        return sum(result.goals_for(self._team_name) for result in self._results)

    @property
    def conceded(self) -> int:
        return sum(result.goals_against(self._team_name) for result in self._results)

    @property
    def form(self) -> str:
        """Return W/D/L letters oldest first, padded on the left with placeholders.

        With a six-match window and two matches played, a draw followed by a
        win renders as ``----DW``.
        """

        letters = [self._letter_for(result) for result in self._results]
        letters.extend([FORM_PLACEHOLDER] * (self.length - len(letters)))
        return "".join(reversed(letters))

    @property
    def stars(self) -> int:
        """Return the form as a rating between 1 and 5 stars."""

        maximum = self._points_system.points_for_win * self.played
        if maximum <= 0:
            return 1
        return max(1, math.ceil(5 * self.points / maximum))

    def _letter_for(self, result: Result) -> str:
        if result.is_draw:
            return "D"
        if result.is_win(self._team_name):
            return "W"
        return "L"

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["form"] = self.form
        payload["stars"] = self.stars
        return payload


class StandardRecord(TeamRecord):
    """Season-long record for one team at one venue filter."""

    def __init__(self, team_name: str, venue: VenueType, points_system: PointsSystem) -> None:
        super().__init__(team_name, venue, points_system)
        self._played = 0
        self._won = 0
        self._drawn = 0
        self._lost = 0
        self._scored = 0
        self._conceded = 0
        self._adjustment = 0
        self._results: List[Result] = []
        self._sequences = SequenceTracker(team_name)
        self._form = FormRecord(team_name, venue, points_system)
        self._key_results: Dict[KeyResultType, BoundedRankingSet[Result]] = {
            KeyResultType.BIGGEST_WIN: BoundedRankingSet(
                1, lambda result: (-result.margin, -result.goals_for(team_name))
            ),
            KeyResultType.BIGGEST_DEFEAT: BoundedRankingSet(
                1, lambda result: (-result.margin, -result.goals_against(team_name))
            ),
            KeyResultType.MOST_RECENT: BoundedRankingSet(1, _most_recent_first),
        }

    def add_result(self, result: Result) -> None:
        """Fold ``result`` into the counters, streaks, key results and form."""

        goals_for = result.goals_for(self._team_name)
        goals_against = result.goals_against(self._team_name)

        self._played += 1
        self._scored += goals_for
        self._conceded += goals_against
        if result.is_draw:
            self._drawn += 1
        elif goals_for > goals_against:
            self._won += 1
            self._key_results[KeyResultType.BIGGEST_WIN].add(result)
        else:
            self._lost += 1
            self._key_results[KeyResultType.BIGGEST_DEFEAT].add(result)
        self._key_results[KeyResultType.MOST_RECENT].add(result)

        self._results.append(result)
        self._sequences.add_result(result)
        self._form.add_result(result)

    def adjust_points(self, amount: int) -> None:
        self._adjustment += amount

    @property
    def played(self) -> int:
        return self._played

    @property
    def won(self) -> int:
        return self._won

    @property
    def drawn(self) -> int:
        return self._drawn

    @property
    def lost(self) -> int:
        return self._lost

    @property
    def scored(self) -> int:
        return self._scored

    @property
    def conceded(self) -> int:
        return self._conceded

    @property
    def points_adjustment(self) -> int:
        return self._adjustment

    @property
    def results(self) -> List[Result]:
        """Return the results in the order they were added."""

        return list(self._results)

    @property
    def sequences(self) -> SequenceTracker:
        return self._sequences

    @property
    def form_record(self) -> FormRecord:
        return self._form

    def key_result(self, key_result: KeyResultType) -> Optional[Result]:
        """Return the requested key result, or ``None`` when there is none yet."""

        tracker = self._key_results[key_result]
        return tracker.first() if tracker else None

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["points_adjustment"] = self._adjustment
        payload["form"] = self._form.form
        payload["key_results"] = {
            key.value: result.to_dict() if (result := self.key_result(key)) else None
            for key in KeyResultType
        }
        payload["sequences"] = self._sequences.to_dict()
        return payload


__all__ = [
    "FORM_PLACEHOLDER",
    "FormRecord",
    "KeyResultType",
    "StandardRecord",
    "TeamRecord",
]
