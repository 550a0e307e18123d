"""Streak statistics tracked for each team record."""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict

from footballstats.domain.models.result import Result


class SequenceType(str, Enum):
    """Kinds of consecutive-match runs that can be ranked."""

    WINS = "wins"
    DRAWS = "draws"
    DEFEATS = "defeats"
    UNBEATEN = "unbeaten"
    NO_WIN = "no_win"
    CLEANSHEETS = "cleansheets"
    SCORED = "scored"
    NOT_SCORED = "not_scored"


_CONTINUES_SEQUENCE: Dict[SequenceType, Callable[[Result, str], bool]] = {
    SequenceType.WINS: lambda result, team: result.is_win(team),
    SequenceType.DRAWS: lambda result, team: result.is_draw,
    SequenceType.DEFEATS: lambda result, team: result.is_defeat(team),
    SequenceType.UNBEATEN: lambda result, team: not result.is_defeat(team),
    SequenceType.NO_WIN: lambda result, team: not result.is_win(team),
    SequenceType.CLEANSHEETS: lambda result, team: result.goals_against(team) == 0,
    SequenceType.SCORED: lambda result, team: result.goals_for(team) > 0,
    SequenceType.NOT_SCORED: lambda result, team: result.goals_for(team) == 0,
}


class SequenceTracker:
    """Maintain the current and season-best length of every sequence type."""

    def __init__(self, team_name: str) -> None:
        self._team_name = team_name
        self._current: Dict[SequenceType, int] = {sequence: 0 for sequence in SequenceType}
        self._best: Dict[SequenceType, int] = {sequence: 0 for sequence in SequenceType}

    def add_result(self, result: Result) -> None:
        """Extend or reset every run according to ``result``."""

        for sequence, continues in _CONTINUES_SEQUENCE.items():
            if continues(result, self._team_name):
                self._current[sequence] += 1
                self._best[sequence] = max(self._best[sequence], self._current[sequence])
            else:
                self._current[sequence] = 0

    def current(self, sequence: SequenceType) -> int:
        """Return the length of the run still active after the latest result."""

        return self._current[sequence]

    def best(self, sequence: SequenceType) -> int:
        """Return the longest run achieved at any point in the season."""

        return self._best[sequence]

    def get(self, sequence: SequenceType, current: bool) -> int:
        return self.current(sequence) if current else self.best(sequence)

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {
            sequence.value: {"current": self._current[sequence], "best": self._best[sequence]}
            for sequence in SequenceType
        }


__all__ = ["SequenceTracker", "SequenceType"]
