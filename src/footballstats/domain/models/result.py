"""Domain model describing the final score of a single fixture."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Result:
    """Represent one played match between two teams on a given date."""

    home_team: str
    away_team: str
    home_goals: int
    away_goals: int
    date: date
    attendance: Optional[int] = None

    def __post_init__(self) -> None:
        if self.home_goals < 0 or self.away_goals < 0:
            raise ValueError("Goal counts cannot be negative.")
        if self.attendance is not None and self.attendance < 0:
            raise ValueError("Attendance cannot be negative.")

    @property
    def is_draw(self) -> bool:
        """Return ``True`` when both teams scored the same number of goals."""

        return self.home_goals == self.away_goals

    @property
    def margin(self) -> int:
        """Return the absolute goal difference between the two teams."""

        return abs(self.home_goals - self.away_goals)

    @property
    def aggregate(self) -> int:
        """Return the total number of goals scored in the match."""

        return self.home_goals + self.away_goals

    @property
    def has_attendance(self) -> bool:
        return self.attendance is not None

    def involves(self, team_name: str) -> bool:
        """Return ``True`` when ``team_name`` played in this match."""

        return team_name in (self.home_team, self.away_team)

    def is_home_team(self, team_name: str) -> bool:
        return self.home_team == team_name

    def is_win(self, team_name: str) -> bool:
        """Return ``True`` when ``team_name`` won the match."""

        return self.goals_for(team_name) > self.goals_against(team_name)

    def is_defeat(self, team_name: str) -> bool:
        """Return ``True`` when ``team_name`` lost the match."""

        return self.goals_for(team_name) < self.goals_against(team_name)

    def goals_for(self, team_name: str) -> int:
        """Return the goals scored by ``team_name``."""

        if team_name == self.home_team:
            return self.home_goals
        if team_name == self.away_team:
            return self.away_goals
        raise ValueError(f"{team_name!r} did not play in {self}.")

    def goals_against(self, team_name: str) -> int:
        """Return the goals conceded by ``team_name``."""

        if team_name == self.home_team:
            return self.away_goals
        if team_name == self.away_team:
            return self.home_goals
        raise ValueError(f"{team_name!r} did not play in {self}.")

    def opponent(self, team_name: str) -> str:
        """Return the name of the team that faced ``team_name``."""

        return self.away_team if team_name == self.home_team else self.home_team

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation of the result."""

        return {
            "date": self.date.isoformat(),
            "home_team": self.home_team,
            "away_team": self.away_team,
            "home_goals": self.home_goals,
            "away_goals": self.away_goals,
            "attendance": self.attendance,
        }

    def __str__(self) -> str:
        return f"{self.home_team} {self.home_goals}-{self.away_goals} {self.away_team}"


__all__ = ["Result"]
