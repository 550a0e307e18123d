"""Domain models describing the validated contents of a results feed."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from footballstats.domain.models.result import Result


@dataclass(frozen=True)
class PointsSystem:
    """Number of league points awarded for a win and for a draw."""

    points_for_win: int = 3
    points_for_draw: int = 1

    def points_for(self, won: int, drawn: int) -> int:
        """Return the points earned by ``won`` wins and ``drawn`` draws."""

        return won * self.points_for_win + drawn * self.points_for_draw

    def to_dict(self) -> dict[str, int]:
        return {"win": self.points_for_win, "draw": self.points_for_draw}


@dataclass(frozen=True)
class LeagueZone:
    """Named range of final league positions, such as promotion or relegation."""

    start_position: int
    end_position: int
    name: str

    def __post_init__(self) -> None:
        if self.start_position < 1 or self.end_position < self.start_position:
            raise ValueError(
                f"Invalid zone range {self.start_position}-{self.end_position} for {self.name!r}."
            )

    @property
    def positions(self) -> range:
        """Return the 1-based positions covered by the zone."""

        return range(self.start_position, self.end_position + 1)

    def to_dict(self) -> dict[str, object]:
        return {"start": self.start_position, "end": self.end_position, "name": self.name}


@dataclass(frozen=True)
class PointsAdjustment:
    """Points awarded to (positive) or deducted from (negative) a team."""

    team_name: str
    amount: int

    def describe(self) -> str:
        """Return a short human-readable note for the adjustment."""

        magnitude = abs(self.amount)
        noun = "point" if magnitude == 1 else "points"
        verb = "awarded" if self.amount >= 0 else "deducted"
        return f"{magnitude} {noun} {verb}."


@dataclass(frozen=True)
class ResultsFeed:
    """Everything read from a results feed, in feed order."""

    results: List[Result] = field(default_factory=list)
    team_names: List[str] = field(default_factory=list)
    points_system: PointsSystem = field(default_factory=PointsSystem)
    prize_zones: List[LeagueZone] = field(default_factory=list)
    relegation_zones: List[LeagueZone] = field(default_factory=list)
    adjustments: List[PointsAdjustment] = field(default_factory=list)


__all__ = [
    "LeagueZone",
    "PointsAdjustment",
    "PointsSystem",
    "ResultsFeed",
]
