"""Read-only views returned by the season's table queries."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional

from footballstats.domain.models.team_record import TeamRecord
from footballstats.domain.models.venue import VenueType


@dataclass(frozen=True)
class LeagueTableRow:
    """A team's record together with its rank and league zone."""

    position: int
    record: TeamRecord
    zone: int = 0

    @property
    def team(self) -> str:
        return self.record.team_name

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation of the row."""

        payload = {"position": self.position, "zone": self.zone}
        payload.update(self.record.to_dict())
        return payload


@dataclass(frozen=True)
class LeagueTable:
    """Teams sorted by one of the league table orderings."""

    table_type: str
    venue: VenueType
    rows: List[LeagueTableRow] = field(default_factory=list)
    date: Optional[date] = None

    @property
    def team_names(self) -> List[str]:
        return [row.team for row in self.rows]

    def position_of(self, team_name: str) -> int:
        """Return the 1-based position of ``team_name`` in the table."""

        for row in self.rows:
            if row.team == team_name:
                return row.position
        raise LookupError(f"{team_name!r} is not part of the table.")

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.table_type,
            "venue": self.venue.value,
            "date": self.date.isoformat() if self.date else None,
            "teams": [row.to_dict() for row in self.rows],
        }


@dataclass(frozen=True)
class RankingRow:
    """A team ranked by a single statistic such as a streak or a crowd size."""

    position: int
    team: str
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"position": self.position, "team": self.team, "value": self.value}


@dataclass(frozen=True)
class Ranking:
    """Teams sorted by a single statistic."""

    statistic: str
    rows: List[RankingRow] = field(default_factory=list)
    venue: Optional[VenueType] = None
    current: Optional[bool] = None

    @property
    def team_names(self) -> List[str]:
        return [row.team for row in self.rows]

    def to_dict(self) -> dict[str, Any]:
        return {
            "statistic": self.statistic,
            "venue": self.venue.value if self.venue else None,
            "current": self.current,
            "teams": [row.to_dict() for row in self.rows],
        }


__all__ = ["LeagueTable", "LeagueTableRow", "Ranking", "RankingRow"]
