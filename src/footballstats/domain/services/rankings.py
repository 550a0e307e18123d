"""Sort keys producing the league, form, sequence and attendance orderings.

Every key sorts ascending with the best team first. Record keys share the
tie-break suffix goal difference, goals scored, wins (all descending) and then
the team name, so two distinct teams never compare equal.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Tuple

from footballstats.domain.models.sequence import SequenceType
from footballstats.domain.models.team import AttendanceType, Team
from footballstats.domain.models.team_record import TeamRecord


class TableType(str, Enum):
    """League table orderings built from team records."""

    STANDARD = "standard"
    AVERAGE = "average"
    DROPPED = "dropped"
    FORM = "form"


SortKey = Tuple[Any, ...]


def _name_key(name: str) -> SortKey:
    return (name.casefold(), name)


def tie_break_key(record: TeamRecord) -> SortKey:
    """Return the shared suffix used after each table's primary key."""

    return (
        -record.goal_difference,
        -record.scored,
        -record.won,
        *_name_key(record.team_name),
    )


def standard_key(record: TeamRecord) -> SortKey:
    return (-record.points, *tie_break_key(record))


def average_points_key(record: TeamRecord) -> SortKey:
    return (-record.average_points, *tie_break_key(record))


def dropped_points_key(record: TeamRecord) -> SortKey:
    return (record.dropped_points, *tie_break_key(record))


_TABLE_KEYS: Dict[TableType, Callable[[TeamRecord], SortKey]] = {
    TableType.STANDARD: standard_key,
    TableType.AVERAGE: average_points_key,
    TableType.DROPPED: dropped_points_key,
    # Form tables rank form records with the standard ordering.
    TableType.FORM: standard_key,
}


def table_key(table_type: TableType) -> Callable[[TeamRecord], SortKey]:
    """Return the sort key function for ``table_type``."""

    return _TABLE_KEYS[TableType(table_type)]


def sequence_key(sequence: SequenceType, current: bool) -> Callable[[Any], SortKey]:
    """Return a key ranking standard records by the length of a run."""

    sequence = SequenceType(sequence)

    def key(record: Any) -> SortKey:
        return (-record.sequences.get(sequence, current), *tie_break_key(record))

    return key


def attendance_key(attendance_type: AttendanceType) -> Callable[[Team], SortKey]:
    """Return a key ranking teams by a home attendance figure, highest first."""

    attendance_type = AttendanceType(attendance_type)

    def key(team: Team) -> SortKey:
        return (-team.attendance(attendance_type), *_name_key(team.name))

    return key


__all__ = [
    "SortKey",
    "TableType",
    "attendance_key",
    "average_points_key",
    "dropped_points_key",
    "sequence_key",
    "standard_key",
    "table_key",
    "tie_break_key",
]
