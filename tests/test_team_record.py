"""Tests for season records, form records, streaks and the team model."""
from __future__ import annotations

from datetime import date, timedelta

import pytest

from footballstats.domain.models.result import Result
from footballstats.domain.models.results_feed import PointsSystem
from footballstats.domain.models.sequence import SequenceType
from footballstats.domain.models.team import AttendanceType, Team
from footballstats.domain.models.team_record import (
    FormRecord,
    KeyResultType,
    StandardRecord,
)
from footballstats.domain.models.venue import VenueType

SEASON_START = date(2021, 8, 14)


def build_result(
    day: int,
    home: str,
    home_goals: int,
    away: str,
    away_goals: int,
    attendance: int | None = None,
) -> Result:
    return Result(
        home_team=home,
        away_team=away,
        home_goals=home_goals,
        away_goals=away_goals,
        date=SEASON_START + timedelta(days=day),
        attendance=attendance,
    )


def test_result_derives_match_facts() -> None:
    """A result exposes winners, goals and margins from either team's side."""

    result = build_result(0, "Leeds", 3, "Fulham", 1)

    assert not result.is_draw
    assert result.is_win("Leeds")
    assert result.is_defeat("Fulham")
    assert result.goals_for("Fulham") == 1
    assert result.goals_against("Fulham") == 3
    assert result.margin == 2
    assert result.aggregate == 4
    assert result.opponent("Leeds") == "Fulham"
    assert not result.has_attendance
    assert build_result(0, "Leeds", 0, "Fulham", 0, attendance=0).has_attendance
    with pytest.raises(ValueError):
        result.goals_for("Everton")


def test_result_rejects_negative_goals() -> None:
    """Negative scores are invalid."""

    with pytest.raises(ValueError):
        build_result(0, "Leeds", -1, "Fulham", 0)


def test_standard_record_counters_and_points_identity() -> None:
    """Counters add up and points follow the points system."""

    record = StandardRecord("Leeds", VenueType.BOTH, PointsSystem())
    for result in (
        build_result(0, "Leeds", 2, "Fulham", 0),
        build_result(7, "Everton", 1, "Leeds", 1),
        build_result(14, "Leeds", 0, "Wolves", 3),
        build_result(21, "Stoke", 1, "Leeds", 4),
    ):
        record.add_result(result)
    record.adjust_points(-2)

    assert record.played == record.won + record.drawn + record.lost == 4
    assert (record.won, record.drawn, record.lost) == (2, 1, 1)
    assert (record.scored, record.conceded) == (7, 5)
    assert record.goal_difference == 2
    assert record.points == 2 * 3 + 1 * 1 - 2
    assert record.dropped_points == 4 * 3 - 5
    assert record.average_points == pytest.approx(5 / 4)


def test_average_points_is_zero_before_any_match() -> None:
    """An empty record has no average and no key results."""

    record = StandardRecord("Leeds", VenueType.HOME, PointsSystem())

    assert record.average_points == 0.0
    assert record.key_result(KeyResultType.MOST_RECENT) is None


def test_key_results_track_biggest_win_defeat_and_latest() -> None:
    """Key results keep the biggest win, biggest defeat and latest match."""

    record = StandardRecord("Leeds", VenueType.BOTH, PointsSystem())
    small_win = build_result(0, "Leeds", 1, "Fulham", 0)
    big_win = build_result(7, "Stoke", 0, "Leeds", 4)
    equal_win = build_result(14, "Leeds", 4, "Wolves", 0)
    defeat = build_result(21, "Everton", 2, "Leeds", 0)
    for result in (small_win, big_win, equal_win, defeat):
        record.add_result(result)

    # Equally ranked wins keep the first one recorded.
    assert record.key_result(KeyResultType.BIGGEST_WIN) == big_win
    assert record.key_result(KeyResultType.BIGGEST_DEFEAT) == defeat
    assert record.key_result(KeyResultType.MOST_RECENT) == defeat


def test_sequences_track_current_and_best_runs() -> None:
    """Sequences track both the active run and the season best."""

    record = StandardRecord("Leeds", VenueType.BOTH, PointsSystem())
    for result in (
        build_result(0, "Leeds", 1, "Fulham", 0),
        build_result(7, "Leeds", 2, "Everton", 0),
        build_result(14, "Wolves", 1, "Leeds", 1),
        build_result(21, "Leeds", 0, "Stoke", 2),
        build_result(28, "Burnley", 0, "Leeds", 3),
    ):
        record.add_result(result)

    sequences = record.sequences
    assert sequences.best(SequenceType.WINS) == 2
    assert sequences.current(SequenceType.WINS) == 1
    assert sequences.best(SequenceType.UNBEATEN) == 3
    assert sequences.current(SequenceType.UNBEATEN) == 1
    assert sequences.best(SequenceType.CLEANSHEETS) == 2
    assert sequences.current(SequenceType.CLEANSHEETS) == 1
    assert sequences.current(SequenceType.NO_WIN) == 0
    assert sequences.best(SequenceType.NO_WIN) == 2
    assert sequences.best(SequenceType.NOT_SCORED) == 1
    assert sequences.get(SequenceType.SCORED, current=True) == 1
    assert sequences.get(SequenceType.SCORED, current=False) == 3


def test_form_string_pads_missing_matches_with_placeholders() -> None:
    """The form string is padded until the window is full."""

    form = FormRecord("Leeds", VenueType.BOTH, PointsSystem())
    form.add_result(build_result(0, "Leeds", 1, "Fulham", 1))
    form.add_result(build_result(7, "Everton", 0, "Leeds", 2))

    assert form.length == 6
    assert form.form == "----DW"


def test_form_window_keeps_only_most_recent_matches() -> None:
    """The form window drops matches older than its length."""

    form = FormRecord("Leeds", VenueType.HOME, PointsSystem())
    outcomes = [(2, 0), (0, 1), (1, 1), (3, 1), (0, 0), (2, 1)]
    for day, (home_goals, away_goals) in enumerate(outcomes):
        form.add_result(build_result(day * 7, "Leeds", home_goals, f"Team {day}", away_goals))

    assert form.length == 4
    assert form.form == "DWDW"
    assert len(form.form) == form.length
    assert form.played == form.won + form.drawn + form.lost == 4
    assert (form.scored, form.conceded) == (6, 3)
    assert form.points == 8


def test_form_stars_scale_points_to_five() -> None:
    """Form stars scale points won to a one to five rating."""

    form = FormRecord("Leeds", VenueType.BOTH, PointsSystem())
    assert form.stars == 1

    for day in range(3):
        form.add_result(build_result(day, "Leeds", 0, f"Team {day}", 1))
    assert form.stars == 1

    form.add_result(build_result(10, "Leeds", 1, "Team 10", 0))
    # 3 points from a possible 12: ceil(5 * 0.25) == 2.
    assert form.stars == 2

    winning = FormRecord("Stoke", VenueType.BOTH, PointsSystem())
    for day in range(6):
        winning.add_result(build_result(day, "Stoke", 2, f"Team {day}", 0))
    assert winning.stars == 5


def test_team_routes_results_to_venue_records() -> None:
    """Results feed the overall record and the matching venue record."""

    team = Team("Leeds")
    team.add_result(build_result(0, "Leeds", 2, "Fulham", 0, attendance=30000))
    team.add_result(build_result(7, "Everton", 1, "Leeds", 1, attendance=39000))
    team.add_result(build_result(14, "Leeds", 1, "Wolves", 0, attendance=34000))
    team.add_result(build_result(21, "Leeds", 0, "Stoke", 0))

    assert team.get_record(VenueType.HOME).played == 3
    assert team.get_record(VenueType.AWAY).played == 1
    assert team.get_record(VenueType.BOTH).played == 4
    assert team.attendance(AttendanceType.AGGREGATE) == 64000
    assert team.attendance(AttendanceType.HIGHEST) == 34000
    assert team.attendance(AttendanceType.LOWEST) == 30000
    assert team.attendance(AttendanceType.AVERAGE) == 21333


def test_team_rejects_results_it_did_not_play() -> None:
    """A team cannot record a match it did not play in."""

    team = Team("Leeds")

    with pytest.raises(ValueError):
        team.add_result(build_result(0, "Fulham", 1, "Everton", 0))


def test_points_adjustments_only_affect_the_overall_record() -> None:
    """Points adjustments change only the overall record."""

    team = Team("Leeds")
    team.add_result(build_result(0, "Leeds", 2, "Fulham", 0))
    team.adjust_points(-10, "10 points deducted.")

    assert team.get_record(VenueType.BOTH).points == -7
    assert team.get_record(VenueType.HOME).points == 3
    assert team.get_record(VenueType.BOTH).form_record.points == 3
    assert team.notes == ["10 points deducted."]


def test_points_series_accumulates_match_points() -> None:
    """The points series adds up match points without adjustments."""

    team = Team("Leeds", PointsSystem(points_for_win=2, points_for_draw=1))
    team.add_result(build_result(0, "Leeds", 2, "Fulham", 0))
    team.add_result(build_result(7, "Everton", 1, "Leeds", 1))
    team.add_result(build_result(14, "Leeds", 0, "Wolves", 3))

    assert team.points_series() == [(0, 0), (1, 2), (2, 3), (3, 3)]
