"""Parser turning the pipe-delimited results feed into a ``ResultsFeed``."""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

from footballstats.domain.errors import ChronologyError, FeedFormatError, UnknownTeamError
from footballstats.domain.models.result import Result
from footballstats.domain.models.results_feed import (
    LeagueZone,
    PointsAdjustment,
    PointsSystem,
    ResultsFeed,
)

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d%m%Y"
FIELD_SEPARATOR = "|"
COMMENT_PREFIX = "#"

POINTS_TAG = "POINTS"
PRIZE_TAG = "PRIZE"
RELEGATION_TAG = "RELEGATION"
AWARDED_TAG = "AWARDED"
DEDUCTED_TAG = "DEDUCTED"


class _LineContext:
    """Offending-line details attached to every error raised for a line."""

    def __init__(self, line_number: int, line: str) -> None:
        self.line_number = line_number
        self.line = line

    def error(self, message: str) -> FeedFormatError:
        logger.warning("Rejected results feed line %d: %s", self.line_number, message)
        return FeedFormatError(message, line_number=self.line_number, line=self.line)


class ResultsFeedParser:
    """Decode results and directives from the lines of a results feed.

    Results must appear in non-decreasing date order. The whole feed is
    validated before anything is returned, so a failed parse never yields a
    partially built feed.
    """

    def parse(self, lines: Iterable[str]) -> ResultsFeed:
        """Return the feed encoded by ``lines``."""

        results: List[Result] = []
        team_names: List[str] = []
        known_teams: set[str] = set()
        points_system = PointsSystem()
        prize_zones: List[LeagueZone] = []
        relegation_zones: List[LeagueZone] = []
        adjustments: List[PointsAdjustment] = []
        latest_date: Optional[date] = None

        for line_number, raw_line in enumerate(lines, start=1):
            line = raw_line.strip()
            if not line:
                continue
            if line.startswith(COMMENT_PREFIX):
                logger.debug("Skipping comment on line %d.", line_number)
                continue

            context = _LineContext(line_number, line)
            fields = [token.strip() for token in line.split(FIELD_SEPARATOR)]
            tag = fields[0]

            if tag[:1].isdigit():
                result = _parse_result(fields, context)
                if latest_date is not None and result.date < latest_date:
                    logger.warning("Results feed line %d is out of chronological order.", line_number)
                    raise ChronologyError(
                        f"Line {line_number}: result dated {result.date.isoformat()} follows "
                        f"results dated {latest_date.isoformat()}; results must be listed "
                        "in chronological order."
                    )
                latest_date = result.date
                for name in (result.home_team, result.away_team):
                    if name not in known_teams:
                        known_teams.add(name)
                        team_names.append(name)
                results.append(result)
            elif tag == POINTS_TAG:
                win, draw = _require_fields(fields, 2, context)
                points_system = PointsSystem(
                    points_for_win=_parse_int(win, "points for a win", context),
                    points_for_draw=_parse_int(draw, "points for a draw", context),
                )
            elif tag in (PRIZE_TAG, RELEGATION_TAG):
                zone = _parse_zone(fields, context)
                (prize_zones if tag == PRIZE_TAG else relegation_zones).append(zone)
            elif tag in (AWARDED_TAG, DEDUCTED_TAG):
                team_name, raw_amount = _require_fields(fields, 2, context)
                amount = _parse_int(raw_amount, "points adjustment", context)
                if team_name not in known_teams:
                    logger.warning("Results feed line %d adjusts unknown team %r.", line_number, team_name)
                    raise UnknownTeamError(
                        team_name,
                        f"Line {line_number}: cannot adjust points for unknown team {team_name!r}.",
                    )
                adjustments.append(
                    PointsAdjustment(team_name, -amount if tag == DEDUCTED_TAG else amount)
                )
            else:
                raise context.error(f"unrecognised record type {tag!r}")

        logger.info("Parsed %d results from the results feed.", len(results))
        return ResultsFeed(
            results=results,
            team_names=team_names,
            points_system=points_system,
            prize_zones=prize_zones,
            relegation_zones=relegation_zones,
            adjustments=adjustments,
        )

    def parse_text(self, text: str) -> ResultsFeed:
        """Parse a whole feed supplied as a single string."""

        return self.parse(text.splitlines())


def _require_fields(fields: Sequence[str], count: int, context: _LineContext) -> List[str]:
    """Return the ``count`` fields following the tag, all of which must be present."""

    values = list(fields[1 : count + 1])
    if len(values) < count or any(not value for value in values):
        raise context.error(f"expected {count} fields after {fields[0]!r}")
    return values


def _is_plain_number(value: str) -> bool:
    return value.isascii() and value.isdigit()


def parse_feed_date(value: str) -> date:
    """Convert an eight-digit ``ddMMyyyy`` token into a date.

    Raises ``ValueError`` for anything else, including tokens that
    ``strptime`` would accept with single-digit days or months.
    """

    if len(value) != 8 or not _is_plain_number(value):
        raise ValueError(f"invalid date {value!r}, expected ddMMyyyy")
    return datetime.strptime(value, DATE_FORMAT).date()


def _parse_int(value: str, description: str, context: _LineContext) -> int:
    if not _is_plain_number(value):
        raise context.error(f"invalid {description} {value!r}")
    return int(value)


def _parse_date(value: str, context: _LineContext) -> date:
    try:
        return parse_feed_date(value)
    except ValueError:
        raise context.error(f"invalid date {value!r}, expected ddMMyyyy") from None


def _parse_result(fields: Sequence[str], context: _LineContext) -> Result:
    match_date = _parse_date(fields[0], context)
    home_team, home_goals, away_team, away_goals = _require_fields(fields, 4, context)
    if home_team == away_team:
        raise context.error(f"{home_team!r} cannot play against itself")
    attendance: Optional[int] = None
    if len(fields) > 5 and fields[5]:
        attendance = _parse_int(fields[5], "attendance", context)

    try:
        return Result(
            home_team=home_team,
            away_team=away_team,
            home_goals=_parse_int(home_goals, "home score", context),
            away_goals=_parse_int(away_goals, "away score", context),
            date=match_date,
            attendance=attendance,
        )
    except FeedFormatError:
        raise
    except ValueError as error:
        raise context.error(str(error)) from error


def _parse_zone(fields: Sequence[str], context: _LineContext) -> LeagueZone:
    start, end, name = _require_fields(fields, 3, context)
    try:
        return LeagueZone(
            start_position=_parse_int(start, "zone start position", context),
            end_position=_parse_int(end, "zone end position", context),
            name=name,
        )
    except FeedFormatError:
        raise
    except ValueError as error:
        raise context.error(str(error)) from error


__all__ = ["DATE_FORMAT", "ResultsFeedParser", "parse_feed_date"]
