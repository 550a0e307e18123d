"""Errors raised while ingesting a results feed."""
from __future__ import annotations


class FeedError(ValueError):
    """Base class for problems that make a results feed unusable."""


class FeedFormatError(FeedError):
    """Signal a malformed feed line (bad field count, number or date)."""

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None) -> None:
        """Store the offending line context alongside the message."""

        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"Line {line_number}: {message} ({line!r})"
        super().__init__(message)


class ChronologyError(FeedError):
    """Signal a result dated earlier than a result already read."""


class UnknownTeamError(FeedError, LookupError):
    """Signal a reference to a team that has not appeared in any result."""

    def __init__(self, team_name: str, message: str | None = None) -> None:
        """Remember the unknown team name for callers that need it."""

        self.team_name = team_name
        super().__init__(message or f"Unknown team: {team_name!r}.")


__all__ = [
    "ChronologyError",
    "FeedError",
    "FeedFormatError",
    "UnknownTeamError",
]
