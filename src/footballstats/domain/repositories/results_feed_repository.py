"""Repository abstraction for persisting the raw results feed."""
from __future__ import annotations

from typing import Protocol


class ResultsFeedRepository(Protocol):
    """Persist and retrieve the text of the current season's results feed."""

    def save(self, feed_text: str) -> None:
        """Persist the provided feed text, replacing any previous feed."""

    def load(self) -> str | None:
        """Return the stored feed text when available."""
