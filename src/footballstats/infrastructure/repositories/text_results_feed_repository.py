"""Repository implementation that stores the results feed as a text file."""
from __future__ import annotations

from pathlib import Path

from footballstats.domain.repositories.results_feed_repository import ResultsFeedRepository


class TextResultsFeedRepository(ResultsFeedRepository):
    """Persist the results feed verbatim in a UTF-8 text file on disk."""

    def __init__(self, file_path: Path) -> None:
        """Initialize the repository with the destination file path."""

        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)

    def save(self, feed_text: str) -> None:
        """Write ``feed_text`` to the feed file."""

        with self._file_path.open("w", encoding="utf-8") as output_file:
            output_file.write(feed_text)

    def load(self) -> str | None:
        """Return the stored feed text, or ``None`` when no feed was saved."""

        if not self._file_path.exists():
            return None

        with self._file_path.open("r", encoding="utf-8") as input_file:
            return input_file.read()
