"""Command-line entry point for running the Football Statistics API server."""
from __future__ import annotations

import logging

import uvicorn

from footballstats.config.settings import get_settings
from footballstats.main import create_app


def configure_logging(level: str) -> None:
    """Configure root logging once for the whole process."""

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Run the API server using Uvicorn."""

    settings = get_settings()
    configure_logging(settings.log_level)

    uvicorn.run(create_app(), host="0.0.0.0", port=8765, reload=False)


if __name__ == "__main__":
    main()
