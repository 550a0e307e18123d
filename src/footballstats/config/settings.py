"""Application configuration helpers."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True)
class Settings:
    """Holds configuration values for the application."""

    data_dir: Path = Path("data")
    results_filename: str = "results.txt"
    app_version: str = "0.1.0"
    api_version: str = "v1"
    allowed_origins: Tuple[str, ...] = ("*",)
    max_upload_size_mb: int = 2
    log_level: str = "INFO"

    @property
    def results_path(self) -> Path:
        """Return the full path for storing the results feed."""

        return self.data_dir / self.results_filename

    @property
    def api_prefix(self) -> str:
        """Return the URL prefix used for versioned API routes."""

        return f"/api/{self.api_version}"

    @property
    def max_upload_size_bytes(self) -> int:
        """Return the maximum allowed upload size in bytes."""

        return self.max_upload_size_mb * 1024 * 1024


def get_settings() -> Settings:
    """Provide application settings, adapting storage for Azure deployments."""

    settings = Settings()
    log_level = os.getenv("LOG_LEVEL")
    if log_level:
        settings = replace(settings, log_level=log_level.upper())

    upload_dir = os.getenv("UPLOAD_DIR")
    if upload_dir:
        data_dir = Path(upload_dir).expanduser()
        return replace(settings, data_dir=data_dir)

    if os.getenv("WEBSITE_INSTANCE_ID"):
        persistent_dir = Path(
            os.getenv("APP_DATA_DIR", "/home/site/data")
        ).expanduser()
        return replace(settings, data_dir=persistent_dir)

    return settings
