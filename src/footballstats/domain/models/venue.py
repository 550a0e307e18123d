"""Venue filters used to scope team records."""
from __future__ import annotations

from enum import Enum


class VenueType(str, Enum):
    """Select matches played at home, away or at either venue."""

    HOME = "home"
    AWAY = "away"
    BOTH = "both"


__all__ = ["VenueType"]
