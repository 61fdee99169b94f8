"""Core domain models for seasonscout.

This module defines the result type shared by both detection strategies.
- MatchResult is the sole output of the engine: season, episode numbers, clean
  title, optional air date and the stacking-marker flag.
- Results are frozen once built; callers that need a variant derive a new
  instance with ``model_copy(update=...)``.

Design:
- ``season`` uses ``-1`` as the only "unknown" sentinel so results serialise
  to plain integers.
- ``episodes`` is normalised on construction: sorted ascending with
  duplicates dropped, and stored as a tuple. Zero and negative numbers are
  rejected outright.
"""

import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MatchResult(BaseModel):
    """Season/episode information inferred from a single filename.

    Created fresh per detection call and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    season: int = Field(default=-1, ge=-1)
    """Season number; -1 means undetermined. Date-named releases carry the
    air year here."""

    episodes: Tuple[int, ...] = ()
    """Episode numbers, ascending and unique. Several entries mean a
    multi-episode release."""

    name: str = ""
    """Residual episode title once all numbering tokens are stripped."""

    date: Optional[datetime.date] = None
    """Air date, only set when a date pattern fired."""

    stacking_marker_found: bool = False
    """True when the filename carries a cd/part/disc stacking token."""

    @field_validator("episodes")
    @classmethod
    def validate_episodes(cls, value: Tuple[int, ...]) -> Tuple[int, ...]:
        """Reject non-positive episode numbers and return them sorted and unique.

        Raises:
            ValueError: If any episode number is zero or negative.
        """
        invalid = [ep for ep in value if ep <= 0]
        if invalid:
            raise ValueError(f"Episode numbers must be positive: {invalid}")
        return tuple(sorted(set(value)))

    @property
    def has_season(self: "MatchResult") -> bool:
        """Whether a season (or date year) was detected."""
        return self.season != -1

    @property
    def has_episodes(self: "MatchResult") -> bool:
        """Whether at least one episode number was detected."""
        return bool(self.episodes)

    def __str__(self: "MatchResult") -> str:
        if self.date is not None:
            return self.date.isoformat()
        label = f"S{self.season:02d}" if self.has_season else ""
        label += "".join(f"E{ep:02d}" for ep in self.episodes)
        return label or "unknown"
