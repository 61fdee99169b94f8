"""Domain models for the seasonscout application."""

from seasonscout.models.core import MatchResult

__all__ = [
    "MatchResult",
]
