"""Utility modules for seasonscout."""

from seasonscout.utils.json import DateTimeEncoder

__all__ = [
    "DateTimeEncoder",
]
