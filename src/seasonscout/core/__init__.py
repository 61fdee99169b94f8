"""Episode/season/date detection engine.

Two independent strategies share the :class:`~seasonscout.models.core.MatchResult`
type and the roman decoder:

- :func:`detect` / :func:`detect_alternative`: the ordered heuristic chain.
- :func:`parse_legacy`: the older single-pass parser.
"""

from seasonscout.core.detector import MAX_INPUT_LENGTH, detect, detect_alternative
from seasonscout.core.errors import InputTooLongError, ParserError
from seasonscout.core.legacy import (
    LEGACY_MAX_INPUT_LENGTH,
    detect_from_directory,
    detect_season,
    parse_legacy,
    parse_string,
)
from seasonscout.core.normalizer import clean_episode_title
from seasonscout.core.roman import decode_roman

__all__ = [
    "MAX_INPUT_LENGTH",
    "LEGACY_MAX_INPUT_LENGTH",
    "InputTooLongError",
    "ParserError",
    "clean_episode_title",
    "decode_roman",
    "detect",
    "detect_alternative",
    "detect_from_directory",
    "detect_season",
    "parse_legacy",
    "parse_string",
]
