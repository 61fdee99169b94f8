# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""SeasonScout - season, episode and air date detection from video filenames."""

from seasonscout.__about__ import __version__
from seasonscout.core import (
    InputTooLongError,
    ParserError,
    clean_episode_title,
    decode_roman,
    detect,
    detect_alternative,
    detect_from_directory,
    detect_season,
    parse_legacy,
)
from seasonscout.models.core import MatchResult

__all__ = [
    "__version__",
    "InputTooLongError",
    "MatchResult",
    "ParserError",
    "clean_episode_title",
    "decode_roman",
    "detect",
    "detect_alternative",
    "detect_from_directory",
    "detect_season",
    "parse_legacy",
]
