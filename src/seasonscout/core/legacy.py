"""Legacy single-pass episode parser.

An older detection strategy kept for call sites that depend on its exact
behaviour. It shares nothing with :mod:`seasonscout.core.detector` beyond the
roman decoder and :class:`~seasonscout.models.core.MatchResult`, and the two
are not expected to agree on ambiguous input.

How it works:
- A short ordered list of patterns (``SxxEyy``, ``.epNN``, two date forms,
  ``NxYY``, ``part <roman>``) is tried against the *whole* string.
- Every pattern uses the same group layout: group 1 is the season, group 2
  the episode (digits or a roman numeral) and group 3 the trailing text.
- The trailing text is parsed again to pick up further episodes; when none are
  found it becomes the episode title (minus its extension).
- Per-pattern results are merged left to right: the first season, the first
  non-empty episode list and the first non-blank name win.

Date patterns follow the same group layout, so ``2019.03.04`` yields season
2019, episode 3 and name ``04``. That is long-standing behaviour of this path.
"""

from pathlib import PurePath
import re
from typing import Dict, NamedTuple, Optional, Tuple, Union

from seasonscout.core.detector import MAX_INPUT_LENGTH, check_length
from seasonscout.core.normalizer import base_name
from seasonscout.core.patterns import (
    DATE_DMY_RE,
    DATE_YMD_RE,
    LEGACY_EPNN_RE,
    LEGACY_NAME_PREFIX_RE,
    LEGACY_NXYY_RE,
    LEGACY_PART_ROMAN_RE,
    LEGACY_SEASON_RE,
    LEGACY_SXXEYY_RE,
    LEGACY_STACKING_RE,
)
from seasonscout.core.roman import decode_roman
from seasonscout.models.core import MatchResult
from seasonscout.utils.debug import debug, info

# Bare file or directory names; bounds the recursion into trailing text
LEGACY_MAX_INPUT_LENGTH = 255

LEGACY_PATTERNS: Tuple[re.Pattern[str], ...] = (
    LEGACY_SXXEYY_RE,
    LEGACY_EPNN_RE,
    DATE_YMD_RE,
    DATE_DMY_RE,
    LEGACY_NXYY_RE,
    LEGACY_PART_ROMAN_RE,
)


class _LegacyMatch(NamedTuple):
    season: int = -1
    episodes: Tuple[int, ...] = ()
    name: str = ""


def _to_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value) if value else None
    except ValueError:
        return None


def _add_episodes(episodes: Tuple[int, ...], new: Tuple[int, ...]) -> Tuple[int, ...]:
    return episodes + tuple(ep for ep in dict.fromkeys(new) if ep not in episodes)


def _parse(
    text: str, pattern: re.Pattern[str], memo: Dict[str, _LegacyMatch]
) -> _LegacyMatch:
    """Run a single legacy *pattern* over *text*."""
    season = -1
    episodes: Tuple[int, ...] = ()
    name = ""

    for match in pattern.finditer(text):
        episode = _to_int(match.group(2))
        if episode is None:
            # maybe roman notation
            episode = decode_roman(match.group(2) or "")
        if episode > 0 and episode not in episodes:
            episodes += (episode,)

        if season < 0:
            found = _to_int(match.group(1))
            season = found if found is not None else -1

        if not name.strip():
            remainder = match.group(3) or ""
            nested = _parse_string(" " + remainder, memo)
            if nested.episodes:
                episodes = _add_episodes(episodes, nested.episodes)
            else:
                name = base_name(remainder)

    return _LegacyMatch(season, episodes, name)


def _combine(result: _LegacyMatch, other: _LegacyMatch) -> _LegacyMatch:
    """Merge *other* into *result*; values already present win."""
    season = result.season
    if season < 0 and other.season >= 0:
        season = other.season

    episodes = result.episodes
    if not episodes and other.episodes:
        episodes = _add_episodes((), other.episodes)

    name = result.name
    if not name.strip() and other.name.strip():
        name = other.name

    return _LegacyMatch(season, episodes, name)


def _parse_string(text: str, memo: Dict[str, _LegacyMatch]) -> _LegacyMatch:
    # trailing text is re-parsed for every pattern; *memo* belongs to a single
    # top-level call so each distinct suffix is parsed at most once
    if text in memo:
        return memo[text]
    result = _LegacyMatch()
    for pattern in LEGACY_PATTERNS:
        result = _combine(result, _parse(text, pattern, memo))
    name = LEGACY_NAME_PREFIX_RE.sub("", result.name).strip()
    memo[text] = result._replace(name=name)
    return memo[text]


def parse_string(text: str, *, max_length: int = LEGACY_MAX_INPUT_LENGTH) -> MatchResult:
    """Parse *text* with the legacy pattern list, without stacking detection."""
    check_length(text, max_length)
    debug(f"parse String {text}")
    parsed = _parse_string(text, {})
    return MatchResult(season=parsed.season, episodes=parsed.episodes, name=parsed.name)


def parse_legacy(text: str, *, max_length: int = LEGACY_MAX_INPUT_LENGTH) -> MatchResult:
    """Detect season/episodes from a bare file or directory name.

    Args:
        text: A file or directory name, e.g. ``"Show.S01E02.Title.avi"``.
        max_length: Longest accepted *text*.

    Returns:
        MatchResult with sorted episodes and ``stacking_marker_found`` set when
        the detected name looks like a cd/part/disc stacking token.

    Raises:
        InputTooLongError: If *text* exceeds *max_length*.
    """
    debug(f"Detect episodes/seasons from file {text}")
    result = parse_string(text, max_length=max_length)
    stacking = LEGACY_STACKING_RE.fullmatch(result.name) is not None
    result = result.model_copy(update={"stacking_marker_found": stacking})
    debug(f"returning result {result!r}")
    return result


def detect_from_directory(
    directory: Union[str, PurePath],
    show_root: Union[str, PurePath, None],
) -> MatchResult:
    """Detect episodes from a directory name, walking up towards *show_root*.

    No file system access happens; paths are compared textually. The show
    root itself (or a missing root) never yields episode information.
    """
    current = PurePath(directory)
    if not show_root:
        return MatchResult()
    root = PurePath(show_root)

    while current != root and current.name:
        result = parse_string(current.name)
        if result.episodes:
            debug(f"returning result {result!r}")
            return result
        if current.parent == current:
            break
        # look one directory above
        current = current.parent

    return MatchResult()


def detect_season(relative_path: str) -> int:
    """Return the first ``s1``/``season 1``/``staffel 1`` number in the path, or -1."""
    check_length(relative_path, MAX_INPUT_LENGTH)
    info(f"detect season from path {relative_path}")
    match = LEGACY_SEASON_RE.search(relative_path)
    season = _to_int(match.group(1)) if match else None
    result = season if season is not None else -1
    debug(f"returning result {result}")
    return result
