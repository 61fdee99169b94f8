"""Season/episode/date detection for episodic video filenames.

This module is the primary entry point of the engine. It takes a relative path
(and optionally the series name) and infers season, episode number(s), air
date and a clean episode title.

Design:
- Detection is an ordered tuple of :class:`Stage` objects. Each stage looks at
  the current :class:`DetectionState` and returns either ``None`` (no match)
  or a :class:`StageOutcome` with a partial result.
- A single :func:`_merge` function folds outcomes into the state. An outcome
  flagged ``terminal`` ends detection immediately; this is how the short
  digit-run and date stages short-circuit the looser heuristics after them.
- The stage order *is* the precedence contract:

  1. season keyword (``season 2``, ``staffel 3``)
  2. ``S01E02E03`` multi-episode runs, contiguous only
  3. ``1x02x03`` runs
  4. ``episode 07`` keyword
  5. bare 3/2/1 digit runs
  6. ``Part IV`` roman markers
  7. ``YYYY-MM-DD`` then ``DD-MM-YYYY`` dates
  8. last-chance ``[epx_-]NN`` tokens

- All state is local to a call; the compiled patterns are module-level and
  read-only, so :func:`detect` is safe to call from many threads at once.
"""

import datetime
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from seasonscout.core.errors import InputTooLongError
from seasonscout.core.normalizer import (
    file_name,
    normalize,
    remove_episode_variants,
    strip_show_name,
)
from seasonscout.core.patterns import (
    BRACKET_TAG_RE,
    DATE_DMY_RE,
    DATE_YMD_RE,
    EPISODE_KEYWORD_RE,
    EPISODE_RE,
    NON_DIGITS_RE,
    NUMBERS2_RE,
    NUMBERS3_RE,
    ROMAN_RE,
    SEASON_MULTI_EP2_RE,
    SEASON_MULTI_EP_RE,
    SEASON_RE,
)
from seasonscout.core.roman import decode_roman
from seasonscout.models.core import MatchResult
from seasonscout.utils.debug import debug, trace_stage

MAX_INPUT_LENGTH = 1024  # Longest name accepted before any regex runs


@dataclass
class DetectionState:
    """Mutable working state for a single :func:`detect` call."""

    folder: str
    basename: str
    season: int = -1
    episodes: List[int] = field(default_factory=list)
    date: Optional[datetime.date] = None

    @property
    def full_text(self: "DetectionState") -> str:
        return self.folder + self.basename


@dataclass(frozen=True)
class StageOutcome:
    """Partial result contributed by one stage."""

    season: Optional[int] = None
    season_if_unknown: bool = False
    episodes: Tuple[int, ...] = ()
    date: Optional[datetime.date] = None
    terminal: bool = False


@dataclass(frozen=True)
class Stage:
    """A named heuristic in the detection chain."""

    name: str
    match: Callable[[DetectionState], Optional[StageOutcome]]


def _to_int(digits: Optional[str]) -> Optional[int]:
    """Convert a captured digit group, treating failures as no value."""
    try:
        return int(digits) if digits else None
    except ValueError:
        return None


def _episode_tokens(text: str) -> List[int]:
    return [ep for ep in (_to_int(m.group(1)) for m in EPISODE_RE.finditer(text)) if ep]


def _match_season_keyword(state: DetectionState) -> Optional[StageOutcome]:
    if state.season != -1:
        return None
    match = SEASON_RE.search(state.full_text)
    if not match:
        return None
    season = _to_int(match.group(2))
    return StageOutcome(season=season) if season is not None else None


def _match_season_multi_episode(state: DetectionState) -> Optional[StageOutcome]:
    season: Optional[int] = None
    episodes: List[int] = []
    last_found = 0
    for match in SEASON_MULTI_EP_RE.finditer(state.full_text):
        for ep in _episode_tokens(match.group(2)):
            # a multi episode run has to continue the previous number
            if ep not in state.episodes and ep not in episodes and (
                last_found == 0 or last_found + 1 == ep
            ):
                last_found = ep
                episodes.append(ep)
        found = _to_int(match.group(1))
        if found is not None:
            season = found
    if season is None and not episodes:
        return None
    return StageOutcome(season=season, episodes=tuple(episodes))


def _match_season_x_episode(state: DetectionState) -> Optional[StageOutcome]:
    season: Optional[int] = None
    episodes: List[int] = []
    for match in SEASON_MULTI_EP2_RE.finditer(state.full_text):
        if season is None:
            season = _to_int(match.group(1))
        episodes.extend(_episode_tokens(match.group(2)))
    if season is None and not episodes:
        return None
    return StageOutcome(season=season, season_if_unknown=True, episodes=tuple(episodes))


def _match_episode_keyword(state: DetectionState) -> Optional[StageOutcome]:
    if state.episodes:
        return None
    episodes = [
        ep
        for ep in (_to_int(m.group(1)) for m in EPISODE_KEYWORD_RE.finditer(state.basename))
        if ep
    ]
    return StageOutcome(episodes=tuple(episodes)) if episodes else None


def _match_digit_run(state: DetectionState) -> Optional[StageOutcome]:
    numbers = NON_DIGITS_RE.sub("", state.basename)

    if len(numbers) == 3:  # eg 102
        match = NUMBERS3_RE.search(state.basename)
        if match:
            # three subsequent digits read as season + two digit episode
            return StageOutcome(
                season=int(match.group(1)),
                episodes=(int(match.group(2)),),
                terminal=True,
            )
        match = NUMBERS2_RE.search(state.basename)
        if match:
            # the season may still turn up in a later stage
            return StageOutcome(episodes=(int(match.group(1)),))
        return None

    if len(numbers) == 2:  # eg 01
        match = NUMBERS2_RE.search(state.basename)
        if match:
            return StageOutcome(episodes=(int(match.group(1)),), terminal=True)
        return None

    if len(numbers) == 1:
        return StageOutcome(episodes=(int(numbers),), terminal=True)

    return None


def _match_roman_part(state: DetectionState) -> Optional[StageOutcome]:
    if state.episodes:
        return None
    episodes = [decode_roman(m.group(2)) for m in ROMAN_RE.finditer(state.basename)]
    episodes = [ep for ep in episodes if ep > 0]
    return StageOutcome(episodes=tuple(episodes)) if episodes else None


def _build_date(year: int, month: int, day: int) -> Optional[datetime.date]:
    try:
        return datetime.date(year, month, day)
    except ValueError:
        return None


def _match_date_ymd(state: DetectionState) -> Optional[StageOutcome]:
    if state.season != -1:
        return None
    match = DATE_YMD_RE.search(state.basename)
    if not match:
        return None
    year, month, day = (int(group) for group in match.groups())
    # the air year doubles as the season of daily shows
    return StageOutcome(season=year, date=_build_date(year, month, day), terminal=True)


def _match_date_dmy(state: DetectionState) -> Optional[StageOutcome]:
    if state.season != -1:
        return None
    match = DATE_DMY_RE.search(state.basename)
    if not match:
        return None
    day, month, year = (int(group) for group in match.groups())
    return StageOutcome(season=year, date=_build_date(year, month, day), terminal=True)


def _match_last_chance(state: DetectionState) -> Optional[StageOutcome]:
    # very generic and prone to false positives; must stay the final stage
    if state.episodes:
        return None
    episodes = _episode_tokens(BRACKET_TAG_RE.sub("", state.basename))
    return StageOutcome(episodes=tuple(episodes)) if episodes else None


STAGES: Tuple[Stage, ...] = (
    Stage("season_keyword", _match_season_keyword),
    Stage("season_multi_episode", _match_season_multi_episode),
    Stage("season_x_episode", _match_season_x_episode),
    Stage("episode_keyword", _match_episode_keyword),
    Stage("digit_run", _match_digit_run),
    Stage("roman_part", _match_roman_part),
    Stage("date_ymd", _match_date_ymd),
    Stage("date_dmy", _match_date_dmy),
    Stage("last_chance", _match_last_chance),
)


def _merge(state: DetectionState, outcome: StageOutcome) -> None:
    """Fold *outcome* into *state*."""
    if outcome.season is not None and (not outcome.season_if_unknown or state.season == -1):
        state.season = outcome.season
    for ep in outcome.episodes:
        if ep > 0 and ep not in state.episodes:
            state.episodes.append(ep)
    if outcome.date is not None:
        state.date = outcome.date


def check_length(name: str, max_length: int) -> None:
    """Raise :class:`InputTooLongError` when *name* is longer than *max_length*."""
    if len(name) > max_length:
        raise InputTooLongError(len(name), max_length)


def detect(
    name: str,
    show_name: str = "",
    *,
    bad_words: Iterable[str] = (),
    max_length: int = MAX_INPUT_LENGTH,
) -> MatchResult:
    """Detect season, episodes and date from a relative path.

    Args:
        name: The RELATIVE filename (like ``dir2/season1/fname.ext``) from
            the show root. May contain ``/`` or ``\\`` separators.
        show_name: Optional series name to strip before matching.
        bad_words: Extra release noise tokens to remove.
        max_length: Longest accepted *name*.

    Returns:
        A frozen MatchResult. Unparseable names yield season -1, no episodes
        and a best-effort title.

    Raises:
        InputTooLongError: If *name* exceeds *max_length*.
    """
    check_length(name, max_length)
    debug(f"parsing '{name}'")
    show_name = show_name or ""

    normalized = normalize(name, show_name, bad_words=bad_words)
    if normalized.is_empty:
        # everything was stripped out
        return MatchResult()

    title = remove_episode_variants(strip_show_name(normalized.basename, show_name))
    state = DetectionState(folder=normalized.folder, basename=normalized.basename)

    for stage in STAGES:
        outcome = stage.match(state)
        if outcome is None:
            continue
        trace_stage(stage.name, outcome)
        _merge(state, outcome)
        if outcome.terminal:
            break

    result = MatchResult(
        season=state.season,
        episodes=tuple(state.episodes),
        name=title,
        date=state.date,
        stacking_marker_found=normalized.stacking_marker_found,
    )
    debug(f"returning result {result!r}")
    return result


def detect_alternative(
    name: str,
    show_name: str = "",
    *,
    bad_words: Iterable[str] = (),
    max_length: int = MAX_INPUT_LENGTH,
) -> MatchResult:
    """Detect from the filename first and fall back to the whole path.

    * episodes but no season in the filename: the season is taken from a
      detection run over the full path, everything else is kept.
    * neither season nor episodes in the filename: the full-path result is
      returned as is.
    """
    check_length(name, max_length)
    result = detect(file_name(name), show_name, bad_words=bad_words, max_length=max_length)

    if result.episodes and result.season == -1:
        full = detect(name, show_name, bad_words=bad_words, max_length=max_length)
        result = result.model_copy(update={"season": full.season})
    elif result.season == -1 and not result.episodes:
        result = detect(name, show_name, bad_words=bad_words, max_length=max_length)

    return result
