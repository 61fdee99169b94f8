"""Name normalization for episode detection.

Turns a raw relative path (and an optional show name) into the pieces the
detection stages work on:

* disc-layout files (``VIDEO_TS.IFO``, ``index.bdmv``, ``00001.m2ts`` ...)
  collapse to their containing folder,
* release noise (stopwords plus caller-supplied bad words) is removed,
* the path is split into ``folder`` and ``basename`` at the last separator,
* the show name, a short file extension and a ``(YYYY)`` year tag are stripped
  from the basename.

It also owns the clean-title logic, which removes every recognised numbering
variant and re-joins what is left with single spaces.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Tuple

from seasonscout.core.patterns import (
    BLURAY_FILE_RE,
    DVD_FILE_RE,
    EXTENSION_RE,
    FOLDER_RE,
    STACKING_MARKER_RES,
    STOPWORD_RES,
    TITLE_CLEANUP_RES,
    TITLE_SEPARATORS_RE,
    YEAR_TAG_RE,
)


@dataclass(frozen=True)
class NormalizedName:
    """Result of normalizing a path before detection runs."""

    folder: str
    """Everything up to and including the last path separator."""

    basename: str
    """Stripped file component, always ending in a single space when non-empty."""

    filename: str
    """File component of the original, untouched input."""

    stacking_marker_found: bool = False

    @property
    def is_empty(self: "NormalizedName") -> bool:
        return not self.folder and not self.basename


def file_name(path: str) -> str:
    """Return the component after the last ``/`` or ``\\`` of *path*."""
    return re.split(r"[\\/]", path)[-1]


def folder_path(path: str) -> str:
    """Return *path* up to and including its last separator ('' if none)."""
    match = FOLDER_RE.match(path)
    return match.group(1) if match else ""


def base_name(path: str) -> str:
    """Return the file component of *path* without its last extension."""
    name = file_name(path)
    dot = name.rfind(".")
    return name[:dot] if dot != -1 else name


def is_disc_file(filename: str) -> bool:
    """Whether *filename* is a DVD/Blu-ray structure file."""
    return bool(DVD_FILE_RE.fullmatch(filename) or BLURAY_FILE_RE.fullmatch(filename))


def get_stacking_marker(filename: str) -> str:
    """Return the stacking token (``cd1``, ``part2``, ``b`` ...) or ''."""
    if not filename or not filename.strip():
        return ""
    for pattern in STACKING_MARKER_RES:
        match = pattern.match(filename)
        if match:
            return match.group(2)
    return ""


def remove_stopwords_and_badwords(name: str, bad_words: Iterable[str] = ()) -> str:
    """Strip release-group noise from *name*.

    Bad words are removed when preceded by, and again when followed by, a
    non-word character (they often come wrapped as ``[GROUP]`` or ``.GROUP``).
    Built-in stopwords must be delimited on both sides.
    """
    for word in bad_words:
        if not word:
            continue
        escaped = re.escape(word)
        name = re.sub(r"\W" + escaped, "", name, flags=re.IGNORECASE)
        name = re.sub(escaped + r"\W", "", name, flags=re.IGNORECASE)

    for pattern in STOPWORD_RES:
        name = pattern.sub(r"\1", name)
    return name


def strip_show_name(basename: str, show_name: str) -> str:
    """Remove *show_name* once at the start and once as a spaced inner word run."""
    if not show_name:
        return basename
    quoted = re.escape(show_name)
    basename = re.sub("^" + quoted, "", basename, count=1, flags=re.IGNORECASE)
    return re.sub(" " + quoted + " ", "", basename, count=1, flags=re.IGNORECASE)


def strip_extension_and_year(basename: str) -> str:
    """Drop a 1-4 character extension and a bracketed release year."""
    basename = EXTENSION_RE.sub("", basename, count=1)
    return YEAR_TAG_RE.sub("", basename, count=1)


def _join_words(text: str) -> str:
    return " ".join(part for part in TITLE_SEPARATORS_RE.split(text) if part)


def remove_episode_variants(title: str) -> str:
    """Remove all numbering tokens from *title* and normalise separators.

    Falls back to the separator-normalised input when nothing would be left.
    """
    backup = title
    for pattern in TITLE_CLEANUP_RES:
        title = pattern.sub("", title)

    cleaned = _join_words(title)
    if not cleaned:
        # removed too much
        cleaned = _join_words(backup)
    return cleaned


def clean_episode_title(title: str, show_name: str = "", *, bad_words: Iterable[str] = ()) -> str:
    """Derive a human readable episode title from a file or path name.

    Args:
        title: File name or relative path, extension included or not.
        show_name: Optional series name to strip.
        bad_words: Additional noise words to strip.

    Returns:
        The cleaned title, e.g. ``"The Pilot"`` for
        ``"Show.S01E01.The.Pilot.720p.mkv"`` with show name ``"Show"``.
    """
    basename = remove_stopwords_and_badwords(title, bad_words)
    basename = FOLDER_RE.sub("", basename)
    basename = strip_extension_and_year(basename)
    basename = strip_show_name(basename + " ", show_name)
    return remove_episode_variants(basename)


def normalize(name: str, show_name: str = "", *, bad_words: Iterable[str] = ()) -> NormalizedName:
    """Split *name* into folder and stripped basename for detection."""
    filename = file_name(name)
    if is_disc_file(filename):
        name = folder_path(name)

    stripped = remove_stopwords_and_badwords(name, bad_words)
    folder = folder_path(stripped)
    basename = stripped[len(folder):]
    stacking = bool(get_stacking_marker(filename))

    if not basename and not folder:
        return NormalizedName(folder="", basename="", filename=filename)

    basename = strip_show_name(basename, show_name)
    basename = strip_extension_and_year(basename) + " "
    return NormalizedName(
        folder=folder,
        basename=basename,
        filename=filename,
        stacking_marker_found=stacking,
    )


def split_path(name: str, show_name: str = "", *, bad_words: Iterable[str] = ()) -> Tuple[str, str]:
    """Return the ``(folder_prefix, basename)`` pair for *name*."""
    normalized = normalize(name, show_name, bad_words=bad_words)
    return normalized.folder, normalized.basename
