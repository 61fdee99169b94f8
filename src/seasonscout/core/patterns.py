"""Compile-once regular expressions used by the episode detection engine.

Every pattern lives at module level and is compiled exactly once at import
time. Compiled patterns are never mutated afterwards, so they are shared by
all callers (threads included) without locking.

Patterns are grouped by consumer:
- normalizer: disc-layout files, folder split, extension/year tags, stacking
  markers, noise words and the title cleanup list.
- detector: the ordered heuristics run by :func:`seasonscout.core.detector.detect`.
- legacy: the narrower set tried by :func:`seasonscout.core.legacy.parse_string`.
"""

import re

# digits and word characters are ASCII only, matching the [0-9] classes below
_A = re.ASCII
_I = re.IGNORECASE | _A

# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------

# DVD and Blu-ray structure files carry no episode numbering of their own
DVD_FILE_RE = re.compile(r"(video_ts|vts_\d\d_\d)\.(vob|bup|ifo)", _I)
BLURAY_FILE_RE = re.compile(r"(index\.bdmv|movieobject\.bdmv|\d{5}\.m2ts)", _I)

FOLDER_RE = re.compile(r"(.*[\\/])")
EXTENSION_RE = re.compile(r"\.\w{1,4}$", _A)
YEAR_TAG_RE = re.compile(r"[(\[]\d{4}[)\]]", _A)
BRACKET_TAG_RE = re.compile(r"\[.*?\]")
TITLE_SEPARATORS_RE = re.compile(r"[\[\]\\() _,.-]+")

# cd1 / part2 / disc3 / dvd-b style markers directly before the extension
STACKING_MARKER_RES = (
    re.compile(r"(.*?)[ _.-]+((?:cd|dvd|p(?:ar)?t|dis[ck])[ _.-]*[0-9]+)(\.[^.]+)$", _I),
    re.compile(r"(.*?)[ _.-]+((?:cd|dvd|p(?:ar)?t|dis[ck])[ _.-]*[a-d])(\.[^.]+)$", _I),
    re.compile(r"(.*?)[ _.-]+([a-d])(\.[^.]+)$", _I),
)

STOPWORDS = (
    "ac3", "aac", "dts", "custom", "dc", "divx", "divx5", "dsr", "dsrip",
    "dutch", "dvd", "dvdrip", "dvdscr", "dvdscreener", "screener", "dvdivx",
    "cam", "fragment", "fs", "hdtv", "hdrip", "hdtvrip", "internal", "limited",
    "multisubs", "ntsc", "ogg", "ogm", "pal", "pdtv", "proper", "repack",
    "rerip", "retail", "r3", "r5", "bd5", "se", "svcd", "swedish", "german",
    "read.nfo", "nfofix", "unrated", "ws", "telesync", "ts", "telecine", "tc",
    "brrip", "bdrip", "webrip", "web-dl", "webdl", "480p", "480i", "576p",
    "576i", "720p", "720i", "1080p", "1080i", "2160p", "hrhd", "hrhdtv",
    "hddvd", "bluray", "x264", "h264", "x265", "h265", "hevc", "xvid",
    "xvidvd", "xxx", "www",
)

# a stopword must be delimited by non-word characters on both sides
STOPWORD_RES = tuple(
    re.compile(r"\W" + re.escape(word) + r"(\W|$)", _I) for word in STOPWORDS
)

# Numbering variants removed when computing the clean episode title. These
# mirror the detection heuristics without their trailing-context groups.
TITLE_CLEANUP_RES = (
    re.compile(r"s([0-9]+)[\]\[ _.-]*e([0-9]+)", _I),
    re.compile(r"[ _.-]()ep?_?([0-9]+)", _I),
    re.compile(r"([0-9]{4})[.-]([0-9]{2})[.-]([0-9]{2})", _I),
    re.compile(r"([0-9]{2})[.-]([0-9]{2})[.-]([0-9]{4})", _I),
    re.compile(r"[\\/._ \[(-]([0-9]+)x([0-9]+)", _I),
    re.compile(r"[/ _.-]p(?:ar)?t[ _.-]()([ivx]+)", _I),
    re.compile(r"[epx_-]+(\d{1,3})", _I),
    re.compile(r"episode[. _-]*(\d{1,2})", _I),
    re.compile(r"(part|pt)[._\s]+([MDCLXVI]+)", _I),
    re.compile(r"(staffel|season|series)[\s_.-]*(\d{1,4})", _I),
    re.compile(r"s(\d{1,4})((?:([epx_.-]+\d{1,3})+))", _I),
    re.compile(r"(\d{1,4})(?=x)((?:([epx]+\d{1,3})+))", _I),
)

# ---------------------------------------------------------------------------
# Detector
# ---------------------------------------------------------------------------

SEASON_RE = re.compile(r"(staffel|season|series)[\s_.-]*(\d{1,4})", _I)
# s01e02e03, s01ep02-03, s01_02, s01.02+03
SEASON_MULTI_EP_RE = re.compile(r"s(\d{1,4})((?:([epx_.+-]+\d{1,3})+))", _I)
# 1x02, 1x02x03
SEASON_MULTI_EP2_RE = re.compile(r"(\d{1,4})(?=x)((?:([epx]+\d{1,3})+))", _I)
EPISODE_RE = re.compile(r"[epx_-]+(\d{1,3})", _I)
EPISODE_KEYWORD_RE = re.compile(r"episode[. _-]*(\d{1,2})", _I)
ROMAN_RE = re.compile(r"(part|pt)[._\s]+([MDCLXVI]+)", _I)
NUMBERS2_RE = re.compile(r"([0-9]{2})")
NUMBERS3_RE = re.compile(r"([0-9])([0-9]{2})")
NON_DIGITS_RE = re.compile(r"[^0-9]")
DATE_YMD_RE = re.compile(r"([0-9]{4})[.-]([0-9]{2})[.-]([0-9]{2})")
DATE_DMY_RE = re.compile(r"([0-9]{2})[.-]([0-9]{2})[.-]([0-9]{4})")

# ---------------------------------------------------------------------------
# Legacy parser: group 1 = season, group 2 = episode, group 3 = remainder
# ---------------------------------------------------------------------------

# foo.s01.e01, foo.s01_e01, S01E02 foo, S01 - E02
LEGACY_SXXEYY_RE = re.compile(r"s([0-9]+)[\]\[ _.-]*e([0-9]+)([^\\/]*)$", _I)
# foo.ep01, foo.EP_01
LEGACY_EPNN_RE = re.compile(r"[ _.-]()ep?_?([0-9]+)([^\\/]*)$", _I)
# foo.1x09* or just /1x09*
LEGACY_NXYY_RE = re.compile(r"[\\/._ \[(-]([0-9]+)x([0-9]+)([^\\/]*)$", _I)
# Part I, Pt.VI
LEGACY_PART_ROMAN_RE = re.compile(r"[/ _.-]p(?:ar)?t[ _.-]()([ivx]+)([ _.-][^/]*)$", _I)
LEGACY_STACKING_RE = re.compile(
    r"((.*?)[ _.-]*((?:cd|dvd|p(?:ar)?t|dis[ck]|d)[ _.-]*([0-9]|[a-d])+)|^[a-d]{1})(.*?)",
    _I,
)
LEGACY_NAME_PREFIX_RE = re.compile(r"^[ .\-_]+")
LEGACY_SEASON_RE = re.compile(r"(?:s|season|staffel)\s*(\d+)", _I)
