"""Tests for the heuristic detection chain (detect / detect_alternative).

Covers the documented precedence between stages:
- SxxEyy multi-episode runs and the contiguity rule
- NxYY runs, episode keyword, roman part markers
- bare 3/2/1 digit runs and their early returns
- date short-circuit (year doubles as season)
- last-chance tokens with bracketed tags removed
- disc-layout collapse, show-name stripping, stacking markers
- input length guard
"""

import datetime
from concurrent.futures import ThreadPoolExecutor

import pytest

from seasonscout.core.detector import (
    MAX_INPUT_LENGTH,
    STAGES,
    detect,
    detect_alternative,
)
from seasonscout.core.errors import InputTooLongError, ParserError
from seasonscout.models.core import MatchResult

SAMPLE_NAMES = [
    "Show.Name.S01E02.mkv",
    "Show.Name.S01E02E03.mkv",
    "Show.Name.S01E02E04.mkv",
    "Show.Name.1x09.mkv",
    "Show.Name.1x09x10.mkv",
    "Show.Name.2019.03.04.mkv",
    "102.mkv",
    "12.mkv",
    "7.mkv",
    "Show.Name.Part.IV.mkv",
    "Show/Season 2/Show - 05.mkv",
    "[Grp-720] Show Name e12.mkv",
    "Show S02E05/BDMV/STREAM/00001.m2ts",
    "Show.S00E00.mkv",
    "",
    "Random_File_Name.mkv",
]


class TestSeasonEpisodePatterns:
    """SxxEyy and NxYY forms."""

    def test_single_episode(self):
        result = detect("Show.Name.S01E02.mkv", "Show Name")
        assert result.season == 1
        assert result.episodes == (2,)
        assert result.date is None

    def test_contiguous_multi_episode(self):
        result = detect("Show.Name.S01E02E03.mkv", "Show Name")
        assert result.season == 1
        assert result.episodes == (2, 3)

    def test_non_contiguous_multi_episode_is_rejected(self):
        """E04 does not follow E02, so only the first episode is kept."""
        result = detect("Show.Name.S01E02E04.mkv", "Show Name")
        assert result.season == 1
        assert result.episodes == (2,)

    def test_dash_separated_range(self):
        result = detect("Show.Name.S03E10-11.mkv")
        assert result.season == 3
        assert result.episodes == (10, 11)

    def test_season_x_episode(self):
        result = detect("Show.Name.1x09.mkv", "Show Name")
        assert result.season == 1
        assert result.episodes == (9,)

    def test_season_x_episode_run_has_no_contiguity_rule(self):
        result = detect("Show.Name.2x04x06.mkv")
        assert result.season == 2
        assert result.episodes == (4, 6)

    def test_season_keyword_from_folder(self):
        result = detect("Show/Season 2/Show - 05.mkv")
        assert result.season == 2
        assert result.episodes == (5,)

    def test_zero_episode_is_never_reported(self):
        result = detect("Show.S00E00.mkv")
        assert result.season == 0
        assert result.episodes == ()


class TestDigitRuns:
    """Bare digit runs are resolved before the looser heuristics."""

    def test_three_digits_read_as_season_and_episode(self):
        result = detect("102.mkv", "")
        assert result.season == 1
        assert result.episodes == (2,)

    def test_three_digit_match_is_authoritative(self):
        """The SEE reading ends detection and overrides a folder season."""
        result = detect("Season 5/102.mkv")
        assert result.season == 1
        assert result.episodes == (2,)

    def test_two_digits_read_as_episode(self):
        result = detect("12.mkv", "")
        assert result.episodes == (12,)
        assert result.season == -1

    def test_single_digit_read_as_episode(self):
        result = detect("Show Name 7.mkv", "Show Name")
        assert result.episodes == (7,)
        assert result.season == -1

    def test_three_digits_split_fall_back_to_two_digit_episode(self):
        """Only the two adjacent digits form the episode; no other stage matches."""
        result = detect("Show 1 - 23.mkv")
        assert result.episodes == (23,)
        assert result.season == -1

    def test_two_digit_fallback_keeps_folder_season(self):
        """Unlike the SEE reading, the fallback does not end detection."""
        result = detect("Season 2/Show 1 - 23.mkv")
        assert result.season == 2
        assert result.episodes == (23,)

    def test_episode_keyword_wins_over_digit_runs(self):
        result = detect("Show.Episode_12.Part.2.mkv")
        assert result.episodes == (12,)
        assert result.season == -1
        assert result.stacking_marker_found is True


class TestRomanAndKeywordPatterns:
    def test_roman_part_marker(self):
        result = detect("Show.Name.Part.IV.mkv")
        assert result.episodes == (4,)
        assert result.name == "Show Name"

    def test_episode_keyword(self):
        result = detect("Show Name episode 07 720p.mkv")
        assert result.episodes == (7,)


class TestDatePatterns:
    def test_year_month_day(self):
        result = detect("Show.Name.2019.03.04.mkv", "Show Name")
        assert result.date == datetime.date(2019, 3, 4)
        assert result.episodes == ()

    def test_year_doubles_as_season(self):
        """Daily shows use the air year as their season number."""
        result = detect("Show.Name.2019.03.04.mkv", "Show Name")
        assert result.season == 2019

    def test_date_short_circuits_trailing_numbers(self):
        """Without the early return the last-chance stage would find 3, 4 and 5."""
        result = detect("Show.Name.2019-03-04.E05.mkv")
        assert result.date == datetime.date(2019, 3, 4)
        assert result.episodes == ()

    def test_day_month_year(self):
        result = detect("Show.04.03.2019.mkv")
        assert result.date == datetime.date(2019, 3, 4)
        assert result.season == 2019

    def test_invalid_calendar_date_keeps_year(self):
        result = detect("Show.2019.13.45.mkv")
        assert result.date is None
        assert result.season == 2019
        assert result.episodes == ()


class TestLastChance:
    def test_bracket_tags_are_ignored(self):
        result = detect("[Grp-720] Show Name e12.mkv")
        assert result.episodes == (12,)
        assert result.season == -1

    def test_nothing_numeric(self):
        result = detect("Random_File_Name.mkv")
        assert result.season == -1
        assert result.episodes == ()
        assert result.name == "Random File Name"


class TestNormalization:
    def test_show_name_is_stripped_from_title(self):
        result = detect("Show Name - 1x03 - The Title.avi", "Show Name")
        assert result.season == 1
        assert result.episodes == (3,)
        assert result.name == "The Title"

    def test_title_keeps_words_after_numbering(self):
        result = detect("Show.Name.S01E02.The.Pilot.mkv")
        assert result.name == "Show Name The Pilot"

    def test_dvd_structure_collapses_to_folder(self):
        result = detect("Show/Season 3/VIDEO_TS.IFO")
        assert result.season == 3
        assert result.episodes == ()

    def test_bluray_structure_uses_folder_numbering(self):
        result = detect("Show S02E05/BDMV/STREAM/00001.m2ts")
        assert result.season == 2
        assert result.episodes == (5,)
        assert result.stacking_marker_found is False

    def test_stacking_marker(self):
        result = detect("Show.Name.S01E02.cd1.mkv")
        assert result.episodes == (2,)
        assert result.stacking_marker_found is True

    def test_bad_words_removed(self):
        result = detect("Show.S01E02.Title-RARBG.mkv", bad_words=["RARBG"])
        assert result.name == "Show Title"

    @pytest.mark.parametrize(
        "name",
        [
            "Show - ep١٢.mkv",  # arabic-indic digits
            "Show.S０１E０２.mkv",  # fullwidth digits
        ],
    )
    def test_only_ascii_digits_count(self, name):
        result = detect(name)
        assert result.season == -1
        assert result.episodes == ()

    @pytest.mark.parametrize("name", ["", "Show/"])
    def test_empty_input_returns_defaults(self, name):
        assert detect(name) == MatchResult()


class TestDetectAlternative:
    def test_season_taken_from_full_path(self):
        result = detect_alternative("Show/Season 2/Show - 05.mkv")
        assert result.season == 2
        assert result.episodes == (5,)

    def test_falls_back_to_full_path(self):
        result = detect_alternative("Show S03E04/video.mkv")
        assert result.season == 3
        assert result.episodes == (4,)

    def test_file_name_result_used_when_complete(self):
        name = "Season 9/Show.S01E02.mkv"
        assert detect_alternative(name) == detect("Show.S01E02.mkv")


class TestEngineGuarantees:
    def test_stage_order(self):
        assert [stage.name for stage in STAGES] == [
            "season_keyword",
            "season_multi_episode",
            "season_x_episode",
            "episode_keyword",
            "digit_run",
            "roman_part",
            "date_ymd",
            "date_dmy",
            "last_chance",
        ]

    @pytest.mark.parametrize("name", SAMPLE_NAMES)
    def test_episodes_strictly_ascending_and_positive(self, name):
        episodes = detect(name).episodes
        assert all(ep > 0 for ep in episodes)
        assert episodes == tuple(sorted(set(episodes)))

    @pytest.mark.parametrize("name", SAMPLE_NAMES)
    def test_detect_is_deterministic(self, name):
        assert detect(name, "Show Name") == detect(name, "Show Name")

    def test_concurrent_calls_match_sequential(self):
        expected = [detect(name) for name in SAMPLE_NAMES * 4]
        with ThreadPoolExecutor(max_workers=8) as pool:
            actual = list(pool.map(detect, SAMPLE_NAMES * 4))
        assert actual == expected

    def test_result_is_frozen(self):
        result = detect("Show.Name.S01E02.mkv")
        with pytest.raises(Exception):
            result.season = 5

    def test_too_long_input_is_rejected(self):
        with pytest.raises(InputTooLongError) as exc_info:
            detect("a" * (MAX_INPUT_LENGTH + 1))
        assert exc_info.value.length == MAX_INPUT_LENGTH + 1
        assert exc_info.value.limit == MAX_INPUT_LENGTH
        assert isinstance(exc_info.value, ParserError)

    def test_custom_length_limit(self):
        with pytest.raises(InputTooLongError):
            detect_alternative("Show.S01E02.mkv", max_length=5)
