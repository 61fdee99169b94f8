"""Tests for path normalization and clean title extraction."""

import pytest

from seasonscout.core.normalizer import (
    base_name,
    clean_episode_title,
    get_stacking_marker,
    is_disc_file,
    normalize,
    remove_episode_variants,
    remove_stopwords_and_badwords,
    split_path,
    strip_extension_and_year,
    strip_show_name,
)


class TestSplitPath:
    def test_forward_slashes(self):
        assert split_path("Show/Season 1/Show.S01E02.mkv") == (
            "Show/Season 1/",
            "Show.S01E02 ",
        )

    def test_backslashes(self):
        assert split_path("Show\\Season 1\\ep.mkv") == ("Show\\Season 1\\", "ep ")

    def test_no_folder(self):
        assert split_path("Show.S01E02.mkv") == ("", "Show.S01E02 ")

    def test_disc_file_collapses_to_folder(self):
        assert split_path("Show/Disc 1/VIDEO_TS/VTS_01_1.VOB") == (
            "Show/Disc 1/VIDEO_TS/",
            " ",
        )

    def test_only_disc_file_is_empty(self):
        assert normalize("VIDEO_TS.IFO").is_empty


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("VIDEO_TS.IFO", True),
        ("vts_02_1.vob", True),
        ("VTS_01_0.BUP", True),
        ("index.bdmv", True),
        ("MovieObject.bdmv", True),
        ("00042.m2ts", True),
        ("0042.m2ts", False),
        ("Show.S01E02.vob", False),
    ],
)
def test_is_disc_file(filename, expected):
    assert is_disc_file(filename) is expected


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("Show.S01E02.cd1.mkv", "cd1"),
        ("Movie.part2.avi", "part2"),
        ("Movie pt 3.avi", "pt 3"),
        ("Movie.disc-a.avi", "disc-a"),
        ("Movie-b.avi", "b"),
        ("Show.S01E02.mkv", ""),
        ("", ""),
    ],
)
def test_get_stacking_marker(filename, expected):
    assert get_stacking_marker(filename) == expected


class TestNoiseRemoval:
    def test_stopwords(self):
        assert remove_stopwords_and_badwords("Show.720p.x264.S01E02") == "Show.S01E02"

    def test_stopword_must_be_delimited(self):
        assert remove_stopwords_and_badwords("Tsunami.S01E02") == "Tsunami.S01E02"

    def test_bad_words(self):
        assert (
            remove_stopwords_and_badwords("Show.S01E02-RARBG.mkv", ["rarbg"])
            == "Show.S01E02.mkv"
        )

    def test_blank_bad_words_are_ignored(self):
        assert remove_stopwords_and_badwords("Show.S01E02", [""]) == "Show.S01E02"


class TestStripping:
    def test_show_name_leading(self):
        assert strip_show_name("show name - 1x03", "Show Name") == " - 1x03"

    def test_show_name_inner(self):
        assert strip_show_name("1x03 Show Name Title", "Show Name") == "1x03Title"

    def test_show_name_regex_characters_are_literal(self):
        assert strip_show_name("Mr. Robot (US) 1x01", "Mr. Robot (US)") == " 1x01"

    def test_extension_and_year(self):
        assert strip_extension_and_year("Show (2015) S01E01.mkv") == "Show  S01E01"

    def test_long_extension_is_kept(self):
        assert strip_extension_and_year("Show.S01E02") == "Show.S01E02"

    def test_base_name(self):
        assert base_name("dir/.The.Pilot.mkv") == ".The.Pilot"
        assert base_name("Title") == "Title"


class TestCleanTitle:
    def test_clean_episode_title(self):
        assert clean_episode_title("Show.S01E01.The.Pilot.720p.mkv", "Show") == "The Pilot"

    def test_folder_is_dropped(self):
        assert clean_episode_title("Show/Season 1/Show - 1x05 Finale.avi", "Show") == "Finale"

    def test_everything_removed_falls_back_to_backup(self):
        assert remove_episode_variants("S01E02 ") == "S01E02"

    def test_separators_collapse(self):
        assert remove_episode_variants("[Grp] Some_Title,  (Extended)") == (
            "Grp Some Title Extended"
        )
