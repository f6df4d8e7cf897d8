"""Unit tests for text_itemizer.shaping.language module."""

import pytest

from text_itemizer.shaping.language import (
    DEFAULT_LANGUAGE_INDEX,
    LANGUAGE_CODES,
    UNSUPPORTED_LANGUAGE_INDEX,
    harfbuzz_language,
    language_code,
    language_index,
)


class TestLanguageTable:
    """Tests for index/code lookups."""

    def test_default_is_first(self):
        assert LANGUAGE_CODES[DEFAULT_LANGUAGE_INDEX] == "default"
        assert language_index("default") == 0

    def test_known_codes(self):
        assert language_index("en") == 1
        assert language_code(language_index("ar")) == "ar"

    def test_unknown_code(self):
        assert language_index("xx") == UNSUPPORTED_LANGUAGE_INDEX == -1
        assert language_code(-1) is None
        assert language_code(len(LANGUAGE_CODES)) is None

    def test_codes_are_unique(self):
        assert len(set(LANGUAGE_CODES)) == len(LANGUAGE_CODES)


class TestHarfbuzzLanguage:
    """Tests for the index -> HarfBuzz language mapping."""

    @pytest.mark.parametrize("code", ["en", "ar", "he", "zh", "gsw", "hsb"])
    def test_real_languages_map_to_tags(self, code):
        assert harfbuzz_language(language_index(code)) == code

    @pytest.mark.parametrize("code", ["default", "int_name", "ko_rm", "zh_pinyin", "ja_kana"])
    def test_pseudo_languages_use_engine_default(self, code):
        assert harfbuzz_language(language_index(code)) is None

    @pytest.mark.parametrize("index", [-1, 64, 127, 1000])
    def test_unrecognized_index_uses_engine_default(self, index):
        assert harfbuzz_language(index) is None
