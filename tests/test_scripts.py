"""Unit tests for text_itemizer.shaping.scripts module.

Tests cover script extension lookup (ordering, capping, failures), the
Inherited special case, script set intersection, script interval scanning
and the mapping to HarfBuzz script tags.
"""

import pytest

from text_itemizer.exceptions import InvariantError
from text_itemizer.shaping import scripts
from text_itemizer.shaping.scripts import (
    MAX_SCRIPTS,
    SCRIPT_UNKNOWN,
    harfbuzz_script,
    intersect_scripts,
    is_inherited,
    script_extensions,
    script_interval,
)
from text_itemizer.shaping.utf16 import to_utf16


class TestScriptExtensions:
    """Tests for script_extensions lookup."""

    def test_latin_letter(self):
        """A plain Latin letter belongs to Latin only."""
        assert script_extensions(ord("a")) == ("Latn",)

    def test_arabic_letter(self):
        """An Arabic letter belongs to Arabic."""
        assert script_extensions(ord("د")) == ("Arab",)

    def test_space_is_common(self):
        """Space has no script of its own."""
        assert script_extensions(ord(" ")) == ("Zyyy",)

    def test_prolonged_sound_mark_has_two_scripts(self):
        """U+30FC is shared by Hiragana and Katakana, Hiragana ranked first."""
        assert script_extensions(0x30FC) == ("Hira", "Kana")

    def test_out_of_range_codepoint_returns_empty(self):
        """Lookup failures yield an empty set instead of raising."""
        assert script_extensions(0x110000) == ()
        assert script_extensions(-1) == ()

    def test_library_error_returns_empty(self, monkeypatch, fresh_script_cache):
        """Errors raised by the Unicode database are swallowed into ()."""

        def broken(char):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(scripts.ft_unicodedata, "script_extension", broken)
        assert script_extensions(ord("a")) == ()

    def test_order_follows_code_space_not_alphabet(self, monkeypatch, fresh_script_cache):
        """Scripts are ranked by first appearance in Unicode, not by name."""
        monkeypatch.setattr(
            scripts.ft_unicodedata, "script_extension", lambda char: {"Arab", "Grek", "Latn"}
        )
        assert script_extensions(ord("a")) == ("Latn", "Grek", "Arab")

    def test_capped_at_max_scripts(self, monkeypatch, fresh_script_cache):
        """Only the first MAX_SCRIPTS entries are kept."""
        many = list(scripts._script_ranks())[:MAX_SCRIPTS + 8]
        monkeypatch.setattr(scripts.ft_unicodedata, "script_extension", lambda char: set(many))
        result = script_extensions(ord("a"))
        assert MAX_SCRIPTS == 32
        assert len(result) == MAX_SCRIPTS
        assert result == tuple(many[:MAX_SCRIPTS])


class TestIntersection:
    """Tests for is_inherited and intersect_scripts."""

    def test_is_inherited_only_for_exact_set(self):
        assert is_inherited(("Zinh",))
        assert not is_inherited(("Zinh", "Latn"))
        assert not is_inherited(())

    def test_inherited_codepoint_leaves_set_unchanged(self, monkeypatch, fresh_script_cache):
        """An Inherited-only code point adds no constraint."""
        monkeypatch.setattr(scripts.ft_unicodedata, "script_extension", lambda char: {"Zinh"})
        assert intersect_scripts(("Latn", "Grek"), 0x0300) == ("Latn", "Grek")

    def test_intersection_preserves_current_order(self):
        assert intersect_scripts(("Kana", "Hira"), 0x30FC) == ("Kana", "Hira")
        assert intersect_scripts(("Hira", "Kana"), ord("カ")) == ("Kana",)

    def test_disjoint_sets_give_empty(self):
        assert intersect_scripts(("Latn",), ord("د")) == ()


class TestScriptInterval:
    """Tests for script_interval scanning."""

    def test_single_script_text_is_one_interval(self):
        units = to_utf16("Hello")
        assert script_interval(units, 0, len(units)) == (5, "Latn")

    def test_stops_before_breaking_codepoint(self):
        units = to_utf16("abcدef")
        assert script_interval(units, 0, len(units)) == (3, "Latn")
        assert script_interval(units, 3, 3) == (1, "Arab")

    def test_respects_max_length(self):
        units = to_utf16("Hello")
        assert script_interval(units, 1, 2) == (2, "Latn")

    def test_combining_mark_joins_base(self):
        units = to_utf16("e\u0301")
        assert script_interval(units, 0, len(units)) == (2, "Latn")

    def test_shared_codepoint_narrows_to_neighbour(self):
        """The prolonged sound mark follows whichever kana comes next."""
        units = to_utf16("ーカ")
        assert script_interval(units, 0, len(units)) == (2, "Kana")
        units = to_utf16("ーな")
        assert script_interval(units, 0, len(units)) == (2, "Hira")

    def test_surrogate_pairs_count_two_units(self):
        units = to_utf16("\U0001d400\U0001d401")
        assert len(units) == 4
        assert script_interval(units, 0, 4) == (4, "Zyyy")

    def test_astral_break_offset_is_in_units(self):
        units = to_utf16("\U0001d400a")
        assert script_interval(units, 0, len(units)) == (2, "Zyyy")

    def test_lookup_failure_forces_boundary(self, monkeypatch, fresh_script_cache):
        """A code point without scripts ends the run and stands alone."""
        real = scripts.ft_unicodedata.script_extension

        def flaky(char):
            if char == "x":
                raise ValueError("no data")
            return real(char)

        monkeypatch.setattr(scripts.ft_unicodedata, "script_extension", flaky)
        units = to_utf16("axb")
        assert script_interval(units, 0, 3) == (1, "Latn")
        assert script_interval(units, 1, 2) == (1, None)
        assert script_interval(units, 2, 1) == (1, "Latn")

    @pytest.mark.parametrize("max_length", [0, -3])
    def test_non_positive_length_is_programming_error(self, max_length):
        with pytest.raises(InvariantError, match="positive length"):
            script_interval(to_utf16("abc"), 0, max_length)

    def test_range_outside_buffer_is_programming_error(self):
        with pytest.raises(InvariantError):
            script_interval(to_utf16("abc"), 2, 5)


class TestHarfbuzzScript:
    """Tests for the script identifier mapping."""

    @pytest.mark.parametrize("code", ["Latn", "Arab", "Hebr", "Zyyy", "Zinh"])
    def test_known_scripts_pass_through(self, code):
        assert harfbuzz_script(code) == code

    @pytest.mark.parametrize("code", [None, "", "Xxxx", "latin"])
    def test_unresolvable_falls_back_to_unknown(self, code):
        assert harfbuzz_script(code) == SCRIPT_UNKNOWN == "Zzzz"
