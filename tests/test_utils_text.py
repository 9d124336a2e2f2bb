"""Tests for text utility functions."""

from __future__ import annotations

import pytest

from assetrefs.utils.text import contains_word, word_pattern


class TestContainsWord:
    """Test contains_word function."""

    def test_standalone_token(self) -> None:
        assert contains_word("m_Name: Explosion\n", "Explosion")

    def test_quoted_token(self) -> None:
        assert contains_word('Resources.Load("Explosion")', "Explosion")

    def test_substring_of_longer_word(self) -> None:
        """A name inside a longer identifier is not a match."""
        assert not contains_word("m_Name: ExplosionVFX", "Explosion")
        assert not contains_word("FooBar", "Bar")

    @pytest.mark.parametrize(
        "text",
        ["prefab: Enemy (1)\n", "spawn: 'Enemy (1)'", "Enemy (1)"],
    )
    def test_name_ending_in_punctuation(self, text: str) -> None:
        """Duplicate names like ``Enemy (1)`` match as standalone tokens."""
        assert contains_word(text, "Enemy (1)")

    def test_name_ending_in_punctuation_inside_longer_word(self) -> None:
        assert not contains_word("BigEnemy (1)", "Enemy (1)")
        assert not contains_word("(1)x", "(1)")

    def test_missing(self) -> None:
        assert not contains_word("nothing here", "Explosion")

    def test_empty_word(self) -> None:
        assert not contains_word("anything", "")

    @pytest.mark.parametrize("name", ["Boss (Variant)", "ui.atlas", "a+b"])
    def test_regex_characters_escaped(self, name: str) -> None:
        """Names are matched literally."""
        assert not contains_word("x" * 20, name)
        assert contains_word(f"load: {name}\n", name)


class TestWordPattern:
    """Test word_pattern caching."""

    def test_pattern_is_cached(self) -> None:
        assert word_pattern("Explosion") is word_pattern("Explosion")
