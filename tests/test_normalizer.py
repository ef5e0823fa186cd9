"""
Tests for text normalization.
"""

import pytest
from hypothesis import given, strategies as st

from lingua_drills.alignment import normalize


class TestNormalize:
    """Unit tests for normalize."""

    def test_case_and_punctuation_are_ignored(self):
        assert normalize("Hello, World!") == normalize("hello world")
        assert normalize("Hello, World!") == "hello world"

    def test_whitespace_is_collapsed_and_trimmed(self):
        assert normalize("  I   would\tlike \n a coffee  ") == "i would like a coffee"

    def test_empty_string(self):
        assert normalize("") == ""
        assert normalize("  ?!  ") == ""

    def test_punctuation_between_words_is_removed_not_split(self):
        assert normalize("don't") == "dont"
        assert normalize("well-known") == "wellknown"

    def test_underscore_is_stripped(self):
        assert normalize("snake_case") == "snakecase"

    def test_unicode_letters_and_digits_are_kept(self):
        assert normalize("Café au lait, 2 ¿por favor?") == "café au lait 2 por favor"
        assert normalize("我想要一杯咖啡。") == "我想要一杯咖啡"


class TestNormalizeProperties:
    """Property-based tests for normalize."""

    @pytest.mark.property
    @given(st.text())
    def test_normalize_is_idempotent(self, text):
        """Normalizing twice gives the same result as normalizing once."""
        once = normalize(text)
        assert normalize(once) == once

    @pytest.mark.property
    @given(st.text())
    def test_output_has_no_edge_or_double_spaces(self, text):
        result = normalize(text)
        assert result == result.strip()
        assert "  " not in result
