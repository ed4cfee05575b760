"""Tests for the display tokenizer."""

import pytest

from seq2seq_viz import tokenize


class TestTokenize:
    """Tests for tokenize()."""

    def test_splits_on_whitespace(self):
        """Test the basic whitespace split."""
        assert tokenize("how are you") == ["how", "are", "you"]

    def test_lowercases(self):
        """Test that tokens are lowercased."""
        assert tokenize("How ARE You") == ["how", "are", "you"]

    def test_commas_and_periods_separate_tokens(self):
        """Test that commas and periods act as separators."""
        assert tokenize("Hello, world. Bye") == ["hello", "world", "bye"]

    def test_runs_of_separators_collapse(self):
        """Mixed separator runs should not produce empty tokens."""
        assert tokenize("  one ,.  two\t\nthree...") == ["one", "two", "three"]

    def test_other_punctuation_is_kept(self):
        """Test that apostrophes and question marks stay in the token."""
        assert tokenize("what's up?") == ["what's", "up?"]

    def test_devanagari_text(self):
        """Test that Devanagari output splits like any other text."""
        assert tokenize("आप कैसे हैं") == ["आप", "कैसे", "हैं"]

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", ",.,", " . , "])
    def test_blank_input_yields_empty(self, text):
        """Test that blank or separator-only text yields no tokens."""
        assert tokenize(text) == []

    def test_deterministic(self):
        """Test that the same text always gives the same tokens."""
        text = "The quick, brown fox."
        assert tokenize(text) == tokenize(text)
