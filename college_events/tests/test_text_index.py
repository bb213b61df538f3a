"""Tests for the event text index helpers."""

from college_events.text_index import build_search_terms, tokenize


class TestTokenize:
    """Test cases for tokenize."""

    def test_lowercases_and_stems(self):
        """Test words are lowercased and reduced to their stems."""
        assert tokenize("Robotics Workshops") == tokenize("robotic workshop")

    def test_plural_and_singular_share_a_stem(self):
        """Test simple plurals collapse onto the singular."""
        assert tokenize("robots") == tokenize("robot")

    def test_drops_stop_words_and_punctuation(self):
        """Test stop words and punctuation produce no terms."""
        assert tokenize("the, and / of!") == []

    def test_removes_duplicates(self):
        """Test repeated words yield one term."""
        assert tokenize("Hack hack HACK") == ["hack"]

    def test_empty(self):
        """Test empty input yields no terms."""
        assert tokenize("") == []
        assert tokenize(None) == []


class TestBuildSearchTerms:
    """Test cases for build_search_terms."""

    def test_includes_title_and_type(self):
        """Test stored terms cover both title and type, space-delimited."""
        terms = build_search_terms("Jazz Night", "Concert")

        assert terms.startswith(" ") and terms.endswith(" ")
        for term in tokenize("Jazz Night Concert"):
            assert f" {term} " in terms
