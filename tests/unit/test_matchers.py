"""
Unit tests for the single word matchers.

Tests:
- Exact lookup
- Levenshtein tolerance and first-within-tolerance scanning
- Jaro-Winkler similarity (case-insensitive)
- Soundex encoding and phonetic matching
"""
import pytest

from furnilyzer.matching import (
    ExactMatcher,
    JaroWinklerMatcher,
    LevenshteinMatcher,
    SoundexMatcher,
    default_matchers,
)

TERMS = ["sofa", "couch", "armchair"]
CANONICAL = {"sofa": "Sofa", "couch": "Sofa", "armchair": "Armchair"}


class TestExactMatcher:

    @pytest.fixture
    def matcher(self):
        return ExactMatcher()

    def test_exact_hit(self, matcher):
        """Should return the canonical form with score 1."""
        match = matcher.find_match("Couch", TERMS, CANONICAL)

        assert match.canonical_form == "Sofa"
        assert match.match == "couch"
        assert match.score == 1.0
        assert match.algorithm == "Exact"

    def test_miss(self, matcher):
        """Should return None for an unknown term."""
        assert matcher.find_match("sofaa", TERMS, CANONICAL) is None


class TestLevenshteinMatcher:

    @pytest.fixture
    def matcher(self):
        return LevenshteinMatcher()

    def test_allowed_distance_scales_with_length(self):
        """Should allow more edits for longer words."""
        assert LevenshteinMatcher.max_allowed_distance("ab") == 1
        assert LevenshteinMatcher.max_allowed_distance("armchair") == 2
        assert LevenshteinMatcher.max_allowed_distance("scandinavian") == 4

    def test_one_edit(self, matcher):
        """Should match a word one edit away."""
        match = matcher.find_match("sofaa", TERMS, CANONICAL)

        assert match.canonical_form == "Sofa"
        assert match.score == pytest.approx(0.8)
        assert match.algorithm == "Levenshtein"

    def test_too_many_edits(self, matcher):
        """Should reject words beyond the allowed distance."""
        assert matcher.find_match("sfoaa", ["sofa"], {"sofa": "Sofa"}) is None

    def test_length_difference_skips_term(self, matcher):
        """Should skip terms whose length differs too much."""
        assert matcher.find_match("sofa", ["sofa table set"], {"sofa table set": "Sofa"}) is None

    def test_returns_first_term_within_tolerance(self, matcher):
        """Should return the first term within tolerance."""
        # "soft" is one edit away and comes first, so the exact "sofa" is never reached
        match = matcher.find_match("sofa", ["soft", "sofa"], {"soft": "Soft", "sofa": "Sofa"})
        assert match.canonical_form == "Soft"


class TestJaroWinklerMatcher:

    @pytest.fixture
    def matcher(self):
        return JaroWinklerMatcher()

    def test_misspelling(self, matcher):
        """Should match a misspelling above the threshold."""
        match = matcher.find_match("soafa", TERMS, CANONICAL)

        assert match.canonical_form == "Sofa"
        assert match.score == pytest.approx(0.88, abs=0.01)
        assert match.algorithm == "JaroWinkler"

    def test_case_insensitive(self, matcher):
        """Should ignore case."""
        match = matcher.find_match("ARMCHAIR", TERMS, CANONICAL)
        assert match.score == pytest.approx(1.0)

    def test_below_threshold(self, matcher):
        """Should reject similarity below the threshold."""
        assert matcher.find_match("xyz", TERMS, CANONICAL) is None

    def test_empty_terms(self, matcher):
        """Should return None for an empty term list."""
        assert matcher.find_match("sofa", [], {}) is None


class TestSoundexEncoding:
    """Tests for the Soundex code used by the phonetic matcher."""

    @pytest.mark.parametrize("word,code", [
        ("Robert", "R163"),
        ("Rupert", "R163"),
        ("Ashcraft", "A261"),
        ("Tymczak", "T522"),
        ("Pfister", "P236"),
        ("Lee", "L000"),
        ("sofa", "S100"),
    ])
    def test_codes(self, word, code):
        """Should produce the American Soundex code."""
        assert SoundexMatcher.encode(word) == code

    def test_ignores_non_letters(self):
        """Should encode only the letters of the word."""
        assert SoundexMatcher.encode("so-fa!") == "S100"

    def test_no_letters_has_no_code(self):
        """Should return None for a word without letters."""
        assert SoundexMatcher.encode("1882") is None


class TestSoundexMatcher:

    @pytest.fixture
    def matcher(self):
        return SoundexMatcher()

    def test_phonetic_match(self, matcher):
        """Should match a word that sounds like a term."""
        match = matcher.find_match("sofah", TERMS, CANONICAL)

        assert match.canonical_form == "Sofa"
        assert match.score == 1.0
        assert match.algorithm == "Soundex"

    def test_numeric_word_has_no_match(self, matcher):
        """Should not match a word without letters."""
        assert matcher.find_match("1882", TERMS, CANONICAL) is None

    def test_numeric_terms_are_skipped(self, matcher):
        """Should skip terms without letters."""
        match = matcher.find_match("sofa", ["1882", "sofa"], {"1882": "1882", "sofa": "Sofa"})
        assert match.canonical_form == "Sofa"


def test_default_matchers():
    """Should build the four standard matchers in order."""
    algorithms = [m.algorithm for m in default_matchers()]
    assert algorithms == ["JaroWinkler", "Exact", "Soundex", "Levenshtein"]
