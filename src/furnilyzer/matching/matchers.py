"""
Single word / phrase matchers.

Every matcher compares one input against a category's term list and
returns at most one MatchResult:
- ExactMatcher: term -> canonical map lookup
- LevenshteinMatcher: edit distance with a length-scaled tolerance
- JaroWinklerMatcher: prefix-weighted similarity
- SoundexMatcher: phonetic code equality
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

import jellyfish
from rapidfuzz import process
from rapidfuzz.distance import JaroWinkler, Levenshtein

from ..models import MatchResult
from ..logger import get_logger

logger = get_logger(__name__)


class TextMatcher(ABC):
    """Base class for all matchers."""

    ALGORITHM: str = "Unknown"

    def __init__(self, debug: bool = False):
        self.debug = debug

    @property
    def algorithm(self) -> str:
        return self.ALGORITHM

    @abstractmethod
    def find_match(
        self,
        word: str,
        terms: Sequence[str],
        canonical_map: Dict[str, str],
    ) -> Optional[MatchResult]:
        """
        Match a word against a term list.

        Args:
            word: Input word or phrase
            terms: Normalized dictionary terms
            canonical_map: Term -> canonical label map

        Returns:
            MatchResult or None
        """

    def _result(self, word: str, term: str, canonical_map: Dict[str, str], score: float) -> MatchResult:
        return MatchResult(
            word=word,
            match=term,
            canonical_form=canonical_map.get(term, term),
            score=score,
            algorithm=self.ALGORITHM,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(debug={self.debug})"


class ExactMatcher(TextMatcher):
    """Exact lookup of the lowercased input in the canonical map."""

    ALGORITHM = "Exact"

    def find_match(self, word, terms, canonical_map):
        phrase = " ".join(word.lower().split())
        if phrase not in canonical_map:
            return None

        if self.debug:
            logger.debug(f"[Exact] '{phrase}' => '{canonical_map[phrase]}'")
        return self._result(phrase, phrase, canonical_map, 1.0)


class LevenshteinMatcher(TextMatcher):
    """
    Edit distance matcher.

    Terms are scanned in order and the first one within the allowed
    distance is returned; this is not a global minimum over all terms.
    """

    ALGORITHM = "Levenshtein"

    MAX_LENGTH_DIFFERENCE = 3

    @staticmethod
    def max_allowed_distance(word: str) -> int:
        """Shorter words tolerate fewer edits."""
        return max(1, len(word) // 3)

    def find_match(self, word, terms, canonical_map):
        best_term: Optional[str] = None
        best_distance: Optional[int] = None
        best_score = 0.0
        max_allowed = self.max_allowed_distance(word)

        for term in terms:
            if abs(len(term) - len(word)) > self.MAX_LENGTH_DIFFERENCE:
                continue

            distance = Levenshtein.distance(word, term)
            score = 1 - distance / max(len(word), len(term), 1)

            if self.debug and distance <= 2:
                logger.debug(f"[Levenshtein] '{word}' vs '{term}': distance={distance}, score={score:.3f}")

            if best_distance is None or distance < best_distance:
                best_term, best_distance, best_score = term, distance, score

            if best_distance <= max_allowed:
                return self._result(word, best_term, canonical_map, best_score)

        return None


class JaroWinklerMatcher(TextMatcher):
    """Case-insensitive Jaro-Winkler similarity, best term over the whole list."""

    ALGORITHM = "JaroWinkler"

    SIMILARITY_THRESHOLD = 0.8

    def find_match(self, word, terms, canonical_map):
        if not terms:
            return None

        best = process.extractOne(
            word,
            terms,
            scorer=JaroWinkler.similarity,
            processor=str.lower,
            score_cutoff=self.SIMILARITY_THRESHOLD,
        )
        if best is None:
            return None

        term, score, _ = best
        if self.debug:
            logger.debug(f"[JaroWinkler] '{word}' => '{term}' (score: {score:.3f})")
        return self._result(word, term, canonical_map, float(score))


class SoundexMatcher(TextMatcher):
    """Phonetic matcher: first term with the same Soundex code as the input."""

    ALGORITHM = "Soundex"

    @staticmethod
    def encode(text: str) -> Optional[str]:
        """
        Soundex code of the letters in text (e.g., "Robert" -> "R163").

        Returns None when the text has no letters to encode.
        """
        letters = "".join(c for c in text if c.isalpha())
        if not letters:
            return None
        return jellyfish.soundex(letters)

    def find_match(self, word, terms, canonical_map):
        word_code = self.encode(word)
        if word_code is None:
            if self.debug:
                logger.debug(f"[Soundex] no code for '{word}'")
            return None

        if self.debug:
            logger.debug(f"[Soundex] '{word}' code: {word_code}")

        for term in terms:
            if self.encode(term) == word_code:
                if self.debug:
                    logger.debug(f"[Soundex] '{word}' and '{term}' share code {word_code}")
                return self._result(word, term, canonical_map, 1.0)

        return None


def default_matchers(debug: bool = False) -> List[TextMatcher]:
    """The standard matcher set."""
    return [
        JaroWinklerMatcher(debug),
        ExactMatcher(debug),
        SoundexMatcher(debug),
        LevenshteinMatcher(debug),
    ]
