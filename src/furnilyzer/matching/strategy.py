"""
Multi-algorithm matching strategy.

Runs every registered matcher on a word and picks one result using:
1. per-algorithm minimum thresholds
2. algorithm priority (exact first, phonetic last)
3. reliability-weighted score inside a priority group
4. a fuzzy floor that gets stricter as words get shorter
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from functools import cmp_to_key
from itertools import groupby
from typing import Dict, List, Optional, Sequence

from .matchers import TextMatcher
from ..models import MatchResult
from ..logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AlgorithmConfig:
    """Static ranking data for one algorithm (lower priority wins)."""
    priority: int
    reliability: float
    min_threshold: float


EXACT_PRIORITY = 1
LOWEST_PRIORITY = 4

DEFAULT_ALGORITHM_CONFIGS: Dict[str, AlgorithmConfig] = {
    "Exact": AlgorithmConfig(priority=EXACT_PRIORITY, reliability=1.0, min_threshold=1.0),
    "JaroWinkler": AlgorithmConfig(priority=2, reliability=0.85, min_threshold=0.8),
    "Levenshtein": AlgorithmConfig(priority=3, reliability=0.75, min_threshold=0.7),
    "Soundex": AlgorithmConfig(priority=LOWEST_PRIORITY, reliability=0.6, min_threshold=0.5),
}

# Used for matchers registered without a config entry
FALLBACK_CONFIG = AlgorithmConfig(priority=LOWEST_PRIORITY, reliability=1.0, min_threshold=0.5)

# Weighted scores closer than this are compared on raw score instead
SCORE_EPSILON = 0.001

MIN_WORD_LENGTH = 2


def min_fuzzy_score(word: str) -> float:
    """Length-adaptive acceptance floor for fuzzy matches."""
    if len(word) <= 3:
        return 0.9
    if len(word) <= 5:
        return 0.85
    if len(word) <= 8:
        return 0.8
    return 0.75


class MatchingStrategy:
    """Combines the registered matchers into a single best guess."""

    def __init__(self, debug: bool = False, matchers: Optional[Sequence[TextMatcher]] = None):
        self.debug = debug
        self._matchers: List[TextMatcher] = list(matchers or [])
        self._configs: Dict[str, AlgorithmConfig] = dict(DEFAULT_ALGORITHM_CONFIGS)

    def add_matcher(self, matcher: TextMatcher) -> None:
        self._matchers.append(matcher)

    @property
    def matchers(self) -> List[TextMatcher]:
        return list(self._matchers)

    def algorithm_configs(self) -> Dict[str, AlgorithmConfig]:
        """Copy of the per-algorithm configuration table."""
        return dict(self._configs)

    def update_algorithm_config(self, algorithm: str, **changes) -> None:
        """Override fields of a known algorithm's config; unknown names are ignored."""
        existing = self._configs.get(algorithm)
        if existing is not None:
            self._configs[algorithm] = replace(existing, **changes)

    def _config(self, match: MatchResult) -> AlgorithmConfig:
        return self._configs.get(match.algorithm, FALLBACK_CONFIG)

    def weighted_score(self, match: MatchResult) -> float:
        return match.score * self._config(match).reliability

    def _compare(self, a: MatchResult, b: MatchResult) -> int:
        priority_diff = self._config(a).priority - self._config(b).priority
        if priority_diff:
            return priority_diff

        weighted_diff = self.weighted_score(b) - self.weighted_score(a)
        if abs(weighted_diff) > SCORE_EPSILON:
            return 1 if weighted_diff > 0 else -1

        if b.score != a.score:
            return 1 if b.score > a.score else -1
        return 0

    def _collect(self, word: str, terms: Sequence[str], canonical_map: Dict[str, str]) -> List[MatchResult]:
        """Run every matcher and keep results that clear their algorithm's threshold."""
        candidates = []
        for matcher in self._matchers:
            match = matcher.find_match(word, terms, canonical_map)
            if match is not None:
                candidates.append(match)

        accepted = [m for m in candidates if m.score >= self._config(m).min_threshold]

        if self.debug and candidates and not accepted:
            logger.debug(f"All matches filtered out by thresholds for word: '{word}'")
        return accepted

    def find_best_match(
        self,
        word: str,
        terms: Sequence[str],
        canonical_map: Dict[str, str],
    ) -> Optional[MatchResult]:
        """
        Pick the best match for a word across all matchers.

        Args:
            word: Input word
            terms: Normalized dictionary terms
            canonical_map: Term -> canonical label map

        Returns:
            Accepted MatchResult or None
        """
        if len(word) < MIN_WORD_LENGTH:
            return None

        matches = self._collect(word, terms, canonical_map)
        if not matches:
            return None

        if self.debug:
            logger.debug(
                f"Found {len(matches)} matches for '{word}': "
                f"{[f'{m.algorithm}({m.score:.3f}) -> {m.canonical_form}' for m in matches]}"
            )

        by_priority = sorted(matches, key=lambda m: self._config(m).priority)
        floor = min_fuzzy_score(word)

        for priority, group in groupby(by_priority, key=lambda m: self._config(m).priority):
            group = list(group)

            if priority == EXACT_PRIORITY:
                if self.debug:
                    logger.debug(f"[EXACT MATCH] '{group[0].word}' => '{group[0].canonical_form}'")
                return group[0]

            group.sort(key=cmp_to_key(self._compare))
            best = group[0]

            if best.score >= floor:
                if self.debug:
                    logger.debug(
                        f"[BEST FUZZY MATCH] '{best.word}' => '{best.canonical_form}' "
                        f"({best.algorithm}, score: {best.score:.3f})"
                    )
                return best

            if self.debug:
                logger.debug(
                    f"[REJECTED] '{best.word}' => '{best.canonical_form}' "
                    f"({best.algorithm}, score: {best.score:.3f}) below threshold {floor}"
                )

        return None

    def find_top_matches(
        self,
        word: str,
        terms: Sequence[str],
        canonical_map: Dict[str, str],
        top_n: int = 3,
    ) -> List[MatchResult]:
        """Ranked candidates for a word, without the early exact-match return."""
        if len(word) < MIN_WORD_LENGTH:
            return []

        matches = self._collect(word, terms, canonical_map)
        matches.sort(key=cmp_to_key(self._compare))
        return matches[:top_n]
