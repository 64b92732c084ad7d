"""
Furniture query analyzer.

Extracts product type, brand, product name, features, styles and places
from a free-form search query:
- punctuation is cleaned from the text
- each category is matched against its dictionary trie (longest phrase
  per position), falling back to fuzzy matching of single tokens
- matched tokens are removed before the next category runs
- two category orders are run and the better result is kept

Dictionaries and tries are built up front and only read while analyzing;
every analyze() call keeps its state in locals.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

from .scoring import Pass, PassSummary, calculate_confidence, select_pass
from ..dictionaries import Category, Dictionary
from ..matching import DictionaryTrie, MatchingStrategy, TextMatcher, default_matchers
from ..models import AnalysisResult, CategoryExtraction, MatchResult, TrieStats
from ..utils import clean_text, tokenize
from ..logger import get_logger

logger = get_logger(__name__)


class FurnitureAnalyzer:
    """
    Dictionary-driven attribute extraction for furniture search queries.

    Example:
        analyzer = FurnitureAnalyzer({Category.PRODUCT_TYPE: product_types})
        result = analyzer.analyze("soafa with elevated arms")
    """

    # Category order per pass
    PASS_ORDERS: Dict[Pass, Sequence[Category]] = {
        Pass.A: (
            Category.FEATURE,
            Category.PRODUCT_TYPE,
            Category.BRAND,
            Category.STYLE,
            Category.PLACE,
            Category.PRODUCT_NAME,
        ),
        Pass.B: (
            Category.BRAND,
            Category.PRODUCT_TYPE,
            Category.FEATURE,
            Category.STYLE,
            Category.PLACE,
            Category.PRODUCT_NAME,
        ),
    }

    # Structural furniture vocabulary that must never be read as a brand
    PART_NOUNS = frozenset({
        'legs', 'back', 'seat', 'arm', 'arms', 'cushion', 'cushions',
        'frame', 'base', 'top', 'surface', 'drawer', 'drawers',
        'door', 'doors', 'shelf', 'shelves', 'handle', 'handles',
        'leg', 'feet', 'foot', 'backrest', 'armrest', 'headrest',
    })

    # Fuzzy floor for multi-valued categories (feature, style, place)
    STRICT_FUZZY_SCORE = 0.95

    # Categories without fuzzy fallback (exact phrase only)
    EXACT_ONLY_CATEGORIES = frozenset({Category.PRODUCT_NAME})

    def __init__(
        self,
        dictionaries: Optional[Mapping[Union[str, Category], Dictionary]] = None,
        matchers: Optional[Sequence[TextMatcher]] = None,
        debug: bool = False,
    ):
        """
        Initialize the analyzer.

        Args:
            dictionaries: Category -> dictionary map; categories may be absent
            matchers: Fuzzy matchers; defaults to the standard four
            debug: Log matching decisions and attach match details to results
        """
        self.debug = debug
        self.matching_strategy = MatchingStrategy(debug=debug)
        # Category -> (dictionary, trie); replaced as a whole, never mutated
        self._registry: Dict[Category, Tuple[Dictionary, DictionaryTrie]] = {}

        for category, dictionary in (dictionaries or {}).items():
            self.add_dictionary(category, dictionary)

        for matcher in matchers or default_matchers(debug):
            self.matching_strategy.add_matcher(matcher)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_dictionary(self, category: Union[str, Category], dictionary: Dictionary) -> None:
        """
        Register or replace a category's dictionary.

        The new trie is fully built, then the dictionary and trie replace the
        old pair in a single assignment.
        """
        category = Category.parse(category)
        trie = DictionaryTrie(dictionary, debug=self.debug)

        registry = dict(self._registry)
        registry[category] = (dictionary, trie)
        self._registry = registry

        logger.info(f"Registered {category.value} dictionary ({len(dictionary.all_terms)} terms)")

    def add_matcher(self, matcher: TextMatcher) -> None:
        self.matching_strategy.add_matcher(matcher)

    def refresh_tries(self) -> None:
        """Rebuild every trie from its current dictionary and swap them in together."""
        self._registry = {
            category: (dictionary, DictionaryTrie(dictionary, debug=self.debug))
            for category, (dictionary, _) in self._registry.items()
        }

    def categories(self) -> List[Category]:
        return list(self._registry)

    def dictionary(self, category: Union[str, Category]) -> Optional[Dictionary]:
        entry = self._registry.get(Category.parse(category))
        return entry[0] if entry else None

    def trie_stats(self) -> Dict[str, TrieStats]:
        """Trie diagnostics per registered category."""
        return {category.value: trie.stats() for category, (_, trie) in self._registry.items()}

    # ------------------------------------------------------------------
    # Category extraction
    # ------------------------------------------------------------------

    def extract(self, category: Union[str, Category], text: str) -> CategoryExtraction:
        """
        Extract one category from text.

        Args:
            category: Category to extract
            text: Remaining (cleaned) text

        Returns:
            CategoryExtraction; remaining_text has the matched tokens removed
        """
        category = Category.parse(category)
        entry = self._registry.get(category)

        if entry is None:
            if self.debug:
                logger.debug(f"No {category.value} dictionary available")
            return CategoryExtraction(remaining_text=text)
        dictionary, trie = entry

        tokens = tokenize(text)
        if not tokens:
            return CategoryExtraction(remaining_text=text)

        if self.debug:
            logger.debug(f"Analyzing text for {category.value}: {tokens}")

        consumed: Set[int] = set()
        matches = self._scan_trie(category, trie, tokens, consumed)

        if not matches and category not in self.EXACT_ONLY_CATEGORIES:
            matches = self._fuzzy_fallback(category, dictionary, tokens, consumed)

        values = self._unique(m.canonical_form for m in matches)
        if category is Category.PLACE and values:
            values = self._with_region_countries(dictionary, values)

        remaining_text = " ".join(t for i, t in enumerate(tokens) if i not in consumed)

        if self.debug and consumed:
            logger.debug(f"Removed {len(consumed)} tokens for {category.value}; remaining: '{remaining_text}'")

        return CategoryExtraction(values=values, matches=matches, remaining_text=remaining_text)

    def _scan_trie(
        self,
        category: Category,
        trie: DictionaryTrie,
        tokens: List[str],
        consumed: Set[int],
    ) -> List[MatchResult]:
        """Longest, non-overlapping trie matches scanning left to right."""
        matches: List[MatchResult] = []
        i = 0

        while i < len(tokens):
            match = self._trie_match_at(category, trie, tokens, i)
            if match is None:
                i += 1
                continue

            matches.append(match)
            consumed.update(range(i, i + match.length))
            if not category.multi_valued:
                break
            i += match.length

        return matches

    def _trie_match_at(
        self,
        category: Category,
        trie: DictionaryTrie,
        tokens: List[str],
        start: int,
    ) -> Optional[MatchResult]:
        if category is not Category.BRAND:
            return trie.find_longest_match(tokens, start)

        # A phrase containing a part noun is never a brand; longer phrases
        # extend shorter ones, so stop at the first one that contains one
        best = None
        for match in trie.find_all_matches(tokens, start):
            if any(tokens[j] in self.PART_NOUNS for j in range(start, start + match.length)):
                break
            best = match
        return best

    def _fuzzy_fallback(
        self,
        category: Category,
        dictionary: Dictionary,
        tokens: List[str],
        consumed: Set[int],
    ) -> List[MatchResult]:
        """Match single leftover tokens with the matching strategy."""
        terms = dictionary.all_terms
        canonical_map = dictionary.term_to_canonical
        candidates: List[MatchResult] = []

        for i, token in enumerate(tokens):
            if i in consumed:
                continue
            if category is Category.BRAND and (token in self.PART_NOUNS or token.isdigit()):
                if self.debug:
                    logger.debug(f"Skipping non-brand token: '{token}'")
                continue

            match = self.matching_strategy.find_best_match(token, terms, canonical_map)
            if match is None:
                continue
            if category.multi_valued and match.score < self.STRICT_FUZZY_SCORE:
                continue

            candidates.append(replace(match, position=i, length=1))

        if not candidates:
            return []

        if self.debug:
            logger.debug(
                f"Fuzzy {category.value} candidates: "
                f"{[f'{m.word}->{m.canonical_form} ({m.algorithm}, {m.score:.3f})' for m in candidates]}"
            )

        if category.multi_valued:
            consumed.update(m.position for m in candidates)
            return candidates

        # Highest score wins; max() keeps the earliest on ties
        best = max(candidates, key=lambda m: m.score)
        consumed.add(best.position)
        return [best]

    @staticmethod
    def _unique(values: Iterable[str]) -> List[str]:
        seen: Set[str] = set()
        ordered = []
        for value in values:
            if value not in seen:
                seen.add(value)
                ordered.append(value)
        return ordered

    def _with_region_countries(self, dictionary: Dictionary, places: List[str]) -> List[str]:
        """Add the countries of every matched region."""
        regions = {p.lower() for p in places}
        countries = [
            country
            for country, region in dictionary.country_to_region.items()
            if region.lower() in regions
        ]
        return self._unique([*places, *countries])

    def extract_product_type(self, text: str) -> CategoryExtraction:
        return self.extract(Category.PRODUCT_TYPE, text)

    def extract_brand_name(self, text: str) -> CategoryExtraction:
        return self.extract(Category.BRAND, text)

    def extract_product_name(self, text: str) -> CategoryExtraction:
        return self.extract(Category.PRODUCT_NAME, text)

    def extract_features(self, text: str) -> CategoryExtraction:
        return self.extract(Category.FEATURE, text)

    def extract_styles(self, text: str) -> CategoryExtraction:
        return self.extract(Category.STYLE, text)

    def extract_places(self, text: str) -> CategoryExtraction:
        return self.extract(Category.PLACE, text)

    def suggest(self, category: Union[str, Category], word: str, top_n: int = 3) -> List[MatchResult]:
        """Ranked fuzzy candidates for a single word in one category."""
        dictionary = self.dictionary(category)
        if dictionary is None:
            return []
        return self.matching_strategy.find_top_matches(
            word.lower().strip(), dictionary.all_terms, dictionary.term_to_canonical, top_n
        )

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def _run_pass(self, order: Sequence[Category], text: str) -> Dict[Category, CategoryExtraction]:
        """Run the extractors in order, each on what the previous ones left."""
        extractions: Dict[Category, CategoryExtraction] = {}
        current = text

        for category in order:
            extraction = self.extract(category, current)
            extractions[category] = extraction
            current = extraction.remaining_text

        return extractions

    @staticmethod
    def _summarize(extractions: Dict[Category, CategoryExtraction]) -> PassSummary:
        return PassSummary(
            product_type=extractions[Category.PRODUCT_TYPE].first,
            has_brand=extractions[Category.BRAND].first is not None,
            features=extractions[Category.FEATURE].values,
            styles=extractions[Category.STYLE].values,
            places=extractions[Category.PLACE].values,
        )

    def analyze(self, text: str) -> AnalysisResult:
        """
        Analyze a search query.

        Args:
            text: Free-form query, e.g. "grey chesterfield sofa from italy"

        Returns:
            AnalysisResult; empty input yields an empty result with confidence 0
        """
        original_text = text if isinstance(text, str) else ""
        cleaned = clean_text(original_text)

        if self.debug:
            logger.debug(f"Starting analysis with text: '{original_text}' (cleaned: '{cleaned}')")

        passes = {p: self._run_pass(order, cleaned) for p, order in self.PASS_ORDERS.items()}
        summaries = {p: self._summarize(extractions) for p, extractions in passes.items()}
        confidences = {p: calculate_confidence(summaries[p], original_text) for p in passes}

        selection = select_pass(
            original_text,
            summaries[Pass.A],
            summaries[Pass.B],
            confidences[Pass.A],
            confidences[Pass.B],
        )
        chosen = passes[selection.chosen]

        if self.debug:
            for p in passes:
                logger.debug(f"Pass {p.value}: {summaries[p]} confidence={confidences[p]:.3f}")
            logger.debug(f"Selected pass {selection.chosen.value} (rule: {selection.rule})")

        result = AnalysisResult(
            original_text=original_text,
            product_type=chosen[Category.PRODUCT_TYPE].first,
            brand_name=chosen[Category.BRAND].first,
            product_name=chosen[Category.PRODUCT_NAME].first,
            features=list(chosen[Category.FEATURE].values),
            styles=list(chosen[Category.STYLE].values),
            places=list(chosen[Category.PLACE].values),
            confidence=confidences[selection.chosen],
        )

        if self.debug:
            result.match_details = chosen[Category.PRODUCT_TYPE].first_match

        return result

    def analyze_batch(self, texts: Iterable[str]) -> List[AnalysisResult]:
        """Analyze several queries in order."""
        return [self.analyze(text) for text in texts]
