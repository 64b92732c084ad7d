"""
Matching engine: fuzzy matchers, the strategy that ranks them, and the
multi-word dictionary trie.
"""

from .matchers import (
    TextMatcher,
    ExactMatcher,
    LevenshteinMatcher,
    JaroWinklerMatcher,
    SoundexMatcher,
    default_matchers,
)
from .strategy import AlgorithmConfig, MatchingStrategy, min_fuzzy_score
from .trie import DictionaryTrie, TrieNode

__all__ = [
    'TextMatcher',
    'ExactMatcher',
    'LevenshteinMatcher',
    'JaroWinklerMatcher',
    'SoundexMatcher',
    'default_matchers',
    'AlgorithmConfig',
    'MatchingStrategy',
    'min_fuzzy_score',
    'DictionaryTrie',
    'TrieNode',
]
