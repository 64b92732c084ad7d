"""
Word-level trie over a category dictionary.

Every dictionary term is split on whitespace and inserted token by token,
so multi-word phrases ("wing chair", "mid century modern") are found in
O(phrase length) from any start position instead of testing every n-gram.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..dictionaries import Dictionary
from ..models import MatchResult, TrieStats
from ..logger import get_logger

logger = get_logger(__name__)

TRIE_ALGORITHM = "Trie"


class TrieNode:
    """A node in the trie; terminal nodes carry the canonical label."""

    __slots__ = ("children", "is_terminal", "canonical_form", "original_term", "depth")

    def __init__(self, depth: int = 0):
        self.children: Dict[str, TrieNode] = {}
        self.is_terminal = False
        self.canonical_form: Optional[str] = None
        self.original_term: Optional[str] = None
        self.depth = depth


def _tokens(phrase: str) -> List[str]:
    return phrase.lower().split()


class DictionaryTrie:
    """
    Trie index for one category.

    Lookups only read ``self._root``. Rebuilds assemble a complete new root
    first and then swap the reference, so a lookup that already grabbed the
    old root finishes on a consistent structure.
    """

    def __init__(self, dictionary: Optional[Dictionary] = None, debug: bool = False):
        self.debug = debug
        self.dictionary = dictionary
        self._root = self._build(dictionary) if dictionary is not None else TrieNode()

    @staticmethod
    def _build(dictionary: Dictionary) -> TrieNode:
        root = TrieNode()
        canonical_map = dictionary.term_to_canonical

        for term in dictionary.all_terms:
            canonical = canonical_map.get(term) or term
            words = _tokens(term)
            if not words:
                continue

            node = root
            for i, word in enumerate(words):
                child = node.children.get(word)
                if child is None:
                    child = TrieNode(depth=i + 1)
                    node.children[word] = child
                node = child

            node.is_terminal = True
            node.canonical_form = canonical
            node.original_term = term

        return root

    def update_dictionary(self, dictionary: Dictionary) -> None:
        """Rebuild from a new dictionary and swap the root in one assignment."""
        new_root = self._build(dictionary)
        self.dictionary = dictionary
        self._root = new_root

    def _walk(self, tokens: Sequence[str], start: int) -> List[MatchResult]:
        """Every terminal reached walking forward from ``start``, shortest first."""
        if start < 0 or start >= len(tokens):
            return []

        node = self._root
        matches: List[MatchResult] = []

        for length, token in enumerate(tokens[start:], start=1):
            node = node.children.get(token.lower())
            if node is None:
                break

            if node.is_terminal and node.canonical_form:
                matches.append(MatchResult(
                    word=" ".join(tokens[start:start + length]),
                    match=node.original_term or node.canonical_form,
                    canonical_form=node.canonical_form,
                    score=1.0,
                    algorithm=TRIE_ALGORITHM,
                    position=start,
                    length=length,
                ))

        return matches

    def find_longest_match(self, tokens: Sequence[str], start: int) -> Optional[MatchResult]:
        """
        Longest known phrase starting at ``tokens[start]``.

        Returns:
            MatchResult covering [start, start + length) or None
        """
        matches = self._walk(tokens, start)
        if not matches:
            return None

        longest = matches[-1]
        if self.debug:
            logger.debug(
                f"Trie match found: '{longest.word}' => '{longest.canonical_form}' (length: {longest.length})"
            )
        return longest

    def find_all_matches(self, tokens: Sequence[str], start: int) -> List[MatchResult]:
        """All known phrases starting at ``tokens[start]``, shortest to longest."""
        return self._walk(tokens, start)

    def _descend(self, phrase: str) -> Optional[TrieNode]:
        node = self._root
        for word in _tokens(phrase):
            node = node.children.get(word)
            if node is None:
                return None
        return node

    def find_by_prefix(self, phrase: str) -> List[str]:
        """Canonical labels of every term under the given token prefix."""
        node = self._descend(phrase)
        if node is None:
            return []

        results: List[str] = []
        stack = [node]
        while stack:
            current = stack.pop()
            if current.is_terminal and current.canonical_form:
                results.append(current.canonical_form)
            stack.extend(reversed(list(current.children.values())))
        return results

    def contains(self, term: str) -> bool:
        node = self._descend(term)
        return node is not None and node is not self._root and node.is_terminal

    def canonical_form(self, term: str) -> Optional[str]:
        node = self._descend(term)
        if node is None or not node.is_terminal:
            return None
        return node.canonical_form

    def stats(self) -> TrieStats:
        """Node count, terminal count and maximum depth."""
        node_count = term_count = max_depth = 0
        stack = [(self._root, 0)]

        while stack:
            node, depth = stack.pop()
            node_count += 1
            max_depth = max(max_depth, depth)
            if node.is_terminal:
                term_count += 1
            stack.extend((child, depth + 1) for child in node.children.values())

        return TrieStats(node_count=node_count, term_count=term_count, max_depth=max_depth)
