"""
Canonicalizing dictionaries for the extraction categories.

A dictionary turns a list of entries (canonical label + synonyms +
spelling variations) into:
- a term -> canonical map used for exact lookups
- a flat term list used for fuzzy scanning
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

from ..models import DictionaryEntry, PlaceEntry, TermCollision, TermRecord
from ..logger import get_logger

logger = get_logger(__name__)


class Category(str, Enum):
    """The six extraction targets."""

    PRODUCT_TYPE = "ProductType"
    BRAND = "Brand"
    PRODUCT_NAME = "ProductName"
    FEATURE = "Feature"
    STYLE = "Style"
    PLACE = "Place"

    @classmethod
    def parse(cls, value: Union[str, "Category"]) -> "Category":
        """
        Resolve a category from its enum member or string value.

        Raises:
            ValueError: If the name is not a known category
        """
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value or str(value).upper() == member.name:
                return member
        raise ValueError(f"Unknown category: {value!r}")

    @property
    def multi_valued(self) -> bool:
        """Whether the extractor keeps every match instead of the first one."""
        return self in MULTI_VALUED_CATEGORIES


MULTI_VALUED_CATEGORIES = frozenset({Category.FEATURE, Category.STYLE, Category.PLACE})


def normalize_term(term: Any) -> str:
    """Lowercase, trim and collapse inner whitespace."""
    if not isinstance(term, str):
        return ""
    return " ".join(term.lower().split())


def _string_list(value: Any) -> List[str]:
    """A synonym field as a list of strings; a bare string is one synonym."""
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [v for v in value if isinstance(v, str)]


class Dictionary:
    """
    Normalized view over one category's entries.

    Built once; the maps are not mutated afterwards. To change the
    vocabulary build a new Dictionary and register it again.
    """

    def __init__(self, category: Union[str, Category], entries: Iterable[DictionaryEntry]):
        self.category = Category.parse(category)
        self._entries: List[DictionaryEntry] = list(entries)
        self._term_to_canonical: Dict[str, str] = {}
        self._all_terms: List[str] = []
        self._collisions: List[TermCollision] = []
        self._country_to_region: Dict[str, str] = {}

        self._build()

    @classmethod
    def from_records(cls, category: Union[str, Category], records: Iterable[TermRecord]) -> "Dictionary":
        """Build a dictionary from brand / product name records."""
        entries = [DictionaryEntry(canonical=r.name) for r in records if r.name]
        return cls(category, entries)

    @classmethod
    def from_dict(cls, category: Union[str, Category], payload: Union[Dict, List]) -> "Dictionary":
        """
        Build a dictionary from the JSON data-file shape.

        Accepts either {"entries": [...]} or a bare list. Each item may name
        its canonical label "canonical", "feature", "type" or "name", and may
        carry "synonyms", "spelling_variations" and "region".
        """
        items = payload.get("entries", []) if isinstance(payload, dict) else payload
        entries: List[DictionaryEntry] = []

        for item in items or []:
            if isinstance(item, str):
                entries.append(DictionaryEntry(canonical=item))
                continue
            if not isinstance(item, dict):
                continue

            canonical = (
                item.get("canonical")
                or item.get("feature")
                or item.get("type")
                or item.get("name")
                or ""
            )
            synonyms = _string_list(item.get("synonyms"))
            variations = _string_list(item.get("spelling_variations"))

            if isinstance(item.get("region"), str) and item["region"].strip():
                entries.append(PlaceEntry(
                    canonical=canonical,
                    synonyms=synonyms,
                    spelling_variations=variations,
                    region=item["region"],
                ))
            else:
                entries.append(DictionaryEntry(
                    canonical=canonical,
                    synonyms=synonyms,
                    spelling_variations=variations,
                ))

        return cls(category, entries)

    def _build(self) -> None:
        """Register every variant of every entry."""
        for entry in self._entries:
            canonical = entry.canonical.strip() if isinstance(entry.canonical, str) else ""
            if not canonical:
                logger.debug(f"Skipping {self.name} entry without a canonical label")
                continue

            for variant in entry.variants():
                term = normalize_term(variant)
                if term:
                    self._register(term, canonical)

            if isinstance(entry, PlaceEntry) and entry.region:
                self._country_to_region[canonical] = entry.region.strip()

        # Legacy encoding: a term written as "country: region"
        for term in self._all_terms:
            parts = term.split(":")
            if len(parts) == 2 and parts[0].strip() and parts[1].strip():
                country = parts[0].strip()
                canonical_country = self._term_to_canonical.get(country, country)
                self._country_to_region[canonical_country] = parts[1].strip()

        if self._collisions:
            logger.warning(
                f"{self.name} dictionary has {len(self._collisions)} term collisions "
                f"(last entry wins): {[c.term for c in self._collisions[:5]]}"
            )

    def _register(self, term: str, canonical: str) -> None:
        previous = self._term_to_canonical.get(term)
        if previous is None:
            self._all_terms.append(term)
        elif previous != canonical:
            self._collisions.append(TermCollision(term=term, previous=previous, current=canonical))
        self._term_to_canonical[term] = canonical

    @property
    def name(self) -> str:
        """Category name, e.g. "ProductType"."""
        return self.category.value

    @property
    def entries(self) -> List[DictionaryEntry]:
        return list(self._entries)

    @property
    def term_to_canonical(self) -> Dict[str, str]:
        return self._term_to_canonical

    @property
    def all_terms(self) -> List[str]:
        return self._all_terms

    @property
    def collisions(self) -> List[TermCollision]:
        return list(self._collisions)

    @property
    def country_to_region(self) -> Dict[str, str]:
        return dict(self._country_to_region)

    def canonical_for(self, term: str) -> Optional[str]:
        """Canonical label of a term, or None."""
        return self._term_to_canonical.get(normalize_term(term))

    def __len__(self) -> int:
        return len(self._all_terms)

    def __repr__(self) -> str:
        return f"Dictionary({self.name!r}, entries={len(self._entries)}, terms={len(self._all_terms)})"
