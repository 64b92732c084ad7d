"""
Data models for Furnilyzer query analysis.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


# ============================================================================
# DICTIONARY DATA MODELS
# ============================================================================

@dataclass
class DictionaryEntry:
    """
    A canonical label with the surface forms that resolve to it.

    Attributes:
        canonical: Canonical label (e.g., "Sofa")
        synonyms: Alternative names (e.g., "couch", "settee")
        spelling_variations: Known misspellings (e.g., "soffas")
    """
    canonical: str
    synonyms: List[str] = field(default_factory=list)
    spelling_variations: List[str] = field(default_factory=list)

    def variants(self) -> List[str]:
        """All surface forms, canonical label first."""
        return [self.canonical, *self.synonyms, *self.spelling_variations]


@dataclass
class PlaceEntry(DictionaryEntry):
    """Dictionary entry for a country, tagged with the region it belongs to."""
    region: Optional[str] = None


@dataclass(frozen=True)
class TermRecord:
    """
    Brand or product name supplied by the term source.

    Attributes:
        id: Identifier in the backing store (if any)
        name: Display name, used as canonical label
        brand_id: Owning brand for product names
    """
    name: str
    id: Optional[Any] = None
    brand_id: Optional[Any] = None


@dataclass(frozen=True)
class TermCollision:
    """A normalized term that was claimed by two different canonical labels."""
    term: str
    previous: str
    current: str


# ============================================================================
# MATCHING DATA MODELS
# ============================================================================

@dataclass(frozen=True)
class MatchResult:
    """
    Single match produced by a matcher or the trie.

    Attributes:
        word: Input word or phrase
        match: Dictionary term that matched
        canonical_form: Canonical label of the matched term
        score: Match score in [0, 1]
        algorithm: Identifier of the producing algorithm
        position: Token index of the match in the scanned text
        length: Number of tokens covered
    """
    word: str
    match: str
    canonical_form: str
    score: float
    algorithm: str
    position: Optional[int] = None
    length: Optional[int] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = {
            "word": self.word,
            "match": self.match,
            "canonicalForm": self.canonical_form,
            "score": self.score,
            "algorithm": self.algorithm,
        }
        if self.position is not None:
            data["position"] = self.position
        if self.length is not None:
            data["length"] = self.length
        return data


@dataclass(frozen=True)
class TrieStats:
    """Diagnostic counters for a dictionary trie."""
    node_count: int
    term_count: int
    max_depth: int

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "node_count": self.node_count,
            "term_count": self.term_count,
            "max_depth": self.max_depth,
        }


# ============================================================================
# ANALYSIS DATA MODELS
# ============================================================================

@dataclass
class CategoryExtraction:
    """
    Output of one category extractor.

    Attributes:
        values: Canonical values found (at most one for single-valued categories)
        matches: Raw matches backing the values
        remaining_text: Input text with the matched tokens removed
    """
    values: List[str] = field(default_factory=list)
    matches: List[MatchResult] = field(default_factory=list)
    remaining_text: str = ""

    @property
    def first(self) -> Optional[str]:
        """First value or None."""
        return self.values[0] if self.values else None

    @property
    def first_match(self) -> Optional[MatchResult]:
        """First match or None."""
        return self.matches[0] if self.matches else None


@dataclass
class AnalysisResult:
    """
    Structured attributes extracted from one furniture search query.

    Attributes:
        original_text: Query as received
        product_type: Canonical product type (e.g., "Sofa")
        brand_name: Canonical brand name
        product_name: Canonical product name
        features: Canonical feature labels
        styles: Canonical style labels
        places: Canonical place labels (countries and regions)
        confidence: Heuristic confidence (0.0-1.0)
        match_details: Product type match of the selected pass (debug only)
    """
    original_text: str
    product_type: Optional[str] = None
    brand_name: Optional[str] = None
    product_name: Optional[str] = None
    features: List[str] = field(default_factory=list)
    styles: List[str] = field(default_factory=list)
    places: List[str] = field(default_factory=list)
    confidence: float = 0.0
    match_details: Optional[MatchResult] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: Dict[str, Any] = {
            "productType": self.product_type,
            "brandName": self.brand_name,
            "productName": self.product_name,
            "features": list(self.features),
            "styles": list(self.styles),
            "places": list(self.places),
            "originalText": self.original_text,
            "confidence": self.confidence,
        }
        if self.match_details is not None:
            data["matchDetails"] = self.match_details.to_dict()
        return data

    def is_empty(self) -> bool:
        """Check if nothing at all was recognized."""
        return not (
            self.product_type
            or self.brand_name
            or self.product_name
            or self.features
            or self.styles
            or self.places
        )
