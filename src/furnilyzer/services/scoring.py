"""
Confidence scoring and pass selection.

The analyzer runs two extraction orders over the same text. This module
scores each order's result and decides which one to keep. The keyword
checks against the raw query live here, as an ordered rule table, so they
can be tested and revised without touching the matching engine.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from ..logger import get_logger

logger = get_logger(__name__)


class Pass(str, Enum):
    """Extraction orders."""

    A = "A"  # features first
    B = "B"  # brand first


PRODUCT_NOUNS = ("sofa", "chair", "couch")
FEATURE_CUES = ("with", "elevated", "raised")
FEATURE_ONLY_CUES = ("arms", "elevated")
FEATURE_ONLY_PHRASES = ("elevated arms", "raised arms")
CONTEXTUAL_FEATURE_WORDS = ("elevated", "raised", "arms", "with")

# Score components
PRODUCT_TYPE_WEIGHT = 0.6
BRAND_WEIGHT = 0.2
FEATURE_WEIGHT = 0.03
CONTEXTUAL_FEATURE_BONUS = 0.1
MAX_FEATURE_SCORE = 0.15
STYLE_WEIGHT = 0.02
MAX_STYLE_SCORE = 0.08
PLACE_WEIGHT = 0.01
MAX_PLACE_SCORE = 0.02

# Context adjustments
FALSE_PRODUCT_TYPE_PENALTY = 0.4
FEATURE_ONLY_BONUS = 0.1
PRODUCT_WITH_FEATURES_BONUS = 0.15
BARE_PRODUCT_BONUS = 0.1
BARE_PRODUCT_MAX_WORDS = 2


@dataclass
class PassSummary:
    """What one extraction order found."""
    product_type: Optional[str] = None
    has_brand: bool = False
    features: List[str] = field(default_factory=list)
    styles: List[str] = field(default_factory=list)
    places: List[str] = field(default_factory=list)

    @property
    def has_product_and_features(self) -> bool:
        return bool(self.product_type) and len(self.features) > 0


def _contains_any(text: str, needles: Sequence[str]) -> bool:
    return any(n in text for n in needles)


def mentions_product(text: str) -> bool:
    """Raw-text check for a known product noun."""
    return _contains_any(text.lower(), PRODUCT_NOUNS)


def calculate_confidence(summary: PassSummary, original_text: str) -> float:
    """
    Heuristic confidence of one pass.

    Args:
        summary: Values found by the pass
        original_text: Query before cleaning

    Returns:
        Score clamped to [0, 1]
    """
    score = 0.0

    if summary.product_type:
        score += PRODUCT_TYPE_WEIGHT
    if summary.has_brand:
        score += BRAND_WEIGHT

    feature_score = len(summary.features) * FEATURE_WEIGHT
    if any(_contains_any(f.lower(), CONTEXTUAL_FEATURE_WORDS) for f in summary.features):
        feature_score += CONTEXTUAL_FEATURE_BONUS
    score += min(feature_score, MAX_FEATURE_SCORE)

    score += min(len(summary.styles) * STYLE_WEIGHT, MAX_STYLE_SCORE)
    score += min(len(summary.places) * PLACE_WEIGHT, MAX_PLACE_SCORE)

    text = (original_text or "").lower()
    has_product = mentions_product(text)

    if _contains_any(text, FEATURE_ONLY_PHRASES) and not has_product:
        if summary.product_type:
            score -= FALSE_PRODUCT_TYPE_PENALTY
        if summary.features:
            score += FEATURE_ONLY_BONUS
    elif has_product and _contains_any(text, FEATURE_CUES):
        if summary.has_product_and_features:
            score += PRODUCT_WITH_FEATURES_BONUS
    elif has_product and len(text.split()) <= BARE_PRODUCT_MAX_WORDS:
        if summary.product_type and not summary.features:
            score += BARE_PRODUCT_BONUS

    return min(max(score, 0.0), 1.0)


# ============================================================================
# PASS SELECTION RULES
# ============================================================================

@dataclass(frozen=True)
class SelectionContext:
    """Inputs available to every selection rule."""
    text: str
    pass_a: PassSummary
    pass_b: PassSummary
    confidence_a: float
    confidence_b: float

    def by_confidence(self) -> Pass:
        """Strictly higher confidence wins; ties go to pass A."""
        return Pass.B if self.confidence_b > self.confidence_a else Pass.A


@dataclass(frozen=True)
class SelectionRule:
    """A named rule; ``decide`` returns a pass or None when the rule does not apply."""
    name: str
    decide: Callable[[SelectionContext], Optional[Pass]]


@dataclass(frozen=True)
class PassSelection:
    """Chosen pass and the rule that chose it."""
    chosen: Pass
    rule: str


def _feature_only(ctx: SelectionContext) -> Optional[Pass]:
    """'elevated arms': A found only features while B also invented a product type."""
    text_is_features = _contains_any(ctx.text, FEATURE_ONLY_CUES) and not mentions_product(ctx.text)
    a_features_only = bool(ctx.pass_a.features) and ctx.pass_a.product_type is None
    if text_is_features and a_features_only and ctx.pass_b.has_product_and_features:
        return Pass.A
    return None


def _product_with_features(ctx: SelectionContext) -> Optional[Pass]:
    """'sofa with elevated arms': prefer the pass that found both parts."""
    if not (mentions_product(ctx.text) and _contains_any(ctx.text, FEATURE_CUES)):
        return None

    a_both = ctx.pass_a.has_product_and_features
    b_both = ctx.pass_b.has_product_and_features
    if a_both and not b_both:
        return Pass.A
    if b_both and not a_both:
        return Pass.B
    return ctx.by_confidence()


def _confidence(ctx: SelectionContext) -> Optional[Pass]:
    return ctx.by_confidence()


SELECTION_RULES: Tuple[SelectionRule, ...] = (
    SelectionRule("feature_only", _feature_only),
    SelectionRule("product_with_features", _product_with_features),
    SelectionRule("confidence", _confidence),
)


def select_pass(
    original_text: str,
    pass_a: PassSummary,
    pass_b: PassSummary,
    confidence_a: float,
    confidence_b: float,
    rules: Sequence[SelectionRule] = SELECTION_RULES,
) -> PassSelection:
    """
    Choose between the two extraction orders.

    Rules are evaluated in order; the first one that returns a pass wins.
    """
    ctx = SelectionContext(
        text=(original_text or "").lower(),
        pass_a=pass_a,
        pass_b=pass_b,
        confidence_a=confidence_a,
        confidence_b=confidence_b,
    )

    for rule in rules:
        chosen = rule.decide(ctx)
        if chosen is not None:
            return PassSelection(chosen=chosen, rule=rule.name)

    return PassSelection(chosen=ctx.by_confidence(), rule="confidence")
