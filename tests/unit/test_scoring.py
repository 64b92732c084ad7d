"""
Unit tests for confidence scoring and pass selection.
"""
import pytest

from furnilyzer.services.scoring import (
    Pass,
    PassSummary,
    SelectionRule,
    calculate_confidence,
    mentions_product,
    select_pass,
)


class TestCalculateConfidence:

    def test_empty_summary(self):
        """Should score an empty pass as zero."""
        assert calculate_confidence(PassSummary(), "") == 0.0

    def test_product_type_only(self):
        """Should score a product type alone."""
        score = calculate_confidence(PassSummary(product_type="Armchair"), "bolzan armchir velvet")
        assert score == pytest.approx(0.6)

    def test_bare_product_bonus(self):
        """Should add the bonus for a bare product query."""
        score = calculate_confidence(PassSummary(product_type="Sofa"), "sofa")
        assert score == pytest.approx(0.7)

    def test_product_with_features_bonus(self):
        """Should add the bonus for a product with features."""
        summary = PassSummary(product_type="Sofa", features=["Elevated Arms"])
        score = calculate_confidence(summary, "sofa with elevated arms")

        # 0.6 type + 0.03 feature + 0.1 contextual feature + 0.15 context bonus
        assert score == pytest.approx(0.88)

    def test_false_product_type_penalty(self):
        """Should penalize a product type found in a feature-only query."""
        score = calculate_confidence(PassSummary(product_type="Armchair"), "elevated arms")
        assert score == pytest.approx(0.2)

    def test_feature_only_bonus(self):
        """Should add the bonus for a feature-only query."""
        score = calculate_confidence(PassSummary(features=["Elevated Arms"]), "elevated arms")
        assert score == pytest.approx(0.23)

    def test_component_caps(self):
        """Should cap the feature, style and place components."""
        summary = PassSummary(
            styles=["Modern", "Rustic", "Industrial", "Bohemian", "Classical"],
            places=["Italy", "Spain", "France"],
        )
        assert calculate_confidence(summary, "") == pytest.approx(0.08 + 0.02)

    def test_clamped_to_one(self):
        """Should never exceed 1."""
        summary = PassSummary(
            product_type="Sofa",
            has_brand=True,
            features=["Elevated Arms", "Tufted Back", "Leather Piping", "Swivel"],
            styles=["Modern", "Rustic", "Industrial", "Bohemian"],
            places=["Italy", "Spain"],
        )
        assert calculate_confidence(summary, "sofa with elevated arms") == 1.0


class TestMentionsProduct:

    @pytest.mark.parametrize("text,expected", [
        ("Grey SOFA", True),
        ("club chair", True),
        ("leather couch", True),
        ("elevated arms", False),
    ])
    def test_product_nouns(self, text, expected):
        """Should detect product nouns in the raw text."""
        assert mentions_product(text) is expected


class TestSelectPass:

    def test_feature_only_rule(self):
        """Should pick pass A for feature-only queries."""
        pass_a = PassSummary(features=["Elevated Arms"])
        pass_b = PassSummary(product_type="Armchair", features=["Elevated Arms"])

        selection = select_pass("elevated arms", pass_a, pass_b, 0.23, 0.9)

        assert selection.chosen is Pass.A
        assert selection.rule == "feature_only"

    def test_product_with_features_prefers_complete_pass(self):
        """Should pick the pass with both product type and features."""
        pass_a = PassSummary(product_type="Sofa")
        pass_b = PassSummary(product_type="Sofa", features=["Elevated Arms"])

        selection = select_pass("sofa with elevated arms", pass_a, pass_b, 0.9, 0.5)

        assert selection.chosen is Pass.B
        assert selection.rule == "product_with_features"

    def test_product_with_features_tie_goes_to_a(self):
        """Should pick pass A when both passes are complete."""
        summary = PassSummary(product_type="Sofa", features=["Elevated Arms"])

        selection = select_pass("sofa with elevated arms", summary, summary, 0.88, 0.88)

        assert selection.chosen is Pass.A
        assert selection.rule == "product_with_features"

    def test_confidence_rule(self):
        """Should pick the pass with higher confidence."""
        selection = select_pass("velvet sofa", PassSummary(), PassSummary(product_type="Sofa"), 0.1, 0.7)

        assert selection.chosen is Pass.B
        assert selection.rule == "confidence"

    def test_confidence_tie_goes_to_a(self):
        """Should pick pass A on equal confidence."""
        selection = select_pass("velvet sofa", PassSummary(), PassSummary(), 0.5, 0.5)
        assert selection.chosen is Pass.A

    def test_custom_rules(self):
        """Should apply a custom rule table."""
        always_b = SelectionRule("always_b", lambda ctx: Pass.B)
        selection = select_pass("sofa", PassSummary(), PassSummary(), 0.9, 0.1, rules=(always_b,))

        assert selection.chosen is Pass.B
        assert selection.rule == "always_b"

    def test_no_rule_applies_falls_back_to_confidence(self):
        """Should fall back to confidence when no rule decides."""
        never = SelectionRule("never", lambda ctx: None)
        selection = select_pass("sofa", PassSummary(), PassSummary(), 0.1, 0.9, rules=(never,))

        assert selection.chosen is Pass.B
        assert selection.rule == "confidence"
