"""
Tests for key-path classification.

The classifier is tested on its own, without walking any document.
"""

import pytest

from exporter.classifier import (
    PLONKY2_FIELD_ELEMENT_KEYS,
    Classification,
    KeyPattern,
    PathClassifier,
    format_path,
)


@pytest.fixture
def classifier() -> PathClassifier:
    return PathClassifier()


class TestKeyPattern:
    """Test suffix patterns."""

    def test_parse_single_key(self):
        """A bare key becomes a one-key pattern."""
        assert KeyPattern.parse("siblings").keys == ("siblings",)

    def test_parse_suffix(self):
        """Slash notation splits into a multi-key suffix."""
        assert KeyPattern.parse("final_poly/coeffs").keys == ("final_poly", "coeffs")
        assert KeyPattern.parse("a//b/").keys == ("a", "b")

    def test_parse_sequence(self):
        """Key sequences are taken as given."""
        assert KeyPattern.parse(["a", "b"]).keys == ("a", "b")

    def test_parse_empty_raises(self):
        """Patterns with no keys are rejected."""
        with pytest.raises(ValueError):
            KeyPattern.parse("")

    def test_matches_terminal_segments_only(self):
        """Patterns match the end of a path, never the middle."""
        p = KeyPattern.parse("final_poly/coeffs")
        assert p.matches(("proof", "opening_proof", "final_poly", "coeffs"))
        assert not p.matches(("coeffs",))
        assert not p.matches(("final_poly", "coeffs", "x"))

    def test_str(self):
        """Patterns render back to slash notation."""
        assert str(KeyPattern.parse(("a", "b"))) == "a/b"


class TestClassify:
    """Test path-only classification."""

    @pytest.mark.parametrize("key", PLONKY2_FIELD_ELEMENT_KEYS)
    def test_field_element_keys(self, classifier, key):
        """Every default field-element key classifies as packed."""
        assert classifier.classify(("proof", key)) is Classification.PACK_AS_FIELD_ELEMENT

    def test_concrete_circuit_digest_path(self, classifier):
        """A nested circuit_digest path is packed."""
        assert classifier.classify(["proof", "circuit_digest"]) is Classification.PACK_AS_FIELD_ELEMENT

    def test_unlisted_keys_pass_through(self, classifier):
        """Keys outside the table pass through."""
        assert classifier.classify(("config", "num_wires")) is Classification.PASSTHROUGH
        assert classifier.classify(("public_inputs",)) is Classification.PASSTHROUGH
        assert classifier.classify(()) is Classification.PASSTHROUGH

    def test_only_terminal_key_counts(self, classifier):
        """A field-element key higher up the path does not apply."""
        # Descendants of a field-element key are classified by their own key.
        assert classifier.classify(("siblings", "index")) is Classification.PASSTHROUGH

    def test_raw_key(self, classifier):
        """coeffs classifies as raw."""
        assert classifier.classify(("opening_proof", "final_poly", "coeffs")) is Classification.RAW

    def test_raw_checked_first(self):
        """Raw rules win over field-element rules."""
        c = PathClassifier(field_element_keys=["coeffs"], raw_keys=["coeffs"])
        assert c.classify(("coeffs",)) is Classification.RAW

    def test_suffix_rule(self):
        """Multi-key rules need the whole suffix."""
        c = PathClassifier(field_element_keys=["merkle_proof/siblings"], raw_keys=[])
        assert c.classify(("steps", "merkle_proof", "siblings")) is Classification.PACK_AS_FIELD_ELEMENT
        assert c.classify(("evals_proofs", "siblings")) is Classification.PASSTHROUGH

    def test_rules_are_enumerable_in_order(self, classifier):
        """The rule table lists raw rules before field-element rules."""
        rules = classifier.rules()
        assert rules[0] == (KeyPattern(("coeffs",)), Classification.RAW)
        packed = [str(p) for p, c in rules if c is Classification.PACK_AS_FIELD_ELEMENT]
        assert packed == list(PLONKY2_FIELD_ELEMENT_KEYS)


class TestClassifyNode:
    """Test shape-aware classification."""

    def test_wrapper_anywhere(self, classifier):
        """Wrappers are detected under any path."""
        node = {"elements": [1, 2, 3, 4]}
        assert classifier.classify_node(node, ("config",)) is Classification.UNWRAP_WRAPPER
        assert classifier.classify_node(node, ("circuit_digest",)) is Classification.UNWRAP_WRAPPER
        assert classifier.classify_node(node, ()) is Classification.UNWRAP_WRAPPER

    def test_raw_beats_wrapper(self, classifier):
        """A wrapper under a raw key stays raw."""
        node = {"elements": [1, 2, 3, 4]}
        assert classifier.classify_node(node, ("final_poly", "coeffs")) is Classification.RAW

    def test_not_a_wrapper(self, classifier):
        """Objects with other shapes are not wrappers."""
        assert not classifier.is_wrapper({"elements": [1], "extra": 2})
        assert not classifier.is_wrapper({"elements": 5})
        assert not classifier.is_wrapper({"other": [1]})
        assert not classifier.is_wrapper([1, 2])

    def test_nested_wrapper(self, classifier):
        """Wrappers boxing wrappers are still wrappers."""
        assert classifier.is_wrapper({"elements": {"elements": [1]}})
        assert not classifier.is_wrapper({"elements": {"elements": 1}})

    def test_custom_wrapper_key(self):
        """The wrapper key is configurable."""
        c = PathClassifier(wrapper_key="limbs")
        assert c.is_wrapper({"limbs": [1]})
        assert not c.is_wrapper({"elements": [1]})

    def test_non_wrapper_uses_path(self, classifier):
        """Non-wrapper nodes fall back to path rules."""
        assert classifier.classify_node([1, 0, 0, 0], ("wires_cap",)) is Classification.PACK_AS_FIELD_ELEMENT
        assert classifier.classify_node(5, ("num_wires",)) is Classification.PASSTHROUGH


def test_format_path() -> None:
    """Paths render slash-separated from the root."""
    assert format_path(()) == "/"
    assert format_path(("proof", "wires_cap")) == "/proof/wires_cap"
