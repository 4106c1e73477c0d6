"""Key-path classification for exported documents.

Which nodes hold field elements is decided purely by the object keys leading
to them. The policy is a table of key-path suffix patterns, so it can be
listed, diffed and tested without walking a document.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Sequence

# --- Default Plonky2 Key Sets ---

PLONKY2_FIELD_ELEMENT_KEYS: tuple[str, ...] = (
    "siblings",
    "constants_sigmas_cap",
    "circuit_digest",
    "wires_cap",
    "quotient_polys_cap",
    "plonk_zs_partial_products_cap",
)

# FRI final polynomial coefficients are already extension-field pairs.
PLONKY2_RAW_KEYS: tuple[str, ...] = ("coeffs",)

WRAPPER_KEY = "elements"
PATH_SEPARATOR = "/"


class Classification(Enum):
    """Export treatment of a node."""
    PACK_AS_FIELD_ELEMENT = "pack"
    UNWRAP_WRAPPER = "unwrap"
    PASSTHROUGH = "passthrough"
    RAW = "raw"


@dataclass(frozen=True)
class KeyPattern:
    """Key-path suffix: matches any path whose last keys equal `keys`."""
    keys: tuple[str, ...]

    @classmethod
    def parse(cls, pattern: "str | Sequence[str] | KeyPattern") -> "KeyPattern":
        """Build from "a/b" notation or a sequence of keys."""
        if isinstance(pattern, KeyPattern):
            return pattern
        if isinstance(pattern, str):
            keys = tuple(k for k in pattern.split(PATH_SEPARATOR) if k)
        else:
            keys = tuple(pattern)
        if not keys:
            raise ValueError(f"Empty key pattern: {pattern!r}")
        return cls(keys)

    def matches(self, key_path: Sequence[str]) -> bool:
        n = len(self.keys)
        return len(key_path) >= n and tuple(key_path[-n:]) == self.keys

    def __str__(self) -> str:
        return PATH_SEPARATOR.join(self.keys)


def format_path(key_path: Sequence[str]) -> str:
    """Render a key path for logs ("/" for the document root)."""
    return PATH_SEPARATOR + PATH_SEPARATOR.join(key_path)


# --- Classifier ---

class PathClassifier:
    """Maps key paths to a Classification.

    Raw patterns are checked before field-element patterns. Wrapper detection
    depends on node shape only and is exposed through classify_node().
    """

    def __init__(
        self,
        field_element_keys: Iterable["str | Sequence[str]"] = PLONKY2_FIELD_ELEMENT_KEYS,
        raw_keys: Iterable["str | Sequence[str]"] = PLONKY2_RAW_KEYS,
        wrapper_key: str = WRAPPER_KEY,
    ) -> None:
        self.field_element_patterns = tuple(KeyPattern.parse(p) for p in field_element_keys)
        self.raw_patterns = tuple(KeyPattern.parse(p) for p in raw_keys)
        self.wrapper_key = wrapper_key
        self._rules = tuple(
            [(p, Classification.RAW) for p in self.raw_patterns]
            + [(p, Classification.PACK_AS_FIELD_ELEMENT) for p in self.field_element_patterns]
        )

    def rules(self) -> list[tuple[KeyPattern, Classification]]:
        """Full policy table in evaluation order."""
        return list(self._rules)

    def classify(self, key_path: Sequence[str]) -> Classification:
        """Classify a node by its key path alone."""
        for pattern, classification in self._rules:
            if pattern.matches(key_path):
                return classification
        return Classification.PASSTHROUGH

    def is_wrapper(self, node: Any) -> bool:
        """True for {wrapper_key: [...]} with no other entries.

        Wrappers may box other wrappers; the innermost value must be a list.
        """
        while isinstance(node, dict) and len(node) == 1 and self.wrapper_key in node:
            node = node[self.wrapper_key]
            if isinstance(node, list):
                return True
        return False

    def classify_node(self, node: Any, key_path: Sequence[str]) -> Classification:
        """Classify a node by key path and shape.

        RAW wins over everything, then wrapper shape, then the path rules.
        """
        by_path = self.classify(key_path)
        if by_path is Classification.RAW:
            return by_path
        if self.is_wrapper(node):
            return Classification.UNWRAP_WRAPPER
        return by_path

    def __repr__(self) -> str:
        return (
            f"PathClassifier(field_element_keys={[str(p) for p in self.field_element_patterns]}, "
            f"raw_keys={[str(p) for p in self.raw_patterns]}, wrapper_key={self.wrapper_key!r})"
        )
