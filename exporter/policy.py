"""Export policy: key sets and moduli for one export invocation."""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from exporter.classifier import (
    PLONKY2_FIELD_ELEMENT_KEYS,
    PLONKY2_RAW_KEYS,
    WRAPPER_KEY,
    PathClassifier,
)
from exporter.errors import PolicyError
from primitives.field import BN254_SCALAR_PRIME, GOLDILOCKS_PRIME, resolve_prime
from primitives.limbs import LIMBS_PER_ELEMENT


# --- Data Structures ---

@dataclass(frozen=True)
class ExportPolicy:
    """Everything the transform needs besides the document itself.

    Attributes:
        name: Label used in logs and CLI output.
        field_element_keys: Key-path patterns whose nodes are packed.
        raw_keys: Key-path patterns emitted verbatim. Checked first.
        wrapper_key: Sole key of transparent wrapper objects.
        limbs_per_element: Limbs per packed element in flat arrays.
        modulus: Prime applied to packed values (cross-field export), or None.
        scalar_modulus: Prime applied to bare u64 values at field-element paths, or None.
        indent: Indentation of the written JSON documents.
    """
    name: str = "custom"
    field_element_keys: tuple[str, ...] = PLONKY2_FIELD_ELEMENT_KEYS
    raw_keys: tuple[str, ...] = PLONKY2_RAW_KEYS
    wrapper_key: str = WRAPPER_KEY
    limbs_per_element: int = LIMBS_PER_ELEMENT
    modulus: Optional[int] = None
    scalar_modulus: Optional[int] = None
    indent: int = 2
    _cache: dict = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.limbs_per_element != LIMBS_PER_ELEMENT:
            raise PolicyError(
                f"Unsupported limbs_per_element={self.limbs_per_element}; only {LIMBS_PER_ELEMENT} is supported"
            )
        if not isinstance(self.wrapper_key, str) or not self.wrapper_key:
            raise PolicyError("wrapper_key must be a non-empty string")
        if self.indent < 0:
            raise PolicyError(f"indent must be >= 0, got {self.indent}")
        try:
            self._cache["classifier"] = PathClassifier(
                field_element_keys=self.field_element_keys,
                raw_keys=self.raw_keys,
                wrapper_key=self.wrapper_key,
            )
        except (TypeError, ValueError) as e:
            raise PolicyError(f"Invalid key pattern: {e}") from e

    @property
    def classifier(self) -> PathClassifier:
        """Classifier built from this policy's key sets."""
        return self._cache["classifier"]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view, same keys as accepted by from_dict()."""
        return {
            "name": self.name,
            "fieldElementKeys": list(self.field_element_keys),
            "rawKeys": list(self.raw_keys),
            "wrapperKey": self.wrapper_key,
            "modulus": None if self.modulus is None else str(self.modulus),
            "scalarModulus": None if self.scalar_modulus is None else str(self.scalar_modulus),
            "indent": self.indent,
        }

    @classmethod
    def from_json(cls, path: str) -> "ExportPolicy":
        """Load a policy from a JSON config file."""
        with open(path) as f:
            j = json.load(f)
        if not isinstance(j, dict):
            raise PolicyError(f"Policy file {path} must contain a JSON object")
        return cls.from_dict(j)

    @classmethod
    def from_dict(cls, j: dict[str, Any]) -> "ExportPolicy":
        """Build a policy from parsed JSON, optionally extending a preset via "base"."""
        try:
            base = get_preset(j["base"]) if "base" in j else cls()
            return replace(
                base,
                name=j.get("name", base.name),
                field_element_keys=_parse_keys(j, "fieldElementKeys", base.field_element_keys),
                raw_keys=_parse_keys(j, "rawKeys", base.raw_keys),
                wrapper_key=j.get("wrapperKey", base.wrapper_key),
                modulus=_parse_modulus(j, "modulus", base.modulus),
                scalar_modulus=_parse_modulus(j, "scalarModulus", base.scalar_modulus),
                indent=int(j.get("indent", base.indent)),
            )
        except PolicyError:
            raise
        except KeyError as e:
            raise PolicyError(e.args[0]) from None
        except (TypeError, ValueError) as e:
            raise PolicyError(f"Invalid policy: {e}") from e


def _parse_keys(j: dict, name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Parse a list of key patterns."""
    if name not in j:
        return default
    keys = j[name]
    if not isinstance(keys, list) or not all(isinstance(k, str) and k for k in keys):
        raise PolicyError(f"{name} must be a list of non-empty strings")
    return tuple(keys)


def _parse_modulus(j: dict, name: str, default: Optional[int]) -> Optional[int]:
    """Parse an optional prime (name, decimal, hex or null)."""
    if name not in j:
        return default
    if j[name] is None:
        return None
    try:
        return resolve_prime(j[name])
    except ValueError as e:
        raise PolicyError(f"{name}: {e}") from e


# --- Presets ---

GOLDILOCKS_POLICY = ExportPolicy(
    name="goldilocks",
    scalar_modulus=GOLDILOCKS_PRIME,
)
"""Same-field export: packed values kept exact, bare limbs reduced mod Goldilocks."""

BN254_POLICY = ExportPolicy(
    name="bn254",
    modulus=BN254_SCALAR_PRIME,
    scalar_modulus=GOLDILOCKS_PRIME,
)
"""Cross-field export: packed values reduced into the BN254 scalar field."""

PRESETS: dict[str, ExportPolicy] = {
    GOLDILOCKS_POLICY.name: GOLDILOCKS_POLICY,
    BN254_POLICY.name: BN254_POLICY,
}


def get_preset(name: str) -> ExportPolicy:
    """Look up a preset policy by name."""
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown policy preset {name!r}; known presets: {sorted(PRESETS)}") from None
