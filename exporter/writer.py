"""Writes the three canonical export documents."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from exporter.errors import ExportError
from exporter.policy import GOLDILOCKS_POLICY, ExportPolicy
from exporter.transform import TransformStats, TreeTransformer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# --- Target Names ---

COMMON_FILENAME = "common_circuit_data.json"
VERIFIER_ONLY_FILENAME = "verifier_only_circuit_data.json"
PROOF_FILENAME = "proof_with_public_inputs.json"

TARGET_NAMES = ("common", "verifier_only", "proof")


@dataclass(frozen=True)
class ExportTargets:
    """Destination paths of the three documents."""
    common: Path
    verifier_only: Path
    proof: Path

    @classmethod
    def in_dir(cls, out_dir: PathLike) -> "ExportTargets":
        """Standard file names inside out_dir."""
        d = Path(out_dir)
        return cls(
            common=d / COMMON_FILENAME,
            verifier_only=d / VERIFIER_ONLY_FILENAME,
            proof=d / PROOF_FILENAME,
        )

    def items(self) -> list[tuple[str, Path]]:
        """(target name, path) pairs in write order."""
        return [(name, Path(getattr(self, name))) for name in TARGET_NAMES]


@dataclass
class ExportResult:
    """Outcome of a successful export."""
    written: dict[str, Path] = field(default_factory=dict)
    stats: dict[str, TransformStats] = field(default_factory=dict)

    @property
    def total(self) -> TransformStats:
        """Stats summed over all documents."""
        total = TransformStats()
        for s in self.stats.values():
            total.merge(s)
        return total


# --- Rendering ---

def render_document(tree: Any, indent: int = 2) -> str:
    """Pretty-print a transformed tree as strict JSON. Key order is the tree's insertion order.

    Raises:
        ValueError: If the tree holds a NaN or infinite float.
    """
    return json.dumps(tree, indent=indent, ensure_ascii=False, allow_nan=False)


def load_document(path: PathLike) -> Any:
    """Load one input document.

    Raises:
        ValueError: If the file uses the non-standard NaN or Infinity tokens.
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f, parse_constant=_reject_constant)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name} in input document")


# --- Export ---

def export(
    common: Any,
    verifier_only: Any,
    proof: Any,
    targets: ExportTargets,
    policy: Optional[ExportPolicy] = None,
) -> ExportResult:
    """Transform and persist the three documents.

    All documents are transformed before anything is written, then written in
    the order common, verifier_only, proof.

    Raises:
        ValueError: A document holds a NaN or infinite float. Nothing is written.
        ExportError: A write failed. Its `written` attribute lists the targets
            that were already updated; the rest are stale.
    """
    if policy is None:
        policy = GOLDILOCKS_POLICY

    transformer = TreeTransformer(policy)
    documents = {"common": common, "verifier_only": verifier_only, "proof": proof}

    result = ExportResult()
    rendered: dict[str, str] = {}
    for name in TARGET_NAMES:
        stats = TransformStats()
        tree = transformer.transform(documents[name], (), stats)
        rendered[name] = render_document(tree, policy.indent)
        result.stats[name] = stats
        if stats.fallbacks:
            logger.warning("%s: %d array(s) fell back to elementwise transform", name, stats.fallbacks)

    for name, path in targets.items():
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(rendered[name], encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write %s document to %s: %s", name, path, e)
            raise ExportError(name, path, list(result.written)) from e
        result.written[name] = path
        logger.info("Wrote %s document to %s", name, path)

    return result


def export_files(
    common_path: PathLike,
    verifier_only_path: PathLike,
    proof_path: PathLike,
    out_dir: PathLike,
    policy: Optional[ExportPolicy] = None,
) -> ExportResult:
    """Load the three input documents from disk and export them into out_dir."""
    return export(
        load_document(common_path),
        load_document(verifier_only_path),
        load_document(proof_path),
        ExportTargets.in_dir(out_dir),
        policy,
    )
