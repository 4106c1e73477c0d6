"""Exporter - Canonical JSON export of circuit data and proofs."""

from exporter.classifier import (
    PLONKY2_FIELD_ELEMENT_KEYS,
    PLONKY2_RAW_KEYS,
    WRAPPER_KEY,
    Classification,
    KeyPattern,
    PathClassifier,
)
from exporter.errors import ExportError, PolicyError
from exporter.policy import (
    BN254_POLICY,
    GOLDILOCKS_POLICY,
    PRESETS,
    ExportPolicy,
    get_preset,
)
from exporter.transform import TransformStats, TreeTransformer, transform
from exporter.writer import (
    COMMON_FILENAME,
    PROOF_FILENAME,
    VERIFIER_ONLY_FILENAME,
    ExportResult,
    ExportTargets,
    export,
    export_files,
    load_document,
    render_document,
)

__all__ = [
    # Classification
    "Classification",
    "KeyPattern",
    "PathClassifier",
    "PLONKY2_FIELD_ELEMENT_KEYS",
    "PLONKY2_RAW_KEYS",
    "WRAPPER_KEY",
    # Policy
    "ExportPolicy",
    "GOLDILOCKS_POLICY",
    "BN254_POLICY",
    "PRESETS",
    "get_preset",
    # Transform
    "transform",
    "TreeTransformer",
    "TransformStats",
    # Writer
    "export",
    "export_files",
    "load_document",
    "render_document",
    "ExportTargets",
    "ExportResult",
    "COMMON_FILENAME",
    "VERIFIER_ONLY_FILENAME",
    "PROOF_FILENAME",
    # Errors
    "ExportError",
    "PolicyError",
]
