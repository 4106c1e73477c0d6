"""Exceptions raised by the exporter."""

from pathlib import Path


class PolicyError(ValueError):
    """Invalid export policy configuration."""


class ExportError(OSError):
    """Persisting one of the exported documents failed.

    Attributes:
        target: Name of the document that failed ("common", "verifier_only", "proof").
        path: Destination path of the failed write.
        written: Targets already persisted before the failure, in write order.
            Every target not listed here is stale.
    """

    def __init__(self, target: str, path: Path, written: list[str]) -> None:
        super().__init__(f"Failed to write {target} document to {path}")
        self.target = target
        self.path = path
        self.written = list(written)
