"""Path-aware tree transform from limb-encoded documents to canonical JSON.

Walks a json.load()-shaped tree depth-first. Nodes under field-element keys
are packed from u64 limbs into decimal strings, {"elements": [...]} wrappers
are replaced by their contents, raw keys are copied verbatim, and everything
else is rebuilt unchanged. The input tree is never mutated.

Flat limb arrays at a field-element path follow one chunking rule:
    length 1        -> one scalar
    length 4        -> one scalar
    length 4k, k>1  -> list of k scalars
Arrays of 4-limb arrays become a list of scalars of the same outer length.
Anything else is transformed elementwise and counted as a fallback.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from exporter.classifier import Classification, PathClassifier, format_path
from exporter.policy import GOLDILOCKS_POLICY, ExportPolicy
from primitives.limbs import (
    LIMBS_PER_ELEMENT,
    chunk_limbs,
    is_canonical,
    is_limb,
    is_limb_array,
    pack_limbs,
    reduce,
    to_canonical,
)

logger = logging.getLogger(__name__)

Value = Any  # None | bool | int | float | str | list[Value] | dict[str, Value]


# --- Statistics ---

@dataclass
class TransformStats:
    """Counters collected during one transform.

    Attributes:
        packed: Field elements packed into canonical scalars.
        unwrapped: Wrapper objects replaced by their contents.
        reduced: Bare u64 values reduced at field-element paths.
        raw: Nodes copied verbatim under raw keys.
        fallbacks: Arrays at field-element paths with no recognised limb shape.
        oversized: Integers at field-element paths that are not u64 and were left as-is.
        fallback_paths: Key paths of the fallbacks, in traversal order.
    """
    packed: int = 0
    unwrapped: int = 0
    reduced: int = 0
    raw: int = 0
    fallbacks: int = 0
    oversized: int = 0
    fallback_paths: list[str] = field(default_factory=list)

    def merge(self, other: "TransformStats") -> None:
        """Accumulate another stats object into this one."""
        self.packed += other.packed
        self.unwrapped += other.unwrapped
        self.reduced += other.reduced
        self.raw += other.raw
        self.fallbacks += other.fallbacks
        self.oversized += other.oversized
        self.fallback_paths.extend(other.fallback_paths)

    def as_dict(self) -> dict[str, Any]:
        return {
            "packed": self.packed,
            "unwrapped": self.unwrapped,
            "reduced": self.reduced,
            "raw": self.raw,
            "fallbacks": self.fallbacks,
            "oversized": self.oversized,
            "fallback_paths": list(self.fallback_paths),
        }


# --- Transformer ---

# Work-stack operations
_VISIT = "visit"
_COPY = "copy"
_BUILD_DICT = "dict"
_BUILD_LIST = "list"

Task = tuple[str, Any, tuple[str, ...]]


class TreeTransformer:
    """Applies an ExportPolicy to value trees.

    One instance may transform many documents; stats accumulate in self.stats
    unless a separate stats object is passed to transform().

    Traversal runs on an explicit work stack, so document depth is bounded by
    memory and not by the interpreter's recursion limit. Children are pushed
    in reverse so they complete in document order; container tasks then
    collect their finished children from the output stack.
    """

    def __init__(self, policy: ExportPolicy) -> None:
        self.policy = policy
        self.classifier: PathClassifier = policy.classifier
        self.stats = TransformStats()

    def transform(self, node: Value, key_path: Sequence[str] = (), stats: Optional[TransformStats] = None) -> Value:
        """Return the canonical form of node located at key_path."""
        if stats is None:
            stats = self.stats

        stack: list[Task] = [(_VISIT, node, tuple(key_path))]
        out: list[Value] = []
        while stack:
            op, item, path = stack.pop()
            if op == _VISIT:
                self._visit(item, path, stats, stack, out)
            elif op == _COPY:
                _copy_step(item, stack, out)
            elif op == _BUILD_DICT:
                out.append(dict(zip(item, _take(out, len(item)))))
            else:
                out.append(_take(out, item))
        return out.pop()

    def _visit(
        self,
        node: Value,
        key_path: tuple[str, ...],
        stats: TransformStats,
        stack: list[Task],
        out: list[Value],
    ) -> None:
        classification = self.classifier.classify_node(node, key_path)

        if classification is Classification.RAW:
            stats.raw += 1
            stack.append((_COPY, node, ()))
            return

        if classification is Classification.UNWRAP_WRAPPER:
            stats.unwrapped += 1
            stack.append((_VISIT, node[self.classifier.wrapper_key], key_path))
            return

        is_field = classification is Classification.PACK_AS_FIELD_ELEMENT

        if isinstance(node, dict):
            keys = list(node)
            stack.append((_BUILD_DICT, keys, ()))
            stack.extend((_VISIT, node[k], key_path + (k,)) for k in reversed(keys))
        elif isinstance(node, list):
            if is_field:
                self._visit_field_array(node, key_path, stats, stack, out)
            else:
                _push_elements(node, key_path, stack)
        elif is_field and isinstance(node, int) and not isinstance(node, bool):
            out.append(self._visit_field_scalar(node, key_path, stats))
        else:
            out.append(node)

    # --- Field-element handling ---

    def _visit_field_array(
        self,
        arr: list,
        key_path: tuple[str, ...],
        stats: TransformStats,
        stack: list[Task],
        out: list[Value],
    ) -> None:
        """Pack an array found at a field-element path."""
        if not arr:
            out.append([])
            return

        # Wrappers are transparent, so judge the shape through them.
        entries = [self._unwrap(v, stats) for v in arr]
        n = self.policy.limbs_per_element

        if is_limb_array(entries, n):
            scalars = [self._pack(chunk, stats) for chunk in chunk_limbs(entries, n)]
            out.append(scalars[0] if len(scalars) == 1 else scalars)
        elif all(_is_element_limbs(v, n) for v in entries):
            out.append([self._pack(v, stats) for v in entries])
        elif all(is_canonical(v) for v in entries):
            out.append(entries)
        else:
            stats.fallbacks += 1
            stats.fallback_paths.append(format_path(key_path))
            logger.warning(
                "Unrecognised limb layout at %s (length %d); transforming elementwise",
                format_path(key_path), len(arr),
            )
            _push_elements(entries, key_path, stack)

    def _visit_field_scalar(self, value: int, key_path: tuple[str, ...], stats: TransformStats) -> Value:
        """Reduce a bare limb found at a field-element path."""
        if not is_limb(value):
            stats.oversized += 1
            logger.debug("Integer at %s does not fit in a u64 limb; left unchanged", format_path(key_path))
            return value
        if self.policy.scalar_modulus is None:
            return value
        stats.reduced += 1
        return to_canonical(reduce(value, self.policy.scalar_modulus))

    def _pack(self, limbs: Sequence[int], stats: TransformStats) -> str:
        stats.packed += 1
        return to_canonical(pack_limbs(limbs, self.policy.modulus))

    def _unwrap(self, node: Value, stats: TransformStats) -> Value:
        """Strip nested wrapper objects, counting each one."""
        while self.classifier.is_wrapper(node):
            stats.unwrapped += 1
            node = node[self.classifier.wrapper_key]
        return node


def _is_element_limbs(node: Value, limbs_per_element: int = LIMBS_PER_ELEMENT) -> bool:
    """True for a list of exactly limbs_per_element u64 values."""
    return isinstance(node, list) and len(node) == limbs_per_element and all(is_limb(x) for x in node)


def _push_elements(items: list, key_path: tuple[str, ...], stack: list[Task]) -> None:
    """Schedule an elementwise transform; array indices do not extend the path."""
    stack.append((_BUILD_LIST, len(items), ()))
    stack.extend((_VISIT, v, key_path) for v in reversed(items))


def _copy_step(node: Value, stack: list[Task], out: list[Value]) -> None:
    """One step of a verbatim copy of a raw subtree."""
    if isinstance(node, dict):
        keys = list(node)
        stack.append((_BUILD_DICT, keys, ()))
        stack.extend((_COPY, node[k], ()) for k in reversed(keys))
    elif isinstance(node, list):
        stack.append((_BUILD_LIST, len(node), ()))
        stack.extend((_COPY, v, ()) for v in reversed(node))
    else:
        out.append(node)


def _take(out: list[Value], n: int) -> list[Value]:
    """Pop the last n finished values, oldest first."""
    start = len(out) - n
    items = out[start:]
    del out[start:]
    return items


# --- Public API ---

def transform(
    node: Value,
    key_path: Sequence[str] = (),
    policy: Optional[ExportPolicy] = None,
    stats: Optional[TransformStats] = None,
) -> Value:
    """Canonicalise a value tree under policy (default: same-field Goldilocks export)."""
    if policy is None:
        policy = GOLDILOCKS_POLICY
    return TreeTransformer(policy).transform(node, key_path, stats)
