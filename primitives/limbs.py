"""Base-2^64 limb codec.

Field elements wider than one machine word travel as little-endian sequences
of u64 limbs (limb 0 least significant). This module packs such sequences into
exact Python ints, unpacks them again, and renders canonical decimal strings.
"""

from typing import Any, Optional, Sequence

import numpy as np

# --- Constants ---

LIMB_BITS = 64
LIMB_MODULUS = 1 << LIMB_BITS
LIMBS_PER_ELEMENT = 4


# --- Limb Predicates ---

def is_limb(x: Any) -> bool:
    """True if x is an unsigned 64-bit integer (bools are not limbs)."""
    if isinstance(x, bool):
        return False
    if isinstance(x, np.unsignedinteger):
        return x.dtype.itemsize <= 8
    return isinstance(x, int) and 0 <= x < LIMB_MODULUS


def is_limb_array(xs: Any, limbs_per_element: int = LIMBS_PER_ELEMENT) -> bool:
    """True if xs is a flat limb array of length 1 or a positive multiple of limbs_per_element."""
    if not isinstance(xs, list) or not xs:
        return False
    if len(xs) != 1 and len(xs) % limbs_per_element != 0:
        return False
    return all(is_limb(x) for x in xs)


# --- Packing ---

def pack_limbs(limbs: Sequence[int], modulus: Optional[int] = None) -> int:
    """Pack little-endian u64 limbs into one integer, optionally reduced mod modulus.

    Reduction is applied to the packed value, never to individual limbs.

    Raises:
        ValueError: If limbs is empty or contains a value that is not a u64.
    """
    if len(limbs) == 0:
        raise ValueError("Cannot pack an empty limb sequence")

    acc = 0
    for limb in reversed(limbs):
        if not is_limb(limb):
            raise ValueError(f"Not a u64 limb: {limb!r}")
        acc = (acc << LIMB_BITS) | int(limb)

    if modulus is not None:
        acc = reduce(acc, modulus)
    return acc


def unpack_limbs(value: int, n_limbs: int = LIMBS_PER_ELEMENT) -> np.ndarray:
    """Split a non-negative integer into n_limbs little-endian u64 limbs.

    Raises:
        ValueError: If value is negative or needs more than n_limbs limbs.
    """
    if value < 0:
        raise ValueError(f"Cannot unpack negative value {value}")
    if value >> (LIMB_BITS * n_limbs):
        raise ValueError(f"Value does not fit in {n_limbs} limbs of {LIMB_BITS} bits")

    limbs = np.zeros(n_limbs, dtype=np.uint64)
    for i in range(n_limbs):
        limbs[i] = (value >> (LIMB_BITS * i)) & (LIMB_MODULUS - 1)
    return limbs


def chunk_limbs(limbs: Sequence[int], limbs_per_element: int = LIMBS_PER_ELEMENT) -> list[Sequence[int]]:
    """Split a flat limb array into per-element groups."""
    if len(limbs) == 1:
        return [limbs]
    return [limbs[i:i + limbs_per_element] for i in range(0, len(limbs), limbs_per_element)]


# --- Reduction and Rendering ---

def reduce(value: int, modulus: int) -> int:
    """Reduce value into [0, modulus)."""
    if modulus <= 0:
        raise ValueError(f"Modulus must be positive, got {modulus}")
    return value % modulus


def to_canonical(value: int) -> str:
    """Exact decimal rendering of a packed field element."""
    return str(int(value))


def is_canonical(s: Any) -> bool:
    """True if s is a canonical scalar: a decimal string with no sign or leading zeros."""
    if not isinstance(s, str) or not s.isascii() or not s.isdigit():
        return False
    return s == "0" or not s.startswith("0")
