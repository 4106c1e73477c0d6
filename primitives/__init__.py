"""Primitives - Field constants and the u64 limb codec."""

from primitives.field import (
    BN254_SCALAR_PRIME,
    GOLDILOCKS_PRIME,
    KNOWN_PRIMES,
    resolve_prime,
)
from primitives.limbs import (
    LIMB_BITS,
    LIMB_MODULUS,
    LIMBS_PER_ELEMENT,
    chunk_limbs,
    is_canonical,
    is_limb,
    is_limb_array,
    pack_limbs,
    reduce,
    to_canonical,
    unpack_limbs,
)

__all__ = [
    # Field
    "GOLDILOCKS_PRIME",
    "BN254_SCALAR_PRIME",
    "KNOWN_PRIMES",
    "resolve_prime",
    # Limbs
    "LIMB_BITS",
    "LIMB_MODULUS",
    "LIMBS_PER_ELEMENT",
    "is_limb",
    "is_limb_array",
    "pack_limbs",
    "unpack_limbs",
    "chunk_limbs",
    "reduce",
    "to_canonical",
    "is_canonical",
]
