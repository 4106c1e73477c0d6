"""Prime fields used by the exporter.

The proving system works natively over Goldilocks. Cross-field verifiers
(e.g. Solidity or circom verifiers over BN254) need packed values reduced
into their own scalar field, so both primes are declared here.

Uses galois for primality checks on user-supplied moduli.
"""

import galois

# --- Field Primes ---

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001
"""Goldilocks prime 2^64 - 2^32 + 1, the native field of the proving system."""

BN254_SCALAR_PRIME = 21888242871839275222246405745257275088548364400416034343698204186575808495617
"""Scalar field order of BN254 (alt_bn128)."""

KNOWN_PRIMES: dict[str, int] = {
    "goldilocks": GOLDILOCKS_PRIME,
    "bn254": BN254_SCALAR_PRIME,
}


# --- Modulus Resolution ---

def resolve_prime(modulus: int | str) -> int:
    """Resolve a modulus given by name, decimal string, 0x-hex string or int.

    Raises:
        ValueError: If the modulus cannot be parsed or does not name a prime.
    """
    if isinstance(modulus, bool):
        raise ValueError(f"Invalid modulus: {modulus!r}")

    if isinstance(modulus, int):
        p = modulus
    elif isinstance(modulus, str):
        key = modulus.strip().lower()
        if key in KNOWN_PRIMES:
            return KNOWN_PRIMES[key]
        try:
            p = int(key, 16) if key.startswith("0x") else int(key, 10)
        except ValueError:
            raise ValueError(
                f"Unknown modulus {modulus!r}: expected one of {sorted(KNOWN_PRIMES)} or an integer"
            ) from None
    else:
        raise ValueError(f"Invalid modulus: {modulus!r}")

    if p < 2 or not galois.is_prime(p):
        raise ValueError(f"Modulus {p} is not prime")
    return p
