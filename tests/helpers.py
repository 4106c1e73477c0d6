"""Helpers shared by the exporter tests."""

GOLDILOCKS_P_PLUS_1 = 18446744069414584322


def packed(limbs: list[int]) -> str:
    """Expected canonical scalar for little-endian u64 limbs."""
    return str(sum(limb << (64 * i) for i, limb in enumerate(limbs)))
