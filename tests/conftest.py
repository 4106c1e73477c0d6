"""
Shared fixtures: small plonky2-shaped documents as produced by serde_json.

HashOut values serialize as {"elements": [u64; 4]}, Merkle caps as lists of
HashOut, and FRI final polynomials as {"coeffs": [[u64; 2], ...]}.
"""

import pytest

from tests.helpers import GOLDILOCKS_P_PLUS_1


@pytest.fixture
def common_data() -> dict:
    return {
        "config": {
            "num_wires": 135,
            "num_routed_wires": 80,
            "security_bits": 100,
            "fri_config": {"rate_bits": 3, "cap_height": 4},
        },
        "num_public_inputs": 2,
        "k_is": [1, 7, 49, GOLDILOCKS_P_PLUS_1],
        "num_partial_products": 9,
        "quotient_degree_factor": 8,
        "selectors_info": {
            "selector_indices": [0, 0, 1],
            "groups": [{"start": 0, "end": 2}],
        },
    }


@pytest.fixture
def verifier_only_data() -> dict:
    return {
        "constants_sigmas_cap": [{"elements": [1, 0, 0, 0]}, {"elements": [2, 0, 0, 0]}],
        "circuit_digest": {"elements": [3, 1, 0, 0]},
    }


@pytest.fixture
def proof_data() -> dict:
    return {
        "proof": {
            "wires_cap": [{"elements": [1, 0, 0, 0]}],
            "plonk_zs_partial_products_cap": [{"elements": [2, 0, 0, 0]}],
            "quotient_polys_cap": [{"elements": [3, 0, 0, 0]}],
            "openings": {"constants": [[1, 0]], "plonk_sigmas": [[2, 0]]},
            "opening_proof": {
                "commit_phase_merkle_caps": [[{"elements": [4, 0, 0, 0]}]],
                "query_round_proofs": [
                    {
                        "initial_trees_proof": {
                            "evals_proofs": [
                                [
                                    [10, 11],
                                    {"siblings": [{"elements": [5, 0, 0, 0]}, {"elements": [0, 0, 0, 1]}]},
                                ]
                            ]
                        },
                        "steps": [
                            {
                                "evals": [[1, 2]],
                                "merkle_proof": {"siblings": [{"elements": [6, 0, 0, 0]}]},
                            }
                        ],
                    }
                ],
                "final_poly": {"coeffs": [[1, 2], [3, 4]]},
                "pow_witness": GOLDILOCKS_P_PLUS_1,
            },
        },
        "public_inputs": [7, GOLDILOCKS_P_PLUS_1],
    }
