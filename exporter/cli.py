#!/usr/bin/env python3
"""Export plonky2 circuit and proof JSON into canonical verifier-facing JSON.

Usage:
    plonky-export \
        --common /tmp/out/common.raw.json \
        --verifier-only /tmp/out/verifier_only.raw.json \
        --proof /tmp/out/proof.raw.json \
        --out-dir src/out \
        --preset bn254

The inputs are the serde JSON dumps of CommonCircuitData, VerifierOnlyCircuitData
and ProofWithPublicInputs. Outputs are written as:
  common_circuit_data.json
  verifier_only_circuit_data.json
  proof_with_public_inputs.json
"""

import argparse
import json
import logging
import sys
from typing import Optional

from exporter.errors import ExportError, PolicyError
from exporter.policy import PRESETS, ExportPolicy, get_preset
from exporter.writer import export_files


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export plonky2 circuit data and proofs as canonical JSON."
    )
    parser.add_argument("--common", required=True, help="Path to the common circuit data JSON")
    parser.add_argument("--verifier-only", required=True, help="Path to the verifier-only circuit data JSON")
    parser.add_argument("--proof", required=True, help="Path to the proof-with-public-inputs JSON")
    parser.add_argument("--out-dir", required=True, help="Directory for the exported documents")
    parser.add_argument(
        "--preset",
        default="goldilocks",
        choices=sorted(PRESETS),
        help="Built-in export policy (default: goldilocks)",
    )
    parser.add_argument(
        "--policy-json",
        help="Policy config file; overrides --preset",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def load_policy(args: argparse.Namespace) -> ExportPolicy:
    if args.policy_json:
        return ExportPolicy.from_json(args.policy_json)
    return get_preset(args.preset)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        policy = load_policy(args)
    except (PolicyError, OSError, json.JSONDecodeError) as e:
        print(f"Invalid policy: {e}", file=sys.stderr)
        return 1

    print("Configuration:")
    for key, value in policy.to_dict().items():
        print(f"  {key}: {value}")

    try:
        result = export_files(args.common, args.verifier_only, args.proof, args.out_dir, policy)
    except ExportError as e:
        print(f"Export FAILED: {e}", file=sys.stderr)
        stale = [name for name in ("common", "verifier_only", "proof") if name not in e.written]
        print(f"  Stale outputs: {', '.join(stale)}", file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"Failed to load input: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1

    for name, path in result.written.items():
        s = result.stats[name]
        print(f"{name}: {path}")
        print(f"  packed={s.packed} unwrapped={s.unwrapped} reduced={s.reduced} "
              f"raw={s.raw} fallbacks={s.fallbacks} oversized={s.oversized}")
        for p in s.fallback_paths:
            print(f"  fallback at {p}")

    total = result.total
    print(f"total: packed={total.packed} unwrapped={total.unwrapped} reduced={total.reduced} "
          f"raw={total.raw} fallbacks={total.fallbacks} oversized={total.oversized}")

    print("\nDone.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
