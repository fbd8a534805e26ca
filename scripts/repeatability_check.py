#!/usr/bin/env python3
"""
Repeatability harness: validate and score the same receipt N times; assert identical results.
Exits 0 if stable, 1 if unstable. Prints variance report on failure.
Each run re-validates the previous run's receipt (to_dict) so idempotent validation is checked too.

Usage: python scripts/repeatability_check.py RECEIPT_JSON [--runs 10]
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.scoring import score_breakdown
from src.utils import hash_document
from src.validation import ReceiptValidationError, ViolationKind, validate_receipt

DEFAULT_RUNS = 10


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser()
    parser.add_argument("receipt", type=Path, help="Path to receipt JSON file")
    parser.add_argument("--runs", type=int, default=DEFAULT_RUNS)
    args = parser.parse_args(argv)

    if not args.receipt.exists():
        print(f"Error: Receipt file not found: {args.receipt}", file=sys.stderr)
        sys.exit(1)

    try:
        document = json.loads(args.receipt.read_text(encoding="utf-8"))
        receipt = validate_receipt(document)
    except json.JSONDecodeError:
        e = ReceiptValidationError(ViolationKind.MALFORMED_INPUT)
        print(f"Error: receipt rejected: {e.kind.value}: {e.message}", file=sys.stderr)
        sys.exit(1)
    except ReceiptValidationError as e:
        print(f"Error: receipt rejected: {e.kind.value}: {e.message}", file=sys.stderr)
        sys.exit(1)

    print(f"Running score {args.runs} times...")
    results = []
    for _ in range(args.runs):
        breakdown = score_breakdown(receipt)
        results.append({
            "points": sum(breakdown.values()),
            "breakdown": breakdown,
            "receipt_hash": hash_document(receipt.to_dict()),
        })
        receipt = validate_receipt(receipt.to_dict())

    first = results[0]
    variances = []

    for i, r in enumerate(results[1:], start=1):
        run_num = i + 1
        if r["points"] != first["points"]:
            variances.append(("points", run_num, f"{r['points']} != {first['points']}"))
        if r["receipt_hash"] != first["receipt_hash"]:
            variances.append(("receipt_hash", run_num, "re-validated receipt differs"))
        diff_rules = [
            (rule, r["breakdown"].get(rule), value)
            for rule, value in first["breakdown"].items()
            if r["breakdown"].get(rule) != value
        ]
        if diff_rules:
            variances.append(("breakdown", run_num, f"diffs: {diff_rules}"))

    if variances:
        points = [x["points"] for x in results]
        print("\n=== VARIANCE REPORT ===\n")
        print(f"Runs: {args.runs}")
        print(f"Points range: min={min(points)}, max={max(points)}")
        print()
        for stage, run, detail in variances:
            print(f"  Run {run} - {stage}: {detail}")
        print("\nRepeatability check FAILED.")
        sys.exit(1)
    else:
        print("\nPASS: Repeatability check passed.")
        print("\n--- Provenance ---")
        print(f"  receipt_hash: {first['receipt_hash']}")
        print("\n--- Run metrics ---")
        print(f"  runs: {args.runs}")
        print(f"  points: {first['points']}")
        for rule, value in first["breakdown"].items():
            print(f"  {rule}: {value}")
        sys.exit(0)


if __name__ == "__main__":
    main()
