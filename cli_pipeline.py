#!/usr/bin/env python3
"""CLI for the deterministic receipt validation and points pipeline."""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from src.scoring import score_breakdown
from src.validation import ReceiptValidationError, ViolationKind, validate_receipt


def _load_receipt(path: Path):
    """Read and validate a receipt JSON file. Exits 1 on any rejection."""
    if not path.exists():
        print(f"Error: Receipt file not found: {path}", file=sys.stderr)
        sys.exit(1)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
        return validate_receipt(document)
    except json.JSONDecodeError:
        err = ReceiptValidationError(ViolationKind.MALFORMED_INPUT)
    except ReceiptValidationError as e:
        err = e
    print(f"{err.kind.value}: {err.message}", file=sys.stderr)
    sys.exit(1)


def cmd_validate(args: argparse.Namespace) -> None:
    """Validate a receipt file against the receipt grammar."""
    _load_receipt(Path(args.receipt))
    print("OK")


def cmd_score(args: argparse.Namespace) -> None:
    """Validate then score a receipt file."""
    receipt = _load_receipt(Path(args.receipt))
    breakdown = score_breakdown(receipt)
    points = sum(breakdown.values())

    if args.json:
        print(json.dumps({"points": points, "breakdown": breakdown}, indent=2))
    else:
        print(f"=== {receipt.retailer} ({receipt.purchase_date} {receipt.purchase_time}) ===")
        print(f"Items: {len(receipt.items)}  Total: ${receipt.total_amount}")
        print(f"Points: {points}")
        print("\nPer rule:")
        for rule, value in breakdown.items():
            print(f"  {rule}: {value}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Deterministic receipt points pipeline")
    sub = parser.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Check a receipt JSON file")
    p_validate.add_argument("receipt", type=Path, help="Path to receipt JSON file")
    p_validate.set_defaults(func=cmd_validate)

    p_score = sub.add_parser("score", help="Validate and score a receipt JSON file")
    p_score.add_argument("receipt", type=Path, help="Path to receipt JSON file")
    p_score.add_argument("--json", action="store_true", help="Output JSON")
    p_score.set_defaults(func=cmd_score)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
