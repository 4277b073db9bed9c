# -*- coding: utf-8 -*-
"""
cli.py  (abe-lsss command-line tool)
------------------------------------
Commands:
  abe-lsss compile  --policy "(A and B) or C" [--out keys/policy.json]
  abe-lsss evaluate --policy "(A and B) or C" --attrs "A,B"
  abe-lsss evaluate --matrix keys/policy.json --attrs "C"
  abe-lsss tree     --policy "(A and B) or C"
  abe-lsss examples

`evaluate` prints result=OK plus the rows/weights, or result=FAIL and exits
with status 1 when the attributes do not satisfy the policy.

The field order defaults to BN254 and can be set with --order or
ABE_LSSS_FIELD_ORDER.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import config
from .compiler import compile_policy
from .errors import LsssError
from .evaluator import evaluate
from .field import default_field
from .policy import EXAMPLE_POLICIES, parse_policy
from .serialization import load_matrix, save_matrix


def _split_attrs(text: str) -> List[str]:
    return [x.strip() for x in text.split(",") if x.strip()]


def cmd_compile(args: argparse.Namespace) -> None:
    field = default_field(args.order)
    matrix = compile_policy(args.policy, field)
    print(f"[LSSS] Access formula: {args.policy}")
    print(matrix.format())
    if args.out:
        save_matrix(args.out, matrix)
        print(f"[LSSS] Matrix saved -> {args.out}")


def cmd_evaluate(args: argparse.Namespace) -> None:
    if args.matrix:
        matrix = load_matrix(args.matrix, default_field(args.order) if args.order else None)
    else:
        matrix = compile_policy(args.policy, default_field(args.order))
    held = _split_attrs(args.attrs)

    rec = evaluate(matrix, held)
    if rec is None:
        print(f"[LSSS] attrs={held} result=FAIL (access policy not satisfied)")
        raise SystemExit(1)

    print(f"[LSSS] attrs={held} result=OK")
    for i, w in zip(rec.rows, rec.weights):
        name = matrix.label(i) or hex(matrix.rho(i))
        print(f"row: {i} || attribute: {name} || wi: {w}")


def cmd_tree(args: argparse.Namespace) -> None:
    tree = parse_policy(args.policy, default_field(args.order))
    print(tree.pretty())


def cmd_examples(args: argparse.Namespace) -> None:
    field = default_field(args.order)
    for formula in EXAMPLE_POLICIES:
        print(f"[LSSS] Access formula: {formula}")
        print(compile_policy(formula, field).format())
        print()


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="abe-lsss",
        description="Compile AND/OR access policies into LSSS matrices and solve them",
    )
    ap.add_argument("--order", default=None,
                    help=f"Prime field order (default: ${config.FIELD_ORDER_ENV} or BN254)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = ap.add_subparsers(dest="cmd", required=True)

    # --- compile ---
    s0 = sub.add_parser("compile", help="Compile a policy and print its matrix")
    s0.add_argument("--policy", required=True, help='Boolean policy, e.g. "(A and B) or C"')
    s0.add_argument("--out", default=None, help="Optional JSON output path")
    s0.set_defaults(func=cmd_compile)

    # --- evaluate ---
    s1 = sub.add_parser("evaluate", help="Find reconstruction weights for an attribute set")
    src = s1.add_mutually_exclusive_group(required=True)
    src.add_argument("--policy", help="Boolean policy string")
    src.add_argument("--matrix", help="Matrix JSON written by 'compile --out'")
    s1.add_argument("--attrs", required=True, help='Comma-separated attributes, e.g. "A,B,C"')
    s1.set_defaults(func=cmd_evaluate)

    # --- tree ---
    s2 = sub.add_parser("tree", help="Pretty-print the parsed access tree")
    s2.add_argument("--policy", required=True, help="Boolean policy string")
    s2.set_defaults(func=cmd_tree)

    # --- examples ---
    s3 = sub.add_parser("examples", help="Compile the built-in example policies")
    s3.set_defaults(func=cmd_examples)

    return ap


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    try:
        args.func(args)
    except (LsssError, ValueError, OSError) as e:
        print(f"[LSSS] error: {e}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    main()
