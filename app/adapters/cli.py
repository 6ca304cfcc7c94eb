"""
app/adapters/cli.py

Command-line interface for the phonetic recall checker.

    amigo skeleton "Seňora" "Signora"
    amigo score kvatro quattro --json
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from app.core.domain.phonetics import MatchThresholds, evaluate, normalize
from app.shared.config import settings


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amigo",
        description="Phonetic skeletons and recall scoring.",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        dest="command",
        required=True,
    )

    skel = subparsers.add_parser(
        "skeleton",
        help="Print the phonetic skeleton of each text.",
    )
    skel.add_argument("texts", nargs="+", metavar="TEXT")

    sc = subparsers.add_parser(
        "score",
        help="Score a recall attempt against a target word.",
    )
    sc.add_argument("input", help="What the learner typed.")
    sc.add_argument("target", help="Target-language reference word.")
    sc.add_argument(
        "--win-threshold",
        type=int,
        default=settings.MATCH_WIN_THRESHOLD,
        help="Lowest similarity counted as a win (default: %(default)s).",
    )
    sc.add_argument(
        "--json",
        action="store_true",
        help="Emit the result as JSON.",
    )

    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_skeleton(args: argparse.Namespace) -> int:
    for text in args.texts:
        print(f"{text}\t{normalize(text)}")
    return 0


def _cmd_score(args: argparse.Namespace) -> int:
    thresholds = MatchThresholds(win=args.win_threshold, exact=settings.MATCH_EXACT_THRESHOLD)
    result = evaluate(args.input, args.target, thresholds)

    if args.json:
        payload = result.model_dump(mode="json")
        payload["input_skeleton"] = normalize(args.input)
        payload["target_skeleton"] = normalize(args.target)
        print(json.dumps(payload, ensure_ascii=False))
    else:
        print(
            f"{args.input!r} vs {args.target!r}: "
            f"{result.similarity} -> {result.status.value} ({result.match_type.value})"
        )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    if args.command == "skeleton":
        return _cmd_skeleton(args)
    if args.command == "score":
        return _cmd_score(args)

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
