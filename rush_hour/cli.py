from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .board import EXAMPLE_PUZZLE, BoardState
from .errors import SearchLimitReached
from .solver import solve


def build_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve Rush Hour puzzles given as ASCII art.")
    parser.add_argument(
        "puzzle",
        nargs="?",
        default="-",
        help="Path to puzzle file (default: read standard input)",
    )
    parser.add_argument(
        "--max-states",
        type=int,
        default=None,
        help="Give up after exploring this many board states (default: no limit).",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Write one '.' per explored state to stderr.",
    )
    parser.add_argument(
        "--show-board",
        action="store_true",
        help="Print the parsed board before searching.",
    )
    parser.add_argument(
        "--loglevel",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _progress_dot(_state: BoardState) -> None:
    sys.stderr.write(".")
    sys.stderr.flush()


def main(argv: List[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.loglevel.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    board = BoardState.parse(_read_input(args.puzzle))
    if board is None:
        print("Could not parse input. Try entering something like this:")
        print(EXAMPLE_PUZZLE)
        return 2

    if args.show_board:
        print(board)

    try:
        plan = solve(board, max_states=args.max_states, on_expand=_progress_dot if args.progress else None)
    except SearchLimitReached as exc:
        if args.progress:
            sys.stderr.write("\n")
        print(str(exc))
        return 3
    if args.progress:
        sys.stderr.write("\n")

    if plan is None:
        print("No solution found.")
        return 1
    print()
    print(f"Solution found in {len(plan)} steps!")
    for i, step in enumerate(plan, 1):
        print(f"{i:2d}. {step.description}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
