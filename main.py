"""CLI entrypoint for the word search puzzle."""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from wordsearch.core.constants import GRID_SIZE_CHOICES, GridScale
from wordsearch.core.exceptions import InvalidWordError
from wordsearch.engine.board import Board
from wordsearch.engine.selection import SelectionOutcome
from wordsearch.engine.session import WordSearchSession
from wordsearch.engine.session_store import DEFAULT_STATE_PATH, SessionStore
from wordsearch.utils.logger import configure_logging
from wordsearch.utils.pretty import print_board


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate and play word search puzzles",
    )
    parser.add_argument(
        "--word-list",
        type=str,
        help="Word list file path or http(s) URL (one word per line, optional lang= header)",
    )
    parser.add_argument(
        "--list-word-lists",
        action="store_true",
        help="Print the bundled word lists and exit",
    )
    parser.add_argument(
        "--grid-size",
        type=int,
        help=f"Grid size, one of {', '.join(str(s) for s in GRID_SIZE_CHOICES)}",
    )
    parser.add_argument("--max-words", type=int, help="Maximum words to place (4-24)")
    parser.add_argument(
        "--grid-scale",
        type=str,
        choices=[scale.value for scale in GridScale],
        help="Display scale stored with the session",
    )
    parser.add_argument(
        "--state",
        type=Path,
        default=DEFAULT_STATE_PATH,
        help="Session state JSON file",
    )
    parser.add_argument("--new", action="store_true", help="Start a new puzzle")
    parser.add_argument(
        "--tap",
        nargs=2,
        type=int,
        action="append",
        metavar=("ROW", "COL"),
        default=[],
        help="Tap a cell (1-based); repeat to select both ends of a word",
    )
    parser.add_argument(
        "--hold",
        nargs=2,
        type=int,
        action="append",
        metavar=("ROW", "COL"),
        default=[],
        help="Hold a cell to mark the word covering it",
    )
    parser.add_argument(
        "--toggle-word",
        action="append",
        metavar="WORD",
        default=[],
        help="Toggle a placed word's found status",
    )
    parser.add_argument(
        "--toggle-solution",
        action="store_true",
        help="Show or hide the solution overlay",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--json", action="store_true", help="Print the board record as JSON")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def announce_completion(board: Board) -> None:
    print(f"Congratulations! You found all {len(board.placed_words)} words.")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    session = WordSearchSession.open(
        SessionStore(args.state),
        rng=random.Random(args.seed),
        on_all_found=announce_completion,
    )

    if args.list_word_lists:
        for entry in session.list_word_lists():
            print(f"{entry.title}\t{entry.path}")
        return 0

    if args.word_list and args.word_list != session.settings.wordlist_path:
        session.set_word_list(args.word_list)
    if args.grid_size is not None:
        session.set_grid_size(args.grid_size)
    if args.max_words is not None:
        session.set_max_words(args.max_words)
    if args.grid_scale:
        session.set_grid_scale(args.grid_scale)
    if args.new:
        session.new_puzzle()

    board = session.get_board()
    if args.toggle_solution:
        session.toggle_solution()

    for word in args.toggle_word:
        try:
            board.toggle_word(word)
        except InvalidWordError as exc:
            parser.error(str(exc))

    for row, col in args.hold:
        result = session.tap(row, col, is_hold=True)
        if result.outcome == SelectionOutcome.FOUND and result.entry is not None:
            print(f"Found {result.entry.text}")

    for row, col in args.tap:
        result = session.tap(row, col)
        if result.outcome == SelectionOutcome.FOUND and result.entry is not None:
            print(f"Found {result.entry.text}")

    session.save()

    if args.json:
        print(json.dumps(board.serialize_state(), ensure_ascii=False, indent=2))
    else:
        print_board(board, highlight=session.selection.anchor)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
