"""Pretty-print helpers for word search boards."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List, Optional

from ..data.normalization import strikethrough

if TYPE_CHECKING:
    from ..core.models import Position
    from ..engine.board import Board


def format_grid(
    board: Board,
    *,
    show_solution: Optional[bool] = None,
    highlight: Optional[Position] = None,
) -> str:
    """Render the grid with 1-based row/column headers.

    Cells of found words are bracketed; when the solution is shown, the
    remaining word cells are lower-cased. ``highlight`` marks the anchor.
    """

    if show_solution is None:
        show_solution = board.is_showing_solution()
    found_cells = {
        (pos.row, pos.col) for entry in board.get_found_entries() for pos in entry.positions
    }
    size = board.size
    lines = ["    " + " ".join(f"{c:>3}" for c in range(1, size + 1))]
    lines.append("    " + "-" * (4 * size - 1))
    for r in range(1, size + 1):
        rendered = []
        for c in range(1, size + 1):
            letter = board.grid.cell(r, c)
            if show_solution and board.is_solution_cell(r, c):
                letter = letter.lower()
            if highlight is not None and (highlight.row, highlight.col) == (r, c):
                rendered.append(f"<{letter}>")
            elif (r, c) in found_cells:
                rendered.append(f"[{letter}]")
            else:
                rendered.append(f" {letter} ")
        lines.append(f"{r:>2} | " + " ".join(rendered))
    return "\n".join(lines)


def format_word_list(board: Board) -> str:
    meta = board.metadata
    lines: List[str] = [f"List: {meta.title}", f"Language: {meta.language or '-'}"]
    for status in board.get_word_statuses():
        if status.found:
            lines.append(f"✓ {strikethrough(status.word)}")
        else:
            lines.append(f"• {status.word}")
    return "\n".join(lines)


def format_status(board: Board) -> str:
    return f"Found: {board.get_found_count()} · Remaining: {board.get_remaining_count()}"


def print_board(board: Board, *, highlight: Optional[Position] = None, stream=None) -> None:
    """Print grid, progress line and word list."""

    stream = stream or sys.stdout
    print(format_grid(board, highlight=highlight), file=stream)
    print(file=stream)
    print(format_status(board), file=stream)
    print(format_word_list(board), file=stream)
