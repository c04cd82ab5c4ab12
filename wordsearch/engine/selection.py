"""Tap/hold selection state machine.

A selection is made by tapping the two end cells of a word. The first tap
anchors the selection; tapping the anchor again cancels it; tapping another
cell either completes a word or moves the anchor there. Holding a cell marks
the word covering it as found directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..core.models import Position, WordEntry
from ..utils.logger import get_logger
from .board import Board


LOGGER = get_logger(__name__)


class SelectionOutcome(str, Enum):
    ANCHORED = "ANCHORED"
    CANCELLED = "CANCELLED"
    FOUND = "FOUND"
    REANCHORED = "REANCHORED"


@dataclass(frozen=True)
class SelectionResult:
    outcome: SelectionOutcome
    anchor: Optional[Position] = None
    entry: Optional[WordEntry] = None
    all_found: bool = False


class SelectionController:
    """Turns tap and hold events into found-word transitions on a board."""

    def __init__(
        self,
        board: Board,
        on_change: Optional[Callable[[], None]] = None,
        on_all_found: Optional[Callable[[Board], None]] = None,
    ) -> None:
        self.board = board
        self.anchor: Optional[Position] = None
        self.completion_shown = False
        self.on_change = on_change
        self.on_all_found = on_all_found

    def reset(self, board: Optional[Board] = None) -> None:
        """Drop the anchor and completion guard, optionally switching boards."""

        if board is not None:
            self.board = board
        self.anchor = None
        self.completion_shown = False

    def acknowledge_completion(self) -> None:
        self.completion_shown = False

    def handle(self, row: int, col: int, is_hold: bool = False) -> SelectionResult:
        if is_hold:
            return self.hold(row, col)
        return self.tap(row, col)

    def tap(self, row: int, col: int) -> SelectionResult:
        cell = Position(row=row, col=col)
        if self.anchor is None:
            self.anchor = cell
            return SelectionResult(SelectionOutcome.ANCHORED, anchor=cell)
        if self.anchor == cell:
            self.anchor = None
            return SelectionResult(SelectionOutcome.CANCELLED)
        entry = self.board.find_word_by_endpoints(self.anchor.row, self.anchor.col, row, col)
        if entry is None:
            self.anchor = cell
            return SelectionResult(SelectionOutcome.REANCHORED, anchor=cell)
        return self._word_found(entry)

    def hold(self, row: int, col: int) -> SelectionResult:
        entry = self.board.find_word_containing_cell(row, col)
        if entry is None:
            return self.tap(row, col)
        return self._word_found(entry)

    def _word_found(self, entry: WordEntry) -> SelectionResult:
        self.board.set_word_found(entry.text, True)
        self.anchor = None
        LOGGER.info(
            "Found '%s' (%d/%d)",
            entry.text,
            self.board.get_found_count(),
            len(self.board.placed_words),
        )
        if self.on_change is not None:
            self.on_change()
        all_found = False
        if self.board.get_found_count() == len(self.board.placed_words):
            all_found = self._complete()
        return SelectionResult(SelectionOutcome.FOUND, entry=entry, all_found=all_found)

    def _complete(self) -> bool:
        if self.completion_shown:
            return False
        self.board.mark_solved()
        self.completion_shown = True
        LOGGER.info("All %d words found", len(self.board.placed_words))
        if self.on_change is not None:
            self.on_change()
        if self.on_all_found is not None:
            self.on_all_found(self.board)
        return True
