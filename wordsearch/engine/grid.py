"""Letter grid representation and helper utilities."""

from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence

from ..core.constants import Bounds, Direction
from ..core.models import Position


UNSET = ""


class LetterGrid:
    """A square letter grid with its solution mask.

    Coordinates are 1-based. Cells hold ``UNSET`` until a word or a noise
    letter is written into them.
    """

    def __init__(self, size: int) -> None:
        self.size = size
        self.bounds = Bounds(size)
        self.rows: List[List[str]] = [[UNSET for _ in range(size)] for _ in range(size)]
        self.mask: List[List[bool]] = [[False for _ in range(size)] for _ in range(size)]

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[str]],
        mask: Optional[Sequence[Sequence[bool]]] = None,
    ) -> "LetterGrid":
        grid = cls(len(rows))
        grid.rows = [[str(letter) for letter in row] for row in rows]
        if mask is not None:
            grid.mask = [[bool(flag) for flag in row] for row in mask]
        return grid

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def contains(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col)

    def cell(self, row: int, col: int) -> str:
        return self.rows[row - 1][col - 1]

    def is_unset(self, row: int, col: int) -> bool:
        return self.cell(row, col) == UNSET

    def is_solution_cell(self, row: int, col: int) -> bool:
        if not self.contains(row, col):
            return False
        return self.mask[row - 1][col - 1]

    def walk(self, start: Position, direction: Direction, length: int) -> List[Position]:
        """Return the ``length`` positions from ``start`` along ``direction``.

        Positions may fall outside the grid; callers check bounds.
        """

        return [
            Position(row=start.row + i * direction.dy, col=start.col + i * direction.dx)
            for i in range(length)
        ]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def place_word(self, word: str, positions: Sequence[Position]) -> None:
        for letter, pos in zip(word, positions):
            self.rows[pos.row - 1][pos.col - 1] = letter
        self.mark_solution(positions)

    def mark_solution(self, positions: Iterable[Position]) -> None:
        for pos in positions:
            self.mask[pos.row - 1][pos.col - 1] = True

    def fill_empty(self, letters: str, rng: random.Random) -> int:
        """Fill every unset cell with a random letter; return how many were filled."""

        filled = 0
        for row in self.rows:
            for index, letter in enumerate(row):
                if letter == UNSET:
                    row[index] = rng.choice(letters)
                    filled += 1
        return filled

    def unset_count(self) -> int:
        return sum(1 for row in self.rows for letter in row if letter == UNSET)

    def iter_positions(self) -> Iterable[Position]:
        for row in range(1, self.size + 1):
            for col in range(1, self.size + 1):
                yield Position(row=row, col=col)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_jsonable(self) -> List[List[str]]:
        return [list(row) for row in self.rows]

    def mask_to_jsonable(self) -> List[List[bool]]:
        return [list(row) for row in self.mask]
