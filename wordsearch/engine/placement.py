"""Word placement engine.

Words are placed one at a time on an empty grid. Each word prefers the
compass directions used least so far and start cells that have not been
visited yet; a word that does not fit after ``MAX_PLACEMENT_TRIES`` tries is
dropped. Remaining cells are filled with random letters from the alphabet.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..core.constants import (
    MAX_PLACEMENT_TRIES,
    MIN_WORD_LENGTH,
    Direction,
)
from ..core.models import Position, WordEntry
from ..data.normalization import expand_alphabet, normalize_word
from ..utils.logger import get_logger
from .grid import LetterGrid, UNSET


LOGGER = get_logger(__name__)


@dataclass
class PlacementResult:
    grid: LetterGrid
    entries: List[WordEntry] = field(default_factory=list)

    @property
    def solution_mask(self) -> List[List[bool]]:
        return self.grid.mask


def can_place_word(grid: LetterGrid, word: str, start: Position, direction: Direction) -> bool:
    """Return True if ``word`` fits from ``start`` along ``direction``.

    Every visited cell must be in bounds and either unset or already hold the
    same letter (a crossing).
    """

    for letter, pos in zip(word, grid.walk(start, direction, len(word))):
        if not grid.contains(pos.row, pos.col):
            return False
        current = grid.cell(pos.row, pos.col)
        if current != UNSET and current != letter:
            return False
    return True


class StartCursor:
    """Cycles through a shuffled list of every grid coordinate.

    The list is reshuffled each time it is exhausted, so early tries spread
    over unvisited cells before repeating.
    """

    def __init__(self, size: int, rng: random.Random) -> None:
        self.rng = rng
        self.points = [
            Position(row=row, col=col)
            for row in range(1, size + 1)
            for col in range(1, size + 1)
        ]
        self.rng.shuffle(self.points)
        self.index = 0

    def __len__(self) -> int:
        return len(self.points)

    def next(self) -> Position:
        point = self.points[self.index]
        self.index += 1
        if self.index >= len(self.points):
            self.index = 0
            self.rng.shuffle(self.points)
        return point


class PlacementEngine:
    """Builds a filled letter grid from a word list."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def generate(
        self,
        words: Sequence[str],
        alphabet: str,
        max_words: int,
        size: int,
    ) -> PlacementResult:
        alphabet = expand_alphabet(alphabet)
        limit = max(1, int(max_words))
        grid = LetterGrid(size)
        result = PlacementResult(grid=grid)

        candidates = list(words)
        self.rng.shuffle(candidates)
        cursor = StartCursor(size, self.rng)
        usage: Dict[Direction, int] = {direction: 0 for direction in Direction}
        dropped = 0

        for candidate in candidates:
            if len(result.entries) >= limit:
                break
            word = normalize_word(candidate, alphabet)
            if len(word) < MIN_WORD_LENGTH or len(word) > size:
                LOGGER.debug("Skipping '%s': normalized length %d out of range", candidate, len(word))
                continue
            entry = self._place(grid, word, usage, cursor)
            if entry is None:
                dropped += 1
                LOGGER.debug("Dropping '%s' after %d tries", word, MAX_PLACEMENT_TRIES)
                continue
            result.entries.append(entry)

        noise = grid.fill_empty(alphabet, self.rng)
        LOGGER.info(
            "Generated %dx%d grid: %d words placed (cap %d, %d dropped), %d noise cells",
            size,
            size,
            len(result.entries),
            limit,
            dropped,
            noise,
        )
        return result

    def rank_directions(self, usage: Dict[Direction, int]) -> List[Direction]:
        """Order directions by usage, ties broken by a random bias."""

        keyed = [(usage[direction], self.rng.random(), direction) for direction in Direction]
        keyed.sort(key=lambda item: (item[0], item[1]))
        return [direction for _, _, direction in keyed]

    def _place(
        self,
        grid: LetterGrid,
        word: str,
        usage: Dict[Direction, int],
        cursor: StartCursor,
    ) -> Optional[WordEntry]:
        ranked = self.rank_directions(usage)
        start_attempts = 0
        for attempt in range(MAX_PLACEMENT_TRIES):
            direction = ranked[attempt % len(ranked)]
            if start_attempts < len(cursor):
                start = cursor.next()
                start_attempts += 1
            else:
                start = Position(
                    row=self.rng.randint(1, grid.size),
                    col=self.rng.randint(1, grid.size),
                )
            if not can_place_word(grid, word, start, direction):
                continue
            positions = grid.walk(start, direction, len(word))
            grid.place_word(word, positions)
            usage[direction] += 1
            return WordEntry(text=word, positions=tuple(positions))
        return None


def generate(
    words: Sequence[str],
    alphabet: str,
    max_words: int,
    size: int,
    rng: Optional[random.Random] = None,
) -> PlacementResult:
    """Convenience wrapper around :class:`PlacementEngine`."""

    return PlacementEngine(rng).generate(words, alphabet, max_words, size)
