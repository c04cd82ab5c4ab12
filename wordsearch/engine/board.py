"""Word search board: one puzzle instance and the player's progress on it."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Set

from ..core.constants import DEFAULT_GRID_SIZE, DEFAULT_MAX_WORDS, normalize_grid_size
from ..core.exceptions import InvalidWordError
from ..core.models import Position, WordEntry, WordListMetadata, WordStatus
from ..data.normalization import expand_alphabet, safe_upper
from ..data.wordlist import read_word_list
from ..utils.logger import get_logger
from .grid import LetterGrid
from .placement import PlacementEngine
from .state_codec import decode_board, encode_board


LOGGER = get_logger(__name__)


@dataclass
class BoardConfig:
    """Inputs a board is generated from."""

    words: List[str] = field(default_factory=list)
    metadata: WordListMetadata = field(default_factory=WordListMetadata)
    grid_size: int = DEFAULT_GRID_SIZE
    max_words: int = DEFAULT_MAX_WORDS
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self.grid_size = normalize_grid_size(self.grid_size)
        self.max_words = max(1, int(self.max_words))

    @property
    def letters(self) -> str:
        return expand_alphabet(self.metadata.letters)

    @classmethod
    def from_word_list(
        cls,
        identifier: Optional[str] = None,
        base_dir: Path | str | None = None,
        **kwargs: Any,
    ) -> "BoardConfig":
        metadata, words = read_word_list(identifier, base_dir)
        return cls(words=words, metadata=metadata, **kwargs)


class Board:
    """Owns the grid, placed words and found-word progress of one puzzle."""

    def __init__(
        self,
        config: BoardConfig,
        rng: Optional[random.Random] = None,
        state: Optional[dict] = None,
    ) -> None:
        self.config = config
        self.rng = rng or random.Random(config.seed)
        self.engine = PlacementEngine(self.rng)
        self.words = list(config.words)
        self.metadata = config.metadata
        self.letters = config.letters
        self.max_words = config.max_words
        self.grid = LetterGrid(config.grid_size)
        self.placed_words: List[WordEntry] = []
        self.found_words: Set[str] = set()
        self.solved = False
        self.show_solution = False
        if state is not None:
            self.load_state(state)
        else:
            self.generate()

    @property
    def size(self) -> int:
        return self.grid.size

    def get_grid(self) -> List[List[str]]:
        return self.grid.to_jsonable()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def generate(self) -> None:
        result = self.engine.generate(self.words, self.letters, self.max_words, self.size)
        self.grid = result.grid
        self.placed_words = result.entries
        self.found_words = set()
        self.solved = False
        self.show_solution = False

    def reconfigure(self, config: BoardConfig) -> "Board":
        """Return a fresh board for ``config``; this board is left untouched."""

        LOGGER.info(
            "Reconfiguring board: %dx%d, max %d words, list '%s'",
            config.grid_size,
            config.grid_size,
            config.max_words,
            config.metadata.title,
        )
        return Board(config, rng=self.rng)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_word_statuses(self) -> List[WordStatus]:
        statuses = [
            WordStatus(word=entry.text, found=entry.text in self.found_words)
            for entry in self.placed_words
        ]
        statuses.sort(key=lambda status: status.word)
        return statuses

    def find_word_by_endpoints(self, r1: int, c1: int, r2: int, c2: int) -> Optional[WordEntry]:
        a = Position(row=r1, col=c1)
        b = Position(row=r2, col=c2)
        for entry in self.placed_words:
            if entry.has_endpoints(a, b):
                return entry
        return None

    def find_word_containing_cell(self, row: int, col: int) -> Optional[WordEntry]:
        """Return the first-placed entry covering the cell.

        At a crossing the earlier-placed word wins.
        """

        target = Position(row=row, col=col)
        for entry in self.placed_words:
            if entry.contains(target):
                return entry
        return None

    def get_found_entries(self) -> List[WordEntry]:
        return [entry for entry in self.placed_words if entry.text in self.found_words]

    def get_found_count(self) -> int:
        return len(self.found_words)

    def get_remaining_count(self) -> int:
        return max(0, len(self.placed_words) - self.get_found_count())

    def is_solution_cell(self, row: int, col: int) -> bool:
        return self.grid.is_solution_cell(row, col)

    def is_showing_solution(self) -> bool:
        return self.show_solution

    def is_solved(self) -> bool:
        return self.solved or self.get_found_count() == len(self.placed_words)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def _placed_text(self, word: str) -> str:
        text = safe_upper(word)
        if not any(entry.text == text for entry in self.placed_words):
            raise InvalidWordError(f"'{word}' is not placed on this board")
        return text

    def set_word_found(self, word: str, value: bool = True) -> None:
        text = self._placed_text(word)
        if value:
            self.found_words.add(text)
        else:
            self.found_words.discard(text)

    def toggle_word(self, word: str) -> None:
        text = self._placed_text(word)
        if text in self.found_words:
            self.found_words.discard(text)
        else:
            self.found_words.add(text)

    def toggle_solution(self) -> None:
        self.show_solution = not self.show_solution

    def mark_solved(self) -> None:
        self.solved = True

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def serialize_state(self) -> dict:
        return encode_board(self)

    def load_state(self, record: Optional[dict]) -> None:
        state = decode_board(record)
        if state is None:
            LOGGER.info("No usable saved board; generating a new puzzle")
            self.generate()
            return
        self.grid = state.grid
        self.placed_words = state.placed_words
        self.found_words = state.found_words
        self.solved = state.solved
        self.show_solution = state.show_solution
        self.letters = state.letters
        self.metadata = state.metadata
        self.max_words = state.max_words
