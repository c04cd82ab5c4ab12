"""Puzzle session: settings, the live board and its persistence.

Changing the word list or grid size replaces the board wholesale; every
state-changing event writes the session document through the store.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..core.constants import (
    DEFAULT_GRID_SCALE,
    DEFAULT_GRID_SIZE,
    DEFAULT_MAX_WORDS,
    DEFAULT_WORDLIST,
    GridScale,
    clamp_max_words,
    normalize_grid_scale,
    normalize_grid_size,
)
from ..data.wordlist import WordListInfo, list_word_lists, resolve_path
from ..utils.logger import get_logger
from .board import Board, BoardConfig
from .selection import SelectionController, SelectionResult
from .session_store import SessionStore


LOGGER = get_logger(__name__)

WORD_LIST_DIR = "word_lists"


@dataclass
class SessionSettings:
    wordlist_path: str = DEFAULT_WORDLIST
    max_words: int = DEFAULT_MAX_WORDS
    grid_size: int = DEFAULT_GRID_SIZE
    grid_scale: GridScale = DEFAULT_GRID_SCALE

    def __post_init__(self) -> None:
        if not isinstance(self.wordlist_path, str) or not self.wordlist_path:
            self.wordlist_path = DEFAULT_WORDLIST
        self.max_words = clamp_max_words(self.max_words)
        self.grid_size = normalize_grid_size(self.grid_size)
        self.grid_scale = normalize_grid_scale(self.grid_scale)

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "SessionSettings":
        payload = payload or {}
        return cls(
            wordlist_path=payload.get("wordlist_path") or DEFAULT_WORDLIST,
            max_words=payload.get("max_words", DEFAULT_MAX_WORDS),
            grid_size=payload.get("grid_size", DEFAULT_GRID_SIZE),
            grid_scale=payload.get("grid_scale", DEFAULT_GRID_SCALE),
        )


class WordSearchSession:
    """Owns one board at a time and keeps it persisted."""

    def __init__(
        self,
        store: Optional[SessionStore] = None,
        settings: Optional[SessionSettings] = None,
        base_dir: Path | str | None = None,
        rng: Optional[random.Random] = None,
        on_all_found: Optional[Callable[[Board], None]] = None,
    ) -> None:
        self.store = store
        self.settings = settings or SessionSettings()
        self.base_dir = Path(base_dir).resolve() if base_dir is not None else None
        self.rng = rng or random.Random()
        self.board: Optional[Board] = None
        self._on_all_found = on_all_found
        self._selection: Optional[SelectionController] = None

    @classmethod
    def open(
        cls,
        store: SessionStore,
        base_dir: Path | str | None = None,
        rng: Optional[random.Random] = None,
        on_all_found: Optional[Callable[[Board], None]] = None,
    ) -> "WordSearchSession":
        """Create a session whose settings come from the stored document."""

        settings = SessionSettings.from_payload(store.load())
        return cls(store, settings, base_dir=base_dir, rng=rng, on_all_found=on_all_found)

    # ------------------------------------------------------------------
    # Board access
    # ------------------------------------------------------------------
    def board_config(self) -> BoardConfig:
        return BoardConfig.from_word_list(
            self.settings.wordlist_path,
            base_dir=self.base_dir,
            grid_size=self.settings.grid_size,
            max_words=self.settings.max_words,
        )

    def get_board(self) -> Board:
        if self.board is None:
            self.board = self._restore_board() or Board(self.board_config(), rng=self.rng)
        return self.board

    def _restore_board(self) -> Optional[Board]:
        state = self.store.cached if self.store is not None else None
        if not state or state.get("wordlist_path") != self.settings.wordlist_path:
            return None
        if normalize_grid_size(state.get("grid_size", DEFAULT_GRID_SIZE)) != self.settings.grid_size:
            return None
        LOGGER.info("Restoring saved board for '%s'", self.settings.wordlist_path)
        board = Board(self.board_config(), rng=self.rng, state=state.get("board"))
        board.max_words = self.settings.max_words
        return board

    @property
    def selection(self) -> SelectionController:
        board = self.get_board()
        if self._selection is None:
            self._selection = SelectionController(
                board, on_change=self.save, on_all_found=self._on_all_found
            )
        elif self._selection.board is not board:
            self._selection.reset(board)
        return self._selection

    def _replace_board(self) -> None:
        config = self.board_config()
        if self.board is None:
            self.board = Board(config, rng=self.rng)
        else:
            self.board = self.board.reconfigure(config)
        if self._selection is not None:
            self._selection.reset(self.board)
        self.save()

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------
    def tap(self, row: int, col: int, is_hold: bool = False) -> SelectionResult:
        return self.selection.handle(row, col, is_hold=is_hold)

    def new_puzzle(self) -> Board:
        board = self.get_board()
        board.generate()
        self.selection.reset(board)
        self.save()
        return board

    def toggle_solution(self) -> bool:
        board = self.get_board()
        board.toggle_solution()
        self.save()
        return board.is_showing_solution()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def list_word_lists(self) -> List[WordListInfo]:
        return list_word_lists(resolve_path(WORD_LIST_DIR, self.base_dir))

    def set_word_list(self, path: Optional[str]) -> None:
        if not isinstance(path, str) or not path:
            return
        self.settings.wordlist_path = path
        self._replace_board()

    def set_max_words(self, count: Any) -> None:
        count = clamp_max_words(count)
        if self.settings.max_words == count:
            return
        self.settings.max_words = count
        if self.board is not None:
            self.board.max_words = count
        self.save()

    def set_grid_size(self, size: Any) -> None:
        size = normalize_grid_size(size)
        if self.settings.grid_size == size:
            return
        self.settings.grid_size = size
        self._replace_board()

    def set_grid_scale(self, key: Any) -> None:
        try:
            scale = GridScale(key)
        except ValueError:
            return
        if self.settings.grid_scale == scale:
            return
        self.settings.grid_scale = scale
        self.save()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def to_payload(self) -> Dict[str, Any]:
        return {
            "wordlist_path": self.settings.wordlist_path,
            "max_words": self.settings.max_words,
            "grid_scale": self.settings.grid_scale.value,
            "grid_size": self.settings.grid_size,
            "board": self.get_board().serialize_state(),
        }

    def save(self) -> None:
        if self.store is None or self.board is None:
            return
        self.store.save(self.to_payload())
