"""Board state record encoding and decoding.

The record layout is::

    {
      "grid": [[letter, ...], ...],
      "placed_words": [{"word": str, "positions": [{"row": int, "col": int}, ...]}, ...],
      "found_words": [str, ...],
      "solved": bool,
      "show_solution": bool,
      "solution_mask": [[bool, ...], ...],
      "letters": str,
      "metadata": {"lang": str, "letters": str, "title": str},
      "max_words": int,
      "grid_size": int,
    }

Decoding never raises to the caller: a missing or malformed record yields
``None`` and the board regenerates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional, Set

from ..core.constants import DEFAULT_MAX_WORDS, normalize_grid_size
from ..core.exceptions import StateDecodeError
from ..core.models import Position, WordEntry, WordListMetadata
from ..data.normalization import expand_alphabet, safe_upper
from ..utils.logger import get_logger
from .grid import LetterGrid

if TYPE_CHECKING:
    from .board import Board


LOGGER = get_logger(__name__)


@dataclass
class BoardState:
    grid: LetterGrid
    placed_words: List[WordEntry]
    found_words: Set[str] = field(default_factory=set)
    solved: bool = False
    show_solution: bool = False
    letters: str = ""
    metadata: WordListMetadata = field(default_factory=WordListMetadata)
    max_words: int = DEFAULT_MAX_WORDS

    @property
    def grid_size(self) -> int:
        return self.grid.size


def encode_board(board: "Board") -> dict:
    """Return the persisted record for ``board``."""

    return {
        "grid": board.grid.to_jsonable(),
        "placed_words": [entry.to_jsonable() for entry in board.placed_words],
        "found_words": sorted(board.found_words),
        "solved": board.solved,
        "show_solution": board.show_solution,
        "solution_mask": board.grid.mask_to_jsonable(),
        "letters": board.letters,
        "metadata": board.metadata.to_jsonable(),
        "max_words": board.max_words,
        "grid_size": board.size,
    }


def decode_board(record: Any) -> Optional[BoardState]:
    """Return the decoded state, or ``None`` when it cannot be adopted."""

    if not isinstance(record, dict) or not record.get("grid"):
        return None
    try:
        return _decode(record)
    except StateDecodeError as exc:
        LOGGER.warning("Discarding malformed board state: %s", exc)
        return None


def _decode(record: dict) -> BoardState:
    rows = _decode_rows(record["grid"])
    size = len(rows)

    declared = record.get("grid_size")
    if declared is not None and normalize_grid_size(declared) != size:
        LOGGER.warning(
            "Stored grid_size %r does not match %dx%d grid; using grid dimension",
            declared,
            size,
            size,
        )

    placed = [_decode_entry(item, size) for item in _as_list(record.get("placed_words"), "placed_words")]
    mask = record.get("solution_mask")
    if _is_square(mask, size):
        grid = LetterGrid.from_rows(rows, mask)
    else:
        grid = LetterGrid.from_rows(rows)
        for entry in placed:
            grid.mark_solution(entry.positions)

    for entry in placed:
        spelled = "".join(grid.cell(pos.row, pos.col) for pos in entry.positions)
        if spelled != entry.text:
            raise StateDecodeError(f"Entry '{entry.text}' reads '{spelled}' on the grid")

    placed_texts = {entry.text for entry in placed}
    found: Set[str] = set()
    for word in _as_list(record.get("found_words"), "found_words"):
        word = safe_upper(str(word))
        if word in placed_texts:
            found.add(word)
        else:
            LOGGER.warning("Ignoring found word '%s' that is not on the board", word)

    metadata = WordListMetadata.from_jsonable(
        record.get("metadata") if isinstance(record.get("metadata"), dict) else None
    )
    stored_letters = record.get("letters")
    if stored_letters is not None and not isinstance(stored_letters, str):
        raise StateDecodeError(f"'letters' must be a string, got {stored_letters!r}")
    letters = expand_alphabet(stored_letters or metadata.letters)

    return BoardState(
        grid=grid,
        placed_words=placed,
        found_words=found,
        solved=bool(record.get("solved")),
        show_solution=bool(record.get("show_solution")),
        letters=letters,
        metadata=metadata,
        max_words=_decode_max_words(record.get("max_words")),
    )


def _as_list(value: Any, name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise StateDecodeError(f"'{name}' must be a list")
    return value


def _is_square(value: Any, size: int) -> bool:
    return (
        isinstance(value, list)
        and len(value) == size
        and all(isinstance(row, list) and len(row) == size for row in value)
    )


def _decode_rows(value: Any) -> List[List[str]]:
    if not isinstance(value, list) or not _is_square(value, len(value)):
        raise StateDecodeError("grid must be a square list of rows")
    size = len(value)
    if normalize_grid_size(size) != size:
        raise StateDecodeError(f"unsupported grid size {size}")
    rows: List[List[str]] = []
    for row in value:
        if any(not isinstance(letter, str) or len(letter) != 1 for letter in row):
            raise StateDecodeError("grid cells must be single letters")
        rows.append(list(row))
    return rows


def _decode_entry(item: Any, size: int) -> WordEntry:
    if not isinstance(item, dict):
        raise StateDecodeError("placed word must be an object")
    text = safe_upper(str(item.get("word") or ""))
    positions = []
    for pos in _as_list(item.get("positions"), "positions"):
        try:
            position = Position(row=int(pos["row"]), col=int(pos["col"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise StateDecodeError(f"bad position {pos!r} for '{text}'") from exc
        if not (1 <= position.row <= size and 1 <= position.col <= size):
            raise StateDecodeError(f"position {pos!r} for '{text}' is out of bounds")
        positions.append(position)
    if not text or len(positions) != len(text):
        raise StateDecodeError(f"placed word '{text}' has {len(positions)} positions")
    return WordEntry(text=text, positions=tuple(positions))


def _decode_max_words(value: Any) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_MAX_WORDS
    if math.isnan(number) or math.isinf(number):
        return DEFAULT_MAX_WORDS
    return max(1, math.floor(number))
