"""Data models supporting the word search puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .constants import DEFAULT_LANGUAGE, DEFAULT_LETTERS, DEFAULT_TITLE, Direction


@dataclass(frozen=True)
class Position:
    """A 1-based grid coordinate."""

    row: int
    col: int

    def to_jsonable(self) -> dict:
        return {"row": self.row, "col": self.col}


@dataclass(frozen=True)
class WordEntry:
    """A word placed on the grid along a straight run of cells."""

    text: str
    positions: Tuple[Position, ...]

    @property
    def length(self) -> int:
        return len(self.positions)

    @property
    def first(self) -> Position:
        return self.positions[0]

    @property
    def last(self) -> Position:
        return self.positions[-1]

    @property
    def direction(self) -> Optional[Direction]:
        if len(self.positions) < 2:
            return None
        step = (
            self.positions[1].col - self.positions[0].col,
            self.positions[1].row - self.positions[0].row,
        )
        for direction in Direction:
            if (direction.dx, direction.dy) == step:
                return direction
        return None

    def has_endpoints(self, a: Position, b: Position) -> bool:
        return (self.first == a and self.last == b) or (self.first == b and self.last == a)

    def contains(self, position: Position) -> bool:
        return position in self.positions

    def to_jsonable(self) -> dict:
        return {
            "word": self.text,
            "positions": [pos.to_jsonable() for pos in self.positions],
        }


@dataclass(frozen=True)
class WordStatus:
    word: str
    found: bool


@dataclass(frozen=True)
class WordListMetadata:
    """Display metadata accompanying a word list."""

    language: str = DEFAULT_LANGUAGE
    letters: str = DEFAULT_LETTERS
    title: str = DEFAULT_TITLE

    def to_jsonable(self) -> dict:
        return {"lang": self.language, "letters": self.letters, "title": self.title}

    @classmethod
    def from_jsonable(cls, payload: Optional[dict]) -> "WordListMetadata":
        payload = payload or {}
        return cls(
            language=str(payload.get("lang") or DEFAULT_LANGUAGE),
            letters=str(payload.get("letters") or DEFAULT_LETTERS),
            title=str(payload.get("title") or DEFAULT_TITLE),
        )


@dataclass
class WordList:
    """A loaded word list: metadata plus normalized uppercase words."""

    metadata: WordListMetadata = field(default_factory=WordListMetadata)
    words: list[str] = field(default_factory=list)
