"""Shared constants and enumerations for the word search puzzle."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple


GRID_SIZE_CHOICES: Tuple[int, ...] = (8, 10, 12, 14, 16)
DEFAULT_GRID_SIZE = 12

DEFAULT_MAX_WORDS = 12
MIN_MAX_WORDS = 4
MAX_MAX_WORDS = 24

MIN_WORD_LENGTH = 3
MAX_PLACEMENT_TRIES = 100

DEFAULT_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DEFAULT_LANGUAGE = "en"
DEFAULT_TITLE = "Default list"
DEFAULT_WORDLIST = "word_lists/english_basic.txt"


class Direction(str, Enum):
    """Compass directions a word may run along."""

    E = "E"
    W = "W"
    S = "S"
    N = "N"
    SE = "SE"
    NW = "NW"
    NE = "NE"
    SW = "SW"

    @property
    def dx(self) -> int:
        return _DIRECTION_STEPS[self][0]

    @property
    def dy(self) -> int:
        return _DIRECTION_STEPS[self][1]


# (dx, dy): dx walks columns, dy walks rows.
_DIRECTION_STEPS = {
    Direction.E: (1, 0),
    Direction.W: (-1, 0),
    Direction.S: (0, 1),
    Direction.N: (0, -1),
    Direction.SE: (1, 1),
    Direction.NW: (-1, -1),
    Direction.NE: (1, -1),
    Direction.SW: (-1, 1),
}


class GridScale(str, Enum):
    """Display scale presets. Persisted with the session, never used by the core."""

    COMPACT = "compact"
    NORMAL = "normal"
    LARGE = "large"

    @property
    def width_fraction(self) -> float:
        return _SCALE_FRACTIONS[self][0]

    @property
    def height_fraction(self) -> float:
        return _SCALE_FRACTIONS[self][1]


_SCALE_FRACTIONS = {
    GridScale.COMPACT: (0.8, 0.5),
    GridScale.NORMAL: (0.9, 0.6),
    GridScale.LARGE: (0.98, 0.7),
}

DEFAULT_GRID_SCALE = GridScale.NORMAL


@dataclass(frozen=True)
class Bounds:
    """Square, 1-based grid bounds."""

    size: int

    def contains(self, row: int, col: int) -> bool:
        return 1 <= row <= self.size and 1 <= col <= self.size


def _floor_int(value: Any) -> int | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return math.floor(number)


def normalize_grid_size(value: Any) -> int:
    """Return ``value`` if it is a supported grid size, else the default."""

    size = _floor_int(value)
    if size in GRID_SIZE_CHOICES:
        return size
    return DEFAULT_GRID_SIZE


def clamp_max_words(value: Any) -> int:
    """Clamp a requested word count to the range the settings allow."""

    count = _floor_int(value)
    if count is None:
        count = DEFAULT_MAX_WORDS
    return max(MIN_MAX_WORDS, min(MAX_MAX_WORDS, count))


def normalize_grid_scale(value: Any) -> GridScale:
    try:
        return GridScale(value)
    except ValueError:
        return DEFAULT_GRID_SCALE
