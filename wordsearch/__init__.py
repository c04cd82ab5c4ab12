"""Word search puzzle generator and board model.

This package exposes the public API surface via:

- ``wordsearch.engine.placement.PlacementEngine``: places words on a letter grid.
- ``wordsearch.engine.board.Board``: one puzzle and the player's progress.
- ``wordsearch.engine.selection.SelectionController``: tap/hold selection.
- ``wordsearch.engine.session.WordSearchSession``: settings and persistence.
"""

from .engine.board import Board, BoardConfig
from .engine.placement import PlacementEngine, PlacementResult
from .engine.selection import SelectionController, SelectionOutcome
from .engine.session import WordSearchSession

__all__ = [
    "Board",
    "BoardConfig",
    "PlacementEngine",
    "PlacementResult",
    "SelectionController",
    "SelectionOutcome",
    "WordSearchSession",
]

__version__ = "0.1.0"
