"""Custom exception hierarchy for the word search puzzle."""


class WordSearchError(Exception):
    """Base exception for puzzle failures."""


class WordListLoadError(WordSearchError):
    """Raised when a word list cannot be read or fetched."""


class InvalidWordError(WordSearchError):
    """Raised when a word is marked found that is not placed on the board."""


class StateDecodeError(WordSearchError):
    """Raised when a persisted board record is malformed."""
