"""Helpers for alphabet expansion and word normalization."""

from __future__ import annotations

import re

from ..core.constants import DEFAULT_LETTERS

STRIKE_CHAR = "̶"

RANGE_RE = re.compile(r"(.)-(.)")


def safe_upper(text: str | None) -> str:
    if not text:
        return ""
    return text.upper()


def expand_alphabet(letters: str | None) -> str:
    """Return the allowed letters described by ``letters``, ranges expanded.

    ``"A-Z"`` expands to the 26 Latin capitals; explicit letter strings such
    as ``"ABCÄÖÜ"`` are kept as-is. Duplicates are dropped in order.
    """

    letters = safe_upper(letters).strip()
    if not letters:
        return DEFAULT_LETTERS

    def _expand(match: re.Match) -> str:
        start, end = ord(match.group(1)), ord(match.group(2))
        if start > end:
            return match.group(0)
        return "".join(chr(code) for code in range(start, end + 1))

    expanded = RANGE_RE.sub(_expand, letters)
    seen = []
    for char in expanded:
        if char.isspace() or char in seen:
            continue
        seen.append(char)
    return "".join(seen) or DEFAULT_LETTERS


def normalize_word(text: str | None, alphabet: str) -> str:
    """Upper-case ``text`` and strip every character outside ``alphabet``."""

    allowed = set(alphabet)
    return "".join(char for char in safe_upper(text) if char in allowed)


def strikethrough(word: str) -> str:
    return "".join(char + STRIKE_CHAR for char in word)


__all__ = ["expand_alphabet", "normalize_word", "safe_upper", "strikethrough"]
