"""Word list loading.

A word list is a UTF-8 text file with one word per line. The first non-blank
line may be a metadata header such as::

    lang=de letters=ABCDEFGHIJKLMNOPQRSTUVWXYZÄÖÜ title=Tiere

Lists can also be fetched over HTTP(S). Loading never raises: any failure is
logged and degrades to the default metadata with an empty word list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional, Tuple

import requests

from ..core.constants import DEFAULT_TITLE, DEFAULT_WORDLIST
from ..core.exceptions import WordListLoadError
from ..core.models import WordList, WordListMetadata
from ..utils.logger import get_logger
from .normalization import safe_upper


LOGGER = get_logger(__name__)

HEADER_TOKEN_RE = re.compile(r"([\w]+)=([\w\-]+)")
HEADER_KEYS = {"lang": "language", "letters": "letters", "title": "title"}
HTTP_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True)
class WordListInfo:
    path: str
    title: str


def is_remote(identifier: str) -> bool:
    return identifier.startswith(("http://", "https://"))


def resolve_path(identifier: str, base_dir: Path | str | None = None) -> Path:
    path = Path(identifier)
    if path.is_absolute() or base_dir is None:
        return path
    return Path(base_dir) / path


def parse_word_list(text: str) -> WordList:
    """Parse word list text into metadata and uppercase words."""

    metadata = WordListMetadata()
    words: List[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if not words and "lang=" in line:
            metadata = _apply_header(metadata, line)
            continue
        words.append(safe_upper(line))
    return WordList(metadata=metadata, words=words)


def _apply_header(metadata: WordListMetadata, line: str) -> WordListMetadata:
    updates = {}
    for key, value in HEADER_TOKEN_RE.findall(line):
        field_name = HEADER_KEYS.get(key)
        if field_name:
            updates[field_name] = value
    return replace(metadata, **updates)


def _read_text(identifier: str, base_dir: Path | str | None) -> str:
    if is_remote(identifier):
        try:
            response = requests.get(identifier, timeout=HTTP_TIMEOUT_SECONDS)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise WordListLoadError(f"Cannot fetch word list {identifier}: {exc}") from exc
        response.encoding = response.encoding or "utf-8"
        return response.text

    path = resolve_path(identifier, base_dir)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise WordListLoadError(f"Cannot open word list {path}: {exc}") from exc


def read_word_list(
    identifier: Optional[str] = None,
    base_dir: Path | str | None = None,
) -> Tuple[WordListMetadata, List[str]]:
    """Return ``(metadata, words)`` for ``identifier``; never raises."""

    if identifier is not None and not isinstance(identifier, str):
        LOGGER.warning("Ignoring word list identifier %r; using %s", identifier, DEFAULT_WORDLIST)
        identifier = None
    identifier = identifier or DEFAULT_WORDLIST
    try:
        word_list = parse_word_list(_read_text(identifier, base_dir))
    except WordListLoadError as exc:
        LOGGER.warning("%s", exc)
        return WordListMetadata(), []
    LOGGER.debug(
        "Loaded word list '%s' (%d words, lang=%s)",
        word_list.metadata.title,
        len(word_list.words),
        word_list.metadata.language,
    )
    return word_list.metadata, word_list.words


def list_word_lists(directory: Path | str) -> List[WordListInfo]:
    """Return available ``*.txt`` word lists in ``directory`` sorted by title."""

    root = Path(directory)
    entries: List[WordListInfo] = []
    if root.is_dir():
        for path in root.iterdir():
            if path.name.startswith(".") or path.suffix != ".txt" or not path.is_file():
                continue
            metadata, _ = read_word_list(str(path))
            entries.append(WordListInfo(path=str(path), title=metadata.title or path.name))
    entries.sort(key=lambda entry: entry.title)
    if not entries:
        entries.append(WordListInfo(path=DEFAULT_WORDLIST, title=DEFAULT_TITLE))
    return entries
