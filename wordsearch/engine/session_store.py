"""Persistent session document store.

The whole session (settings plus the serialized board) is written as one
JSON document after every state-changing event. Writes replace the file;
the last writer wins.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_STATE_PATH = Path("local_db/wordsearch_state.json")
STATE_VERSION = 1


class SessionStore:
    """Save and load the session document."""

    def __init__(self, path: Path | str = DEFAULT_STATE_PATH) -> None:
        self.path = Path(path)
        self._cached: Optional[Dict[str, Any]] = None

    @property
    def cached(self) -> Optional[Dict[str, Any]]:
        """Last payload saved or loaded through this store."""

        return self._cached

    def save(self, payload: Dict[str, Any]) -> bool:
        doc = {"version": STATE_VERSION, **payload}
        try:
            encoded = json.dumps(doc, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as exc:
            LOGGER.error("Failed to encode session state: %s", exc)
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(encoded, encoding="utf-8")
        except OSError as exc:
            LOGGER.error("Cannot write session state %s: %s", self.path, exc)
            return False
        self._cached = doc
        LOGGER.debug("Session state saved: %s", self.path)
        return True

    def load(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None
        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.error("Cannot read session state %s: %s", self.path, exc)
            return None
        if not content.strip():
            return None
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            LOGGER.error("Failed to decode session state %s: %s", self.path, exc)
            return None
        if not isinstance(data, dict):
            LOGGER.error("Session state %s is not an object", self.path)
            return None
        self._cached = data
        return data
