# storage.py
from __future__ import annotations

from typing import Dict, Protocol
import json
import logging
import os

from .config import HIGH_SCORE_KEY

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    def load(self) -> int: ...
    def save(self, value: int) -> None: ...


class MemoryHighScoreStore:
    """Keeps the high score in process; used by tests and headless runs."""

    def __init__(self, value: int = 0):
        self.value = value
        self.writes = 0

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = value
        self.writes += 1


def _ensure_parent_dir(path: str) -> None:
    directory = os.path.dirname(path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


class JsonHighScoreStore:
    """
    Small JSON key-value file. Other keys in the file are preserved on write;
    the high score lives under `key`.
    """

    def __init__(self, path: str, key: str = HIGH_SCORE_KEY):
        self.path = path
        self.key = key

    def _read_all(self) -> Dict[str, object]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> int:
        raw = self._read_all().get(self.key, 0)
        try:
            return max(0, int(raw))
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed high score %r in %s", raw, self.path)
            return 0

    def save(self, value: int) -> None:
        data = self._read_all()
        data[self.key] = int(value)
        try:
            _ensure_parent_dir(self.path)
            tmp = self.path + ".tmp"
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, self.path)
        except OSError:
            logger.exception("Could not write high score to %s", self.path)
            raise
        logger.info("Saved high score %d to %s", value, self.path)
