# core/history_utils.py
from __future__ import annotations
import json
import os
from pathlib import Path
from typing import List, Protocol

from loguru import logger

HISTORY_KEY = "pwd_history_v1"
HISTORY_LIMIT = 10


class HistoryStorage(Protocol):
    def get(self) -> List[str]: ...
    def set(self, entries: List[str]) -> None: ...


# =========================
# Storage backends
# =========================
class MemoryStorage:
    def __init__(self, entries: List[str] | None = None) -> None:
        self._entries: List[str] = list(entries or [])

    def get(self) -> List[str]:
        return list(self._entries)

    def set(self, entries: List[str]) -> None:
        self._entries = list(entries)


class JsonFileStorage:
    """
    History kept as a JSON object on disk: {key: [pwd, ...]}.
    Other keys in the file are preserved on write.
    Missing/corrupt file reads as an empty history.
    """

    def __init__(self, path: str | os.PathLike, key: str = HISTORY_KEY) -> None:
        self.path = Path(path).expanduser()
        self.key = key

    def _read_doc(self) -> dict:
        if not self.path.is_file():
            return {}
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Cannot read history file {}: {}", self.path, e)
            return {}
        if not isinstance(doc, dict):
            logger.warning("History file {} is not a JSON object, ignoring", self.path)
            return {}
        return doc

    def get(self) -> List[str]:
        raw = self._read_doc().get(self.key, [])
        if not isinstance(raw, list):
            logger.warning("History key {!r} is not a list, ignoring", self.key)
            return []
        return [x for x in raw if isinstance(x, str)]

    def set(self, entries: List[str]) -> None:
        doc = self._read_doc()
        doc[self.key] = list(entries)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # owner-only: the file holds plaintext passwords
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        if hasattr(os, "fchmod"):
            os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps(doc))


# =========================
# History
# =========================
class PasswordHistory:
    """Most-recent-first list of passwords, no duplicates, capped at `limit`."""

    def __init__(self, storage: HistoryStorage, limit: int = HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.storage = storage
        self.limit = limit

    def entries(self) -> List[str]:
        return self.storage.get()[: self.limit]

    def push(self, password: str) -> List[str]:
        if not password:
            return self.entries()
        items = [x for x in self.storage.get() if x != password]
        items.insert(0, password)
        items = items[: self.limit]
        self.storage.set(items)
        logger.debug("History updated: {} entries", len(items))
        return items

    def clear(self) -> None:
        self.storage.set([])
        logger.info("History cleared")

    def __len__(self) -> int:
        return len(self.entries())
