"""Staging index: the pending entries for the next commit."""

import json
import logging
import os
from dataclasses import dataclass

from .errors import CorruptIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StagingEntry:
    """A file path paired with the hash of its staged content."""

    path: str
    hash: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "hash": self.hash}

    @classmethod
    def from_dict(cls, raw: dict) -> "StagingEntry":
        path, object_hash = raw["path"], raw["hash"]
        if not isinstance(path, str) or not isinstance(object_hash, str):
            raise TypeError(f"path and hash must be strings: {raw!r}")
        return cls(path=path, hash=object_hash)


def _to_bytes(obj) -> bytes:
    """Encode a JSON-safe Python object to bytes."""
    return json.dumps(obj, separators=(",", ":")).encode()


class StagingIndex:
    """An ordered list of ``StagingEntry`` persisted as a JSON array.

    Every operation reads and rewrites the whole file. Adding a path twice
    keeps both entries.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def __repr__(self) -> str:
        return f"StagingIndex({self.path!r})"

    def load(self) -> list[StagingEntry]:
        """Return the staged entries in insertion order."""
        try:
            with open(self.path, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            return []
        if not raw.strip():
            return []
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise TypeError(f"expected a list, got {type(items).__name__}")
            return [StagingEntry.from_dict(item) for item in items]
        except (ValueError, TypeError, KeyError) as e:
            raise CorruptIndex(f"Cannot parse staging index {self.path}: {e}") from e

    def append(self, entry: StagingEntry) -> None:
        """Add ``entry`` at the end of the index."""
        entries = self.load()
        entries.append(entry)
        self._save(entries)
        logger.debug("staged %s as %s", entry.path, entry.hash)

    def clear(self) -> None:
        """Empty the index."""
        self._save([])
        logger.debug("cleared staging index")

    def _save(self, entries: list[StagingEntry]) -> None:
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "wb") as f:
            f.write(_to_bytes([e.to_dict() for e in entries]))
