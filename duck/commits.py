"""Commit records and the chain of commits rooted at HEAD."""

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterable

from .index import StagingEntry, StagingIndex
from .objects import ObjectStore

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class CommitRecord:
    """An immutable snapshot of staged entries linked to its parent."""

    timestamp: str
    message: str
    files: tuple[StagingEntry, ...] = field(default_factory=tuple)
    parent: str | None = None

    def to_bytes(self) -> bytes:
        """Serialize to compact JSON with a fixed key order.

        Equal records always serialize to equal bytes.
        """
        data = {
            "timeStamp": self.timestamp,
            "message": self.message,
            "files": [e.to_dict() for e in self.files],
            "parent": self.parent,
        }
        return json.dumps(data, separators=(",", ":")).encode()

    @classmethod
    def from_bytes(cls, raw: bytes) -> "CommitRecord":
        """Parse a serialized commit.

        Raises:
            ValueError: If ``raw`` is not a commit record.
        """
        data = json.loads(raw)
        if not isinstance(data, dict) or not all(
            k in data for k in ("timeStamp", "message", "files")
        ):
            raise ValueError("not a commit record")
        parent = data.get("parent")
        if not isinstance(data["timeStamp"], str) or not isinstance(
            data["message"], str
        ):
            raise ValueError("timeStamp and message must be strings")
        if parent is not None and not isinstance(parent, str):
            raise ValueError(f"parent must be a hash or null, got {parent!r}")
        if not isinstance(data["files"], list):
            raise ValueError("files must be a list")
        try:
            files = tuple(StagingEntry.from_dict(item) for item in data["files"])
        except (TypeError, KeyError) as e:
            raise ValueError(f"malformed file list: {e}") from e
        return cls(
            timestamp=data["timeStamp"],
            message=data["message"],
            files=files,
            parent=parent,
        )


class Head:
    """The HEAD file: empty, or the hash of the latest commit."""

    def __init__(self, path: str) -> None:
        self.path = path

    def __repr__(self) -> str:
        return f"Head({self.path!r})"

    def read(self) -> str | None:
        """Return the latest commit hash, or None before the first commit."""
        try:
            with open(self.path, encoding="utf-8") as f:
                value = f.read().strip()
        except FileNotFoundError:
            return None
        return value or None

    def write(self, commit_hash: str) -> None:
        """Point HEAD at ``commit_hash``."""
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(commit_hash)
        logger.debug("HEAD -> %s", commit_hash)


_UNSET = object()


class CommitChain:
    """Builds commits from the staging index and advances HEAD.

    The steps (store record, move HEAD, clear index) are not atomic: a
    failure part way leaves the earlier steps in place.
    """

    def __init__(
        self,
        objects: ObjectStore,
        head: Head,
        index: StagingIndex,
        *,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        self.objects = objects
        self.head = head
        self.index = index
        self._clock = clock

    def commit(
        self,
        message: str,
        entries: Iterable[StagingEntry] | None = None,
        parent=_UNSET,
    ) -> str:
        """Record a commit and make it the new HEAD.

        Args:
            message: Commit message.
            entries: Entries to record (default: the staging index,
                verbatim). An empty list makes a contentless commit.
            parent: Parent commit hash (default: current HEAD).

        Returns:
            The new commit hash.
        """
        if parent is _UNSET:
            parent = self.head.read()
        if entries is None:
            entries = self.index.load()
        record = CommitRecord(
            timestamp=self._clock(),
            message=message,
            files=tuple(entries),
            parent=parent,
        )
        commit_hash = self.objects.write(record.to_bytes())
        self.head.write(commit_hash)
        self.index.clear()
        logger.info("committed %s (%d files)", commit_hash, len(record.files))
        return commit_hash
