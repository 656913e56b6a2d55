"""Repository: the on-disk layout and the user-facing operations."""

import logging
import os
from typing import Iterator

from .commits import CommitChain, CommitRecord, Head, utc_timestamp
from .diff import FileDiff, diff_commit
from .errors import AlreadyInitialized, FileNotFound
from .history import walk
from .index import StagingEntry, StagingIndex
from .kv.files import Files
from .objects import ObjectStore

logger = logging.getLogger(__name__)

REPO_DIR = ".duck"
HEAD_FILE = "HEAD"
INDEX_FILE = "index"
OBJECTS_DIR = "objects"


class Repository:
    """A duck repository rooted at ``root``.

    Layout::

        <root>/.duck/HEAD           latest commit hash, or empty
        <root>/.duck/index          JSON array of staged entries
        <root>/.duck/objects/<hash> blobs and commit records

    Every operation loads the state it needs from disk and writes it back;
    nothing is cached between calls.
    """

    def __init__(self, root: str = ".", *, clock=utc_timestamp) -> None:
        self.root = root
        self.path = os.path.join(root, REPO_DIR)
        self.objects = ObjectStore(Files(os.path.join(self.path, OBJECTS_DIR)))
        self.head = Head(os.path.join(self.path, HEAD_FILE))
        self.index = StagingIndex(os.path.join(self.path, INDEX_FILE))
        self.chain = CommitChain(self.objects, self.head, self.index, clock=clock)

    def __repr__(self) -> str:
        return f"Repository({self.root!r})"

    @property
    def is_initialized(self) -> bool:
        return os.path.isfile(self.head.path) and os.path.isfile(self.index.path)

    def init(self) -> None:
        """Create the repository layout, keeping anything already there.

        Raises:
            AlreadyInitialized: If HEAD and the index both existed.
        """
        os.makedirs(os.path.join(self.path, OBJECTS_DIR), exist_ok=True)
        created = []
        for path, initial in ((self.head.path, b""), (self.index.path, b"[]")):
            try:
                with open(path, "xb") as f:
                    f.write(initial)
            except FileExistsError:
                continue
            created.append(path)
        if not created:
            raise AlreadyInitialized(self.path)
        logger.debug("initialized %s (created %s)", self.path, ", ".join(created))

    def add(self, path: str) -> StagingEntry:
        """Snapshot the file at ``path`` and stage it.

        Raises:
            FileNotFound: If ``path`` is not a readable regular file.
        """
        try:
            with open(path, "rb") as f:
                content = f.read()
        except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
            raise FileNotFound(path) from e
        entry = StagingEntry(
            path=path.replace(os.sep, "/"), hash=self.objects.write(content)
        )
        self.index.append(entry)
        return entry

    def staged(self) -> list[StagingEntry]:
        """Entries waiting for the next commit."""
        return self.index.load()

    def commit(self, message: str) -> str:
        """Commit everything staged; returns the new commit hash."""
        return self.chain.commit(message)

    def log(self) -> Iterator[tuple[str, CommitRecord]]:
        """Commits from HEAD back to the first one."""
        return walk(self.objects, self.head.read())

    def show(self, commit_hash: str) -> list[FileDiff]:
        """Per-file diff of ``commit_hash`` against its parent."""
        return diff_commit(self.objects, commit_hash)
