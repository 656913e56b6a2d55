"""duck error types."""


class DuckError(Exception):
    """Base class for all duck errors."""


class AlreadyInitialized(DuckError):
    """Raised when ``init`` finds an existing repository.

    Informational: nothing was overwritten.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Already initialized duck repository in {path}")


class NotFound(DuckError, LookupError):
    """Raised when a file, object or commit does not exist."""


class ObjectNotFound(NotFound):
    """No object is stored under the given hash."""

    def __init__(self, object_hash: str) -> None:
        self.object_hash = object_hash
        super().__init__(f"Object not found: {object_hash}")


class CommitNotFound(NotFound):
    """The given hash does not name a commit."""

    def __init__(self, commit_hash: str) -> None:
        self.commit_hash = commit_hash
        super().__init__(f"Commit not found: {commit_hash}")


class FileNotFound(NotFound):
    """A file to stage could not be read."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")


class CorruptHistory(DuckError):
    """Raised when a commit references an object absent from the store.

    Attributes:
        commit_hash: The commit holding the dangling reference (None when
            HEAD itself points nowhere).
        missing: The hash that could not be resolved.
    """

    def __init__(self, commit_hash: str | None, missing: str, reason: str = "missing") -> None:
        self.commit_hash = commit_hash
        self.missing = missing
        where = f"commit {commit_hash}" if commit_hash else "HEAD"
        super().__init__(f"Corrupt history: {where} references {reason} object {missing}")


class CorruptIndex(DuckError):
    """Raised when the staging index file cannot be parsed."""
