"""File-per-key KV store."""

import logging
import os

from .base import KVStore, check_key

logger = logging.getLogger(__name__)


class Files(KVStore):
    """KV store keeping each value in its own file, named by its key.

    The directory (and any missing parents) is created on first write.
    Keys must be plain file names.
    """

    def __init__(self, directory: str) -> None:
        self.directory = directory

    def _path(self, key: str) -> str:
        return os.path.join(self.directory, check_key(key))

    def get(self, key: str) -> bytes | None:
        try:
            with open(self._path(key), "rb") as f:
                return f.read()
        except FileNotFoundError:
            return None

    def set(self, key: str, value: bytes) -> None:
        if not isinstance(value, bytes):
            raise TypeError(f"Expected bytes, got {type(value).__name__}")
        path = self._path(key)
        os.makedirs(self.directory, exist_ok=True)
        with open(path, "wb") as f:
            f.write(value)
        logger.debug("wrote %d bytes to %s", len(value), path)

    def __contains__(self, key: str) -> bool:
        try:
            return os.path.isfile(self._path(key))
        except ValueError:
            return False
