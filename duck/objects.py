"""Content-addressed object store."""

import logging

from .errors import ObjectNotFound
from .hashing import hash_object
from .kv.base import KVStore
from .kv.memory import Memory

logger = logging.getLogger(__name__)


class ObjectStore:
    """Append-only blob storage keyed by content hash.

    Holds both file snapshots and serialized commit records. Objects are
    never rewritten with different content and never deleted.
    """

    def __init__(self, kv: KVStore | None = None) -> None:
        if kv is None:
            kv = Memory()
        self.kv = kv

    def __repr__(self) -> str:
        return f"ObjectStore({self.kv!r})"

    def __contains__(self, object_hash: str) -> bool:
        return object_hash in self.kv

    def put(self, object_hash: str, content: bytes) -> None:
        """Store ``content`` under ``object_hash``.

        Writing the same content twice is harmless.
        """
        if not isinstance(content, bytes):
            raise TypeError(f"Expected bytes, got {type(content).__name__}")
        self.kv.set(object_hash, content)
        logger.debug("stored object %s (%d bytes)", object_hash, len(content))

    def write(self, content: bytes) -> str:
        """Hash ``content``, store it, and return the hash."""
        object_hash = hash_object(content)
        self.put(object_hash, content)
        return object_hash

    def get(self, object_hash: str) -> bytes:
        """Fetch the object stored under ``object_hash``.

        Raises:
            ObjectNotFound: If nothing is stored at that address.
        """
        try:
            content = self.kv.get(object_hash)
        except ValueError:
            # an invalid address holds nothing
            content = None
        if content is None:
            raise ObjectNotFound(object_hash)
        return content
