"""Content hashing."""

import hashlib


def hash_object(content: bytes) -> str:
    """Return the SHA-1 hex digest of ``content``.

    Blobs and serialized commits go through this same function, so equal
    bytes always land at the same address.
    """
    if not isinstance(content, bytes):
        raise TypeError(f"Expected bytes, got {type(content).__name__}")
    return hashlib.sha1(content).hexdigest()
