"""Abstract KV store interface."""

import os
from abc import ABC, abstractmethod


def check_key(key: str) -> str:
    """Return ``key`` if it can name an object, else raise ValueError.

    Keys double as file names in the on-disk layout, so every backend
    accepts the same set: non-empty strings without path separators.
    """
    if (
        not isinstance(key, str)
        or not key
        or key in (".", "..")
        or "/" in key
        or os.sep in key
    ):
        raise ValueError(f"Invalid key: {key!r}")
    return key


class KVStore(ABC):
    """Key-value store operating on bytes only.

    Serialization is handled at higher layers (e.g., ``CommitRecord``).
    """

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Get bytes value for key, or None if not found."""

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Set bytes value for key."""

    @abstractmethod
    def __contains__(self, key: str) -> bool:
        """Check if key exists in store. Invalid keys are never present."""
