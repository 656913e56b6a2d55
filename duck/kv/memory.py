"""In-memory KV store."""

from .base import KVStore, check_key


class Memory(KVStore):
    """A memory-backed KV store.

    Accepts exactly the keys ``Files`` does, so code tested against it
    behaves the same on disk.
    """

    def __init__(self) -> None:
        self.memory: dict[str, bytes] = {}

    def get(self, key: str) -> bytes | None:
        return self.memory.get(check_key(key))

    def set(self, key: str, value: bytes) -> None:
        if not isinstance(value, bytes):
            raise TypeError(f"Expected bytes, got {type(value).__name__}")
        self.memory[check_key(key)] = value

    def __contains__(self, key: str) -> bool:
        try:
            return check_key(key) in self.memory
        except ValueError:
            return False
