"""Walking the commit chain backward from a starting commit."""

from typing import Iterator

from .commits import CommitRecord
from .errors import CorruptHistory, ObjectNotFound
from .objects import ObjectStore


def load_commit(objects: ObjectStore, commit_hash: str) -> CommitRecord:
    """Fetch and parse the commit stored under ``commit_hash``.

    Raises:
        ObjectNotFound: If no object has that hash.
        ValueError: If the object is not a commit record.
    """
    return CommitRecord.from_bytes(objects.get(commit_hash))


def walk(
    objects: ObjectStore, start: str | None
) -> Iterator[tuple[str, CommitRecord]]:
    """Yield ``(hash, record)`` pairs from ``start`` to the root commit.

    Follows ``parent`` links only; timestamps are not consulted. Yields
    nothing when ``start`` is None.

    Raises:
        CorruptHistory: If a linked hash has no object, or the object is
            not a commit.
    """
    child: str | None = None
    current = start
    while current is not None:
        try:
            record = load_commit(objects, current)
        except ObjectNotFound as e:
            raise CorruptHistory(child, current) from e
        except ValueError as e:
            raise CorruptHistory(child, current, reason="non-commit") from e
        yield current, record
        child, current = current, record.parent
