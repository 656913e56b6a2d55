"""duck: a tiny local version-control engine."""

from .commits import CommitChain, CommitRecord, Head
from .diff import DiffRun, FileDiff, FileStatus, LineTag, diff_commit, diff_lines
from .errors import (
    AlreadyInitialized,
    CommitNotFound,
    CorruptHistory,
    CorruptIndex,
    DuckError,
    FileNotFound,
    NotFound,
    ObjectNotFound,
)
from .hashing import hash_object
from .history import walk
from .index import StagingEntry, StagingIndex
from .kv.base import KVStore
from .objects import ObjectStore
from .repository import Repository

__all__ = [
    "AlreadyInitialized",
    "CommitChain",
    "CommitNotFound",
    "CommitRecord",
    "CorruptHistory",
    "CorruptIndex",
    "DiffRun",
    "DuckError",
    "FileDiff",
    "FileNotFound",
    "FileStatus",
    "Head",
    "KVStore",
    "LineTag",
    "NotFound",
    "ObjectNotFound",
    "ObjectStore",
    "Repository",
    "StagingEntry",
    "StagingIndex",
    "diff_commit",
    "diff_lines",
    "hash_object",
    "walk",
]
