"""Line-level diffs of a commit's files against its parent."""

import difflib
import enum
from dataclasses import dataclass, field

from .commits import CommitRecord
from .errors import CommitNotFound, CorruptHistory, ObjectNotFound
from .history import load_commit
from .objects import ObjectStore


class LineTag(enum.Enum):
    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"


class FileStatus(enum.Enum):
    FIRST_COMMIT = "first_commit"  # the commit has no parent
    NEW_FILE = "new_file"  # path absent from the parent commit
    MODIFIED = "modified"  # compared against the parent's version


@dataclass(frozen=True)
class DiffRun:
    """A maximal block of consecutive lines sharing one tag."""

    tag: LineTag
    lines: tuple[str, ...]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class FileDiff:
    """The diff report for one file entry of a commit."""

    path: str
    status: FileStatus
    runs: tuple[DiffRun, ...] = field(default_factory=tuple)

    @property
    def added(self) -> int:
        return sum(len(r.lines) for r in self.runs if r.tag is LineTag.ADDED)

    @property
    def removed(self) -> int:
        return sum(len(r.lines) for r in self.runs if r.tag is LineTag.REMOVED)

    @property
    def changed(self) -> bool:
        return any(r.tag is not LineTag.UNCHANGED for r in self.runs)


def _split_lines(content: bytes) -> list[str]:
    """Split on ``\\n`` only, keeping each line's terminator.

    A final line without a newline stays distinct from the same line with
    one, and ``\\r`` or other control characters remain part of the text.
    """
    text = content.decode("utf-8", errors="replace")
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _strip_newline(lines: list[str]) -> list[str]:
    return [line[:-1] if line.endswith("\n") else line for line in lines]


def diff_lines(before: bytes, after: bytes) -> list[DiffRun]:
    """Align ``before`` and ``after`` line by line.

    Lines compare with their terminators, so a change of line ending or
    of the trailing newline shows up as a replaced line. Replaced blocks
    come out as a REMOVED run followed by an ADDED run.
    Adjacent runs with the same tag are merged.
    """
    a = _split_lines(before)
    b = _split_lines(after)
    matcher = difflib.SequenceMatcher(None, a, b, autojunk=False)

    runs: list[DiffRun] = []

    def emit(tag: LineTag, lines: list[str]) -> None:
        if not lines:
            return
        lines = _strip_newline(lines)
        if runs and runs[-1].tag is tag:
            runs[-1] = DiffRun(tag, runs[-1].lines + tuple(lines))
        else:
            runs.append(DiffRun(tag, tuple(lines)))

    for op, i1, i2, j1, j2 in matcher.get_opcodes():
        if op == "equal":
            emit(LineTag.UNCHANGED, a[i1:i2])
        else:
            # "replace", "delete" and "insert" all reduce to these two
            emit(LineTag.REMOVED, a[i1:i2])
            emit(LineTag.ADDED, b[j1:j2])
    return runs


def _fetch_blob(objects: ObjectStore, commit_hash: str, blob_hash: str) -> bytes:
    try:
        return objects.get(blob_hash)
    except ObjectNotFound as e:
        raise CorruptHistory(commit_hash, blob_hash) from e


def _load_parent(objects: ObjectStore, commit_hash: str, parent: str) -> CommitRecord:
    try:
        return load_commit(objects, parent)
    except ObjectNotFound as e:
        raise CorruptHistory(commit_hash, parent) from e
    except ValueError as e:
        raise CorruptHistory(commit_hash, parent, reason="non-commit") from e


def diff_commit(objects: ObjectStore, commit_hash: str) -> list[FileDiff]:
    """Diff each file of a commit against the same path in its parent.

    Files are reported in the commit's stored order. When a path appears
    more than once in the parent, the first entry is used.

    Raises:
        CommitNotFound: If ``commit_hash`` does not name a commit.
        CorruptHistory: If a referenced blob or parent is missing.
    """
    try:
        record = load_commit(objects, commit_hash)
    except (ObjectNotFound, ValueError) as e:
        raise CommitNotFound(commit_hash) from e

    parent: CommitRecord | None = None
    if record.parent is not None:
        parent = _load_parent(objects, commit_hash, record.parent)

    reports: list[FileDiff] = []
    for entry in record.files:
        after = _fetch_blob(objects, commit_hash, entry.hash)
        if parent is None:
            reports.append(FileDiff(entry.path, FileStatus.FIRST_COMMIT))
            continue
        previous = next((e for e in parent.files if e.path == entry.path), None)
        if previous is None:
            reports.append(FileDiff(entry.path, FileStatus.NEW_FILE))
            continue
        before = _fetch_blob(objects, record.parent, previous.hash)
        reports.append(
            FileDiff(entry.path, FileStatus.MODIFIED, tuple(diff_lines(before, after)))
        )
    return reports
