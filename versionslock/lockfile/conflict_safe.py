"""
Text codec for ``versions.lock``.

One line per module, sorted by group then name:

    com.google.guava:guava:18.0 (2 constraints: 3bd0e4f2)

The trailing fingerprint summarizes who depends on the module and with which
constraints. Two branches that change the dependents of the same module both
rewrite that module's line, so merging them produces a line conflict in
version control instead of a lock file that silently disagrees with the graph.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Union

from versionslock.config import FINGERPRINT_LENGTH, LOCKFILE_BANNER
from versionslock.error_messages import format_error
from versionslock.errors import ErrorCode, FileSystemError, LockFileFormatError
from versionslock.lockstate import FullLockState, Line, LockState, to_lock_state

LINE_PATTERN = re.compile(
    r"^(?P<group>[^\s:]+):(?P<name>[^\s:]+):(?P<version>[^\s:]+)"
    r" \((?P<num>\d+) constraints: (?P<fingerprint>[0-9a-f]{%d})\)$" % FINGERPRINT_LENGTH
)


def serialize_lock_state(lock_state: LockState) -> str:
    """Render a LockState as lock file text, banner first."""
    body = "".join(f"{line}\n" for line in lock_state.values())
    return LOCKFILE_BANNER + body


def parse_lock_state(text: str, source: str = "<string>") -> LockState:
    """Parse lock file text.

    Blank lines and ``#`` comments are ignored.

    Raises:
        LockFileFormatError: Listing every malformed line and every module locked twice.
    """
    lines = {}
    messages = []
    problems = []
    duplicates_only = True
    for line_number, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue

        match = LINE_PATTERN.match(stripped)
        if match is None:
            messages.append(format_error('LOCKFILE_MALFORMED_LINE', line_number=line_number, path=source, line=raw))
            problems.append((line_number, raw))
            duplicates_only = False
            continue

        line = Line(
            group=match.group("group"),
            name=match.group("name"),
            version=match.group("version"),
            num_dependents=int(match.group("num")),
            fingerprint=match.group("fingerprint"),
        )
        if line.module in lines:
            messages.append(format_error('LOCKFILE_DUPLICATE_MODULE', module=line.module, path=source,
                                         line_number=line_number))
            problems.append((line_number, raw))
            continue
        lines[line.module] = line

    if problems:
        raise LockFileFormatError(
            "\n".join(messages),
            path=source,
            problems=problems,
            code=ErrorCode.LOCKFILE_DUPLICATE_MODULE if duplicates_only else ErrorCode.LOCKFILE_MALFORMED_LINE,
        )
    return LockState(lines)


class ConflictSafeLockFile:
    """Reads and writes the lock state at ``path``."""

    def __init__(self, path: Union[str, Path], logger=None):
        self.path = Path(path)
        self.logger = logger

    def exists(self) -> bool:
        return self.path.is_file()

    def read_locks(self) -> LockState:
        """Read the persisted lock state.

        Raises:
            FileSystemError: If the lock file does not exist.
            LockFileFormatError: If the lock file is malformed.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise FileSystemError(
                f"Lock file not found: {self.path}",
                path=str(self.path),
                operation="read",
                code=ErrorCode.FS_PATH_NOT_FOUND,
            ) from e

        lock_state = parse_lock_state(text, source=str(self.path))
        if self.logger:
            self.logger.verbose(f"Read {len(lock_state)} locked modules from {self.path}")
        return lock_state

    def write_locks(self, state: Union[FullLockState, LockState]) -> Path:
        """Replace the lock file with ``state``.

        The new content is written to a temporary file next to the lock file
        and moved into place, so readers see either the old or the new file.
        """
        lock_state = to_lock_state(state) if isinstance(state, FullLockState) else state
        content = serialize_lock_state(lock_state)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise FileSystemError(
                f"Failed to write lock file: {e}",
                path=str(self.path),
                operation="write",
                code=ErrorCode.FS_WRITE_FAILED,
            ) from e

        if self.logger:
            self.logger.verbose(f"Wrote {len(lock_state)} locked modules to {self.path}")
        return self.path
