# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Host filesystem backend.

This module provides the production ``Filesystem`` implementation. Every
method is a direct, synchronous call into ``os``/``shutil``; nothing is cached
and no path is rewritten or sandboxed.

Example usage::

    from hostfiles import ErrorCode, get_real_filesystem

    fs = get_real_filesystem()
    fs.write_contents("out/report.txt", "hello")
    assert fs.read_contents("out/report.txt").value == "hello"

    ec = ErrorCode()
    if not fs.remove("stale.lock", ec) and ec:
        print(ec.message)
"""

from __future__ import annotations

import errno
import functools
import os
import shutil
import stat
import sys
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from . import _paths
from ._checks import LineInfo, check_exit, exit_fail
from ._types import (
    CopyOptions,
    ErrorCode,
    Expected,
    FileStatus,
    FileType,
    StrPath,
)
from .logging import StructuredLogger, get_logger

__all__ = ["RealFilesystem", "get_real_filesystem"]

logger: StructuredLogger = get_logger(
    __name__, context={"component": "host_filesystem"}
)

# Text is decoded and encoded with surrogateescape so undecodable bytes
# survive a read_contents/write_contents round trip unchanged.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"

_EXISTING_POLICIES = (
    CopyOptions.SKIP_EXISTING
    | CopyOptions.OVERWRITE_EXISTING
    | CopyOptions.UPDATE_EXISTING
)


def _file_type(mode: int) -> FileType:
    if stat.S_ISREG(mode):
        return FileType.REGULAR
    if stat.S_ISDIR(mode):
        return FileType.DIRECTORY
    if stat.S_ISLNK(mode):
        return FileType.SYMLINK
    if stat.S_ISBLK(mode):
        return FileType.BLOCK
    if stat.S_ISCHR(mode):
        return FileType.CHARACTER
    if stat.S_ISFIFO(mode):
        return FileType.FIFO
    if stat.S_ISSOCK(mode):
        return FileType.SOCKET
    return FileType.UNKNOWN


def _is_real_directory(path: Path) -> bool:
    return not path.is_symlink() and path.is_dir()


# ---------------------------------------------------------------------------
# RealFilesystem Implementation
# ---------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class RealFilesystem:
    """Filesystem backed directly by the operating system.

    The instance holds no mutable state, so one instance can be shared by
    every consumer and every thread. Concurrent operations on the same path
    are coordinated only by whatever atomicity the OS gives each syscall.

    Attributes:
        max_file_size: Largest file, in bytes, that ``read_contents`` and
            ``read_bytes`` will load. Larger files yield ``EFBIG``.
    """

    max_file_size: int = sys.maxsize

    # --- Fallible reads ---

    def read_contents(self, path: StrPath) -> Expected[str]:
        """Read an entire file as text."""
        result = self.read_bytes(path)
        if not result.ok:
            return Expected(error=result.error)
        return Expected(value=(result.value or b"").decode(_ENCODING, _ERRORS))

    def read_bytes(self, path: StrPath) -> Expected[bytes]:
        """Read an entire file as raw bytes."""
        try:
            handle = open(path, "rb")  # noqa: SIM115
        except OSError as err:
            logger.debug(
                "Cannot open file for reading.",
                event="read_open_failed",
                context={"path": os.fspath(path), "errno": err.errno},
            )
            return Expected(error=errno.ENOENT)

        with handle:
            try:
                length = os.fstat(handle.fileno()).st_size
                if length > self.max_file_size:
                    logger.debug(
                        "File exceeds the configured size limit.",
                        event="read_too_large",
                        context={"path": os.fspath(path), "size": length},
                    )
                    return Expected(error=errno.EFBIG)
                data = handle.read()
            except OSError as err:
                return Expected(error=err.errno or errno.EIO)

        return Expected(value=data)

    def read_lines(self, path: StrPath) -> Expected[list[str]]:
        """Read a file as ``\\n``-separated lines."""
        try:
            handle = open(path, "rb")  # noqa: SIM115
        except OSError as err:
            logger.debug(
                "Cannot open file for reading.",
                event="read_open_failed",
                context={"path": os.fspath(path), "errno": err.errno},
            )
            return Expected(error=errno.ENOENT)

        lines: list[str] = []
        with handle:
            try:
                for raw in handle:
                    lines.append(raw.removesuffix(b"\n").decode(_ENCODING, _ERRORS))
            except OSError as err:
                return Expected(error=err.errno or errno.EIO)

        return Expected(value=lines)

    # --- Writes ---

    def write_lines(self, path: StrPath, lines: Sequence[str]) -> None:
        """Create or truncate ``path`` and write one line per entry."""
        # Encode everything before the open truncates the file.
        payload = b"".join(line.encode(_ENCODING, _ERRORS) + b"\n" for line in lines)
        with open(path, "wb") as handle:
            _ = handle.write(payload)

    def write_contents(self, path: StrPath, data: str | bytes) -> None:
        """Write ``data`` to ``path`` or stop the process."""
        line_info = LineInfo.here()
        payload = data.encode(_ENCODING, _ERRORS) if isinstance(data, str) else data

        try:
            with open(path, "wb") as handle:
                count = handle.write(payload)
        except OSError as err:
            exit_fail(line_info, f"Failed to write {os.fspath(path)}: {err}")

        check_exit(
            count == len(payload),
            line_info,
            f"Short write to {os.fspath(path)}: {count} of {len(payload)} bytes",
        )

    # --- Enumeration ---

    def find_file_recursively_up(
        self, starting_dir: StrPath, filename: str
    ) -> Path | None:
        """Search ``starting_dir`` and its ancestors for ``filename``."""
        return _paths.find_file_recursively_up(
            starting_dir, filename, exists=self.exists
        )

    def get_files_recursive(self, directory: StrPath) -> list[Path]:
        """List every entry below ``directory`` without following symlinks."""
        return list(self._walk(Path(directory)))

    def get_files_non_recursive(self, directory: StrPath) -> list[Path]:
        """List the immediate children of ``directory``."""
        base = Path(directory)
        with os.scandir(base) as entries:
            return [base / entry.name for entry in entries]

    def _walk(self, directory: Path) -> Iterator[Path]:
        pending = [directory]
        while pending:
            current = pending.pop()
            with os.scandir(current) as entries:
                children = [
                    (current / entry.name, entry.is_dir(follow_symlinks=False))
                    for entry in entries
                ]
            for child, _ in children:
                yield child
            pending.extend(child for child, is_dir in reversed(children) if is_dir)

    # --- Tree mutation ---

    def rename(self, old_path: StrPath, new_path: StrPath) -> None:
        """Move ``old_path`` to ``new_path``."""
        os.replace(old_path, new_path)

    def remove(self, path: StrPath, ec: ErrorCode | None = None) -> bool:
        """Remove a file, symlink or empty directory."""
        if ec is not None:
            ec.clear()

        target = Path(path)
        try:
            if _is_real_directory(target):
                target.rmdir()
            else:
                target.unlink()
        except OSError as err:
            if ec is None:
                raise
            ec.assign_from(err)
            logger.debug(
                "Remove failed.",
                event="remove_failed",
                context={"path": os.fspath(path), "errno": ec.value},
            )
            return False
        return True

    def remove_all(self, path: StrPath, ec: ErrorCode) -> int:
        """Remove ``path`` recursively and count what was removed."""
        ec.clear()
        removed = 0
        # Directories are pushed twice: once to expand, once to rmdir when empty.
        pending: list[tuple[Path, bool]] = (
            [(Path(path), False)] if os.path.lexists(path) else []
        )

        try:
            while pending:
                entry, expanded = pending.pop()
                if expanded:
                    entry.rmdir()
                elif _is_real_directory(entry):
                    pending.append((entry, True))
                    pending.extend((child, False) for child in entry.iterdir())
                    continue
                else:
                    entry.unlink()
                removed += 1
        except OSError as err:
            ec.assign_from(err)
            logger.debug(
                "Recursive remove stopped early.",
                event="remove_all_failed",
                context={
                    "path": os.fspath(path),
                    "errno": ec.value,
                    "removed": removed,
                },
            )
        return removed

    def create_directory(self, path: StrPath, ec: ErrorCode) -> bool:
        """Create a single directory; an existing directory is not an error."""
        ec.clear()
        try:
            os.mkdir(path)
        except FileExistsError as err:
            if not os.path.isdir(path):
                ec.assign_from(err)
            return False
        except OSError as err:
            ec.assign_from(err)
            logger.debug(
                "Directory creation failed.",
                event="create_directory_failed",
                context={"path": os.fspath(path), "errno": ec.value},
            )
            return False
        return True

    def copy(
        self,
        old_path: StrPath,
        new_path: StrPath,
        options: CopyOptions = CopyOptions.NONE,
    ) -> None:
        """Copy a file, symlink or directory according to ``options``."""
        self._copy(Path(old_path), Path(new_path), options, nested=False)

    def _copy(
        self, source: Path, target: Path, options: CopyOptions, *, nested: bool
    ) -> None:
        if source.is_symlink():
            if options & CopyOptions.SKIP_SYMLINKS:
                return
            if options & CopyOptions.COPY_SYMLINKS:
                os.symlink(os.readlink(source), target)
                return

        source_stat = source.stat()

        if stat.S_ISREG(source_stat.st_mode):
            if options & CopyOptions.DIRECTORIES_ONLY:
                return
            if target.is_dir():
                target = target / source.name
            ec = ErrorCode()
            _ = self.copy_file(source, target, options, ec)
            if ec:
                raise OSError(ec.value, ec.message, str(source), None, str(target))
            return

        if not stat.S_ISDIR(source_stat.st_mode):
            raise OSError(errno.ENOTSUP, os.strerror(errno.ENOTSUP), str(source))

        if target.exists() and not target.is_dir():
            raise OSError(errno.EEXIST, os.strerror(errno.EEXIST), str(target))

        if nested and not options & CopyOptions.RECURSIVE:
            return

        target.mkdir(exist_ok=True)
        for entry in self.get_files_non_recursive(source):
            self._copy(entry, target / entry.name, options, nested=True)

    def copy_file(
        self,
        old_path: StrPath,
        new_path: StrPath,
        options: CopyOptions,
        ec: ErrorCode,
    ) -> bool:
        """Copy one regular file, honoring the existing-file policy."""
        ec.clear()
        try:
            source_stat = os.stat(old_path)
            if not stat.S_ISREG(source_stat.st_mode):
                ec.assign(errno.EINVAL)
                return False

            if os.path.exists(new_path):
                target_stat = os.stat(new_path)
                if not stat.S_ISREG(target_stat.st_mode) or os.path.samestat(
                    source_stat, target_stat
                ):
                    ec.assign(errno.EEXIST)
                    return False
                if not options & _EXISTING_POLICIES:
                    ec.assign(errno.EEXIST)
                    return False
                if options & CopyOptions.SKIP_EXISTING:
                    return False
                if (
                    not options & CopyOptions.OVERWRITE_EXISTING
                    and source_stat.st_mtime <= target_stat.st_mtime
                ):
                    return False

            _ = shutil.copyfile(old_path, new_path)
            shutil.copymode(old_path, new_path)
        except OSError as err:
            ec.assign_from(err)
            logger.debug(
                "File copy failed.",
                event="copy_file_failed",
                context={
                    "source": os.fspath(old_path),
                    "target": os.fspath(new_path),
                    "errno": ec.value,
                },
            )
            return False
        return True

    # --- Advisory queries ---

    def exists(self, path: StrPath) -> bool:
        """Return True if ``path`` exists."""
        return os.path.exists(path)

    def is_directory(self, path: StrPath) -> bool:
        """Return True if ``path`` is a directory."""
        return os.path.isdir(path)

    def is_regular_file(self, path: StrPath) -> bool:
        """Return True if ``path`` is a regular file."""
        return os.path.isfile(path)

    def is_empty(self, path: StrPath) -> bool:
        """Return True for an empty directory or a zero-length regular file."""
        try:
            st = os.stat(path)
            if stat.S_ISDIR(st.st_mode):
                with os.scandir(path) as entries:
                    return next(entries, None) is None
            return stat.S_ISREG(st.st_mode) and st.st_size == 0
        except (OSError, ValueError):
            return False

    def status(self, path: StrPath, ec: ErrorCode) -> FileStatus:
        """Return the kind of ``path``, following symlinks."""
        return self._status(path, ec, follow_symlinks=True)

    def symlink_status(self, path: StrPath, ec: ErrorCode) -> FileStatus:
        """Return the kind of ``path`` itself."""
        return self._status(path, ec, follow_symlinks=False)

    @staticmethod
    def _status(path: StrPath, ec: ErrorCode, *, follow_symlinks: bool) -> FileStatus:
        ec.clear()
        try:
            st = os.stat(path, follow_symlinks=follow_symlinks)
        except (FileNotFoundError, NotADirectoryError):
            return FileStatus(FileType.NOT_FOUND)
        except OSError as err:
            ec.assign_from(err)
            return FileStatus(FileType.NONE)
        return FileStatus(_file_type(st.st_mode), stat.S_IMODE(st.st_mode))


@functools.cache
def get_real_filesystem() -> RealFilesystem:
    """Return the process-wide ``RealFilesystem``.

    Built on first use and reused afterwards. Prefer passing the instance to
    consumers explicitly rather than calling this from deep inside them.
    """
    return RealFilesystem()
