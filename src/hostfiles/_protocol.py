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

"""Filesystem capability protocol.

This module provides the `Filesystem` protocol: the single seam through which
callers read, write, enumerate and mutate host files. Code that depends on the
protocol rather than on ``os``/``shutil`` directly can be exercised against a
substitute implementation in tests.

Two failure conventions coexist and each operation belongs to exactly one:

- **Fail-fast**: the operation raises ``OSError`` (or, for
  ``write_contents``, ``FatalError``). Used where failure should stop the
  caller's logic.
- **Soft-fail**: the operation takes a caller-owned ``ErrorCode`` and deposits
  the native ``errno`` there. Used where failure is an ordinary branch.

Fallible reads sit alongside both and return an ``Expected`` result.

Core implementation:

- `hostfiles.RealFilesystem`: direct pass-through to the operating system
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from ._types import CopyOptions, ErrorCode, Expected, FileStatus, StrPath


@runtime_checkable
class Filesystem(Protocol):
    """Capability exposing every filesystem operation the application needs.

    Every call is synchronous and goes straight to the backing store; nothing
    is cached between calls. Paths may be ``str`` or any ``os.PathLike``.

    Example::

        def load_manifest(fs: Filesystem, root: Path) -> list[str]:
            result = fs.read_lines(root / "MANIFEST")
            return result.value if result.ok else []
    """

    # --- Fallible reads ---

    def read_contents(self, path: StrPath) -> Expected[str]:
        """Read an entire file as UTF-8 text.

        Bytes that are not valid UTF-8 are not an error: they come back as
        lone surrogate escapes (``\\udc80``-``\\udcff``), and writing the text
        back with ``write_contents`` restores the original bytes.

        Returns:
            The contents, or an error: ``ENOENT`` when the file cannot be
            opened, ``EFBIG`` when it is larger than the implementation can
            hold, otherwise the ``errno`` of the failed read. Never raises for
            I/O failures.
        """
        ...

    def read_bytes(self, path: StrPath) -> Expected[bytes]:
        """Read an entire file as raw bytes, with the same errors as ``read_contents``."""
        ...

    def read_lines(self, path: StrPath) -> Expected[list[str]]:
        """Read a file as lines with their ``\\n`` terminators removed.

        A trailing terminator does not produce an empty final line.

        Returns:
            The lines, or ``ENOENT`` when the file cannot be opened.
        """
        ...

    # --- Writes ---

    def write_lines(self, path: StrPath, lines: Sequence[str]) -> None:
        """Create or truncate ``path`` and write each line followed by ``\\n``.

        Raises:
            OSError: The file could not be opened or written.
            UnicodeEncodeError: A line cannot be encoded. The file is left
                untouched.
        """
        ...

    def write_contents(self, path: StrPath, data: str | bytes) -> None:
        """Create or truncate ``path`` and write ``data`` in binary mode.

        This operation must succeed. If the file cannot be opened or fewer
        bytes than requested are written, the process is stopped.

        Raises:
            FatalError: The open or the write failed.
        """
        ...

    # --- Enumeration ---

    def find_file_recursively_up(
        self, starting_dir: StrPath, filename: str
    ) -> Path | None:
        """Return the nearest directory at or above ``starting_dir`` holding ``filename``.

        Returns:
            The matching directory, or ``None`` when no ancestor matches.
        """
        ...

    def get_files_recursive(self, directory: StrPath) -> list[Path]:
        """List every entry below ``directory`` at any depth, in OS order.

        Raises:
            OSError: ``directory`` cannot be enumerated.
        """
        ...

    def get_files_non_recursive(self, directory: StrPath) -> list[Path]:
        """List the immediate children of ``directory``, in OS order.

        Raises:
            OSError: ``directory`` cannot be enumerated.
        """
        ...

    # --- Tree mutation ---

    def rename(self, old_path: StrPath, new_path: StrPath) -> None:
        """Move ``old_path`` to ``new_path``, replacing a destination file.

        Raises:
            OSError: The OS rejected the rename.
        """
        ...

    def remove(self, path: StrPath, ec: ErrorCode | None = None) -> bool:
        """Remove a file, symlink or empty directory.

        Without ``ec`` this is fail-fast; with ``ec`` it is soft-fail.

        Returns:
            True if something was removed.

        Raises:
            FileNotFoundError: ``path`` does not exist and ``ec`` is None.
            OSError: Any other failure when ``ec`` is None.
        """
        ...

    def remove_all(self, path: StrPath, ec: ErrorCode) -> int:
        """Remove ``path`` and everything below it.

        Returns:
            How many entries were removed; 0 when ``path`` did not exist.
        """
        ...

    def create_directory(self, path: StrPath, ec: ErrorCode) -> bool:
        """Create a single directory.

        Returns:
            True if a new directory was created, False if one already existed
            or creation failed (check ``ec``).
        """
        ...

    def copy(
        self,
        old_path: StrPath,
        new_path: StrPath,
        options: CopyOptions = CopyOptions.NONE,
    ) -> None:
        """Copy a file or directory.

        Raises:
            OSError: The copy failed.
        """
        ...

    def copy_file(
        self,
        old_path: StrPath,
        new_path: StrPath,
        options: CopyOptions,
        ec: ErrorCode,
    ) -> bool:
        """Copy a single regular file.

        Returns:
            True if the file was copied; False if it was skipped under the
            existing-file policy or the copy failed (check ``ec``).
        """
        ...

    # --- Advisory queries ---

    def exists(self, path: StrPath) -> bool:
        """Return True if ``path`` exists. Never raises."""
        ...

    def is_directory(self, path: StrPath) -> bool:
        """Return True if ``path`` is a directory. Never raises."""
        ...

    def is_regular_file(self, path: StrPath) -> bool:
        """Return True if ``path`` is a regular file. Never raises."""
        ...

    def is_empty(self, path: StrPath) -> bool:
        """Return True for an empty directory or a zero-length file. Never raises."""
        ...

    def status(self, path: StrPath, ec: ErrorCode) -> FileStatus:
        """Return the kind of ``path``, following symlinks."""
        ...

    def symlink_status(self, path: StrPath, ec: ErrorCode) -> FileStatus:
        """Return the kind of ``path`` without following a final symlink."""
        ...


__all__ = ["Filesystem"]
