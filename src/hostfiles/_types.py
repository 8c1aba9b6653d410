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

"""Value types shared by the ``Filesystem`` protocol and its implementations.

Types are organized into:

- **Result types**: ``Expected`` - returned by fallible read operations
- **Error slots**: ``ErrorCode`` - caller-owned out-parameter for soft-fail
  operations
- **Status types**: ``FileType``, ``FileStatus`` - what ``status()`` reports
- **Options**: ``CopyOptions`` - flags accepted by ``copy()`` and ``copy_file()``

Aliases:

- ``StrPath``: anything accepted where a path is expected
"""

from __future__ import annotations

import errno
import os
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import TYPE_CHECKING, cast

from .errors import ExpectedValueError

if TYPE_CHECKING:
    from ._checks import LineInfo

type StrPath = str | os.PathLike[str]


# ---------------------------------------------------------------------------
# Error slots
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class ErrorCode:
    """Mutable slot holding a native ``errno`` value.

    Soft-fail operations take an ``ErrorCode`` argument and deposit the OS
    error there instead of raising. A value of ``0`` means success; the slot
    is falsy while clear, so call sites read naturally::

        ec = ErrorCode()
        if not fs.create_directory(path, ec) and ec:
            logger.warning("mkdir failed: %s", ec.message)

    Operations clear the slot on entry, so one instance can be reused across
    calls.
    """

    value: int = 0

    def __bool__(self) -> bool:
        return self.value != 0

    @property
    def message(self) -> str:
        """Human readable description from ``os.strerror``."""
        return os.strerror(self.value) if self.value else "success"

    @property
    def name(self) -> str:
        """Symbolic name such as ``ENOENT``, or the number if unknown."""
        return errno.errorcode.get(self.value, str(self.value))

    def clear(self) -> None:
        self.value = 0

    def assign(self, value: int) -> None:
        self.value = value

    def assign_from(self, err: OSError) -> None:
        """Record ``err.errno``, falling back to ``EIO`` when it has none."""
        self.value = err.errno if err.errno else errno.EIO


# ---------------------------------------------------------------------------
# Fallible results
# ---------------------------------------------------------------------------


@dataclass(slots=True, frozen=True, init=False)
class Expected[T]:
    """Either a successful payload or the ``errno`` explaining its absence.

    Exactly one side is populated. There is no partial-success state: a read
    that fails midway reports the error and discards what was read. Reading
    the side that is not populated raises ``ExpectedValueError``, so check
    ``ok`` (or the truthiness of the result) first.

    Example::

        result = fs.read_contents(path)
        if result.ok:
            parse(result.value)
        elif result.error == errno.ENOENT:
            use_defaults()
    """

    _value: T | None
    _error: int

    def __init__(self, value: T | None = None, error: int = 0) -> None:
        if (value is None) == (error == 0):
            msg = "Expected requires exactly one of a value or a non-zero error."
            raise ExpectedValueError(msg)
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_error", error)

    @property
    def value(self) -> T:
        """The payload. Raises ``ExpectedValueError`` on an error result."""
        if self._error:
            msg = f"Expected holds error {self._error}, not a value."
            raise ExpectedValueError(msg)
        return cast(T, self._value)

    @property
    def error(self) -> int:
        """Native ``errno`` value. Raises ``ExpectedValueError`` on a value result."""
        if not self._error:
            msg = "Expected holds a value, not an error."
            raise ExpectedValueError(msg)
        return self._error

    @property
    def ok(self) -> bool:
        return self._error == 0

    def __bool__(self) -> bool:
        return self.ok

    @property
    def error_code(self) -> ErrorCode:
        """The error as an ``ErrorCode``; clear when the result holds a value."""
        return ErrorCode(self._error)

    def value_or_exit(self, line_info: LineInfo) -> T:
        """Return the payload or abort through ``check_exit``."""
        from ._checks import check_exit

        check_exit(self.ok, line_info, os.strerror(self._error) if self._error else "")
        return cast(T, self._value)


# ---------------------------------------------------------------------------
# File status
# ---------------------------------------------------------------------------


class FileType(Enum):
    """Kind of filesystem object reported by ``Filesystem.status()``.

    ``NONE`` means the status could not be determined (the accompanying
    ``ErrorCode`` says why); ``NOT_FOUND`` means the path does not exist,
    which is not an error.
    """

    NONE = "none"
    NOT_FOUND = "not_found"
    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    BLOCK = "block"
    CHARACTER = "character"
    FIFO = "fifo"
    SOCKET = "socket"
    UNKNOWN = "unknown"


@dataclass(slots=True, frozen=True)
class FileStatus:
    """Kind and permission bits of a path; not full metadata.

    Attributes:
        type: What the path refers to.
        permissions: POSIX permission bits (``st_mode & 0o7777``), or 0 when
            the path does not exist or could not be inspected.
    """

    type: FileType
    permissions: int = 0

    @property
    def exists(self) -> bool:
        return self.type not in {FileType.NONE, FileType.NOT_FOUND}

    @property
    def is_regular_file(self) -> bool:
        return self.type is FileType.REGULAR

    @property
    def is_directory(self) -> bool:
        return self.type is FileType.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.type is FileType.SYMLINK

    @property
    def is_other(self) -> bool:
        return self.exists and self.type not in {
            FileType.REGULAR,
            FileType.DIRECTORY,
            FileType.SYMLINK,
        }


# ---------------------------------------------------------------------------
# Copy options
# ---------------------------------------------------------------------------


class CopyOptions(Flag):
    """Flags controlling ``copy()`` and ``copy_file()``.

    At most one of the existing-file policies (``SKIP_EXISTING``,
    ``OVERWRITE_EXISTING``, ``UPDATE_EXISTING``) applies; without any of them
    copying onto an existing file fails with ``EEXIST``.
    """

    NONE = 0
    SKIP_EXISTING = auto()
    OVERWRITE_EXISTING = auto()
    UPDATE_EXISTING = auto()
    RECURSIVE = auto()
    COPY_SYMLINKS = auto()
    SKIP_SYMLINKS = auto()
    DIRECTORIES_ONLY = auto()


__all__ = [
    "CopyOptions",
    "ErrorCode",
    "Expected",
    "FileStatus",
    "FileType",
    "StrPath",
]
