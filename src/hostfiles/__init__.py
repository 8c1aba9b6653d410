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

"""Single substitutable boundary over host filesystem access.

This package provides the `Filesystem` protocol and its one production
implementation, `RealFilesystem`, so that all file access in an application
funnels through one interface that tests can replace.

Example usage::

    from hostfiles import Filesystem, get_real_filesystem

    def load_settings(fs: Filesystem, path: str) -> list[str]:
        result = fs.read_lines(path)
        return result.value if result.ok else []

    load_settings(get_real_filesystem(), "settings.txt")

Path helpers (``find_file_recursively_up``, ``has_invalid_chars_for_filesystem``
and ``print_paths``) need no filesystem instance.
"""

from __future__ import annotations

from ._checks import LineInfo, check_exit, exit_fail
from ._host import RealFilesystem, get_real_filesystem
from ._paths import (
    FILESYSTEM_INVALID_CHARACTERS,
    find_file_recursively_up,
    has_invalid_chars_for_filesystem,
    print_paths,
)
from ._protocol import Filesystem
from ._types import (
    CopyOptions,
    ErrorCode,
    Expected,
    FileStatus,
    FileType,
    StrPath,
)
from .errors import ExpectedValueError, FatalError, HostFilesError
from .logging import configure_logging, get_logger

__all__ = [
    "FILESYSTEM_INVALID_CHARACTERS",
    "CopyOptions",
    "ErrorCode",
    "Expected",
    "ExpectedValueError",
    "FatalError",
    "FileStatus",
    "FileType",
    "Filesystem",
    "HostFilesError",
    "LineInfo",
    "RealFilesystem",
    "StrPath",
    "check_exit",
    "configure_logging",
    "exit_fail",
    "find_file_recursively_up",
    "get_logger",
    "get_real_filesystem",
    "has_invalid_chars_for_filesystem",
    "print_paths",
]
