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

"""Stateless path helpers.

Functions:
    find_file_recursively_up: Locate the nearest ancestor holding a file
    has_invalid_chars_for_filesystem: Portability check for a path segment
    print_paths: Render a list of paths for a human
"""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Final, TextIO

from ._types import StrPath

#: Characters reserved on Windows. Applied on every host so names stay portable.
FILESYSTEM_INVALID_CHARACTERS: Final[str] = '\\/:*?"<>|'

_INVALID_CHARACTERS_RE: Final[re.Pattern[str]] = re.compile(
    f"[{re.escape(FILESYSTEM_INVALID_CHARACTERS)}]"
)


def find_file_recursively_up(
    starting_dir: StrPath,
    filename: str,
    *,
    exists: Callable[[Path], bool] | None = None,
) -> Path | None:
    """Return the nearest directory at or above ``starting_dir`` holding ``filename``.

    ``starting_dir`` is tested first, then each parent in turn up to the
    filesystem root. Relative paths are not resolved, and the implicit ``.``
    parent of a relative path is never probed. An empty ``starting_dir`` matches
    nothing and probes nothing.

    Args:
        starting_dir: Directory where the search begins.
        filename: Name of the file to look for.
        exists: Probe used for each candidate. Defaults to ``os.path.exists``.

    Returns:
        The first matching directory, or ``None`` when no ancestor matches.

    Examples:
        >>> find_file_recursively_up("/nonexistent/a/b", "missing.marker") is None
        True
    """
    probe = exists if exists is not None else os.path.exists
    if not os.fspath(starting_dir):
        return None
    start = Path(starting_dir)
    candidates = [start, *start.parents]
    if not start.is_absolute():
        candidates = [c for c in candidates if c != Path()] or [start]

    for directory in candidates:
        if probe(directory / filename):
            return directory
    return None


def has_invalid_chars_for_filesystem(name: str) -> bool:
    """Return ``True`` if ``name`` contains any of ``\\ / : * ? " < > |``.

    Examples:
        >>> has_invalid_chars_for_filesystem("report.txt")
        False
        >>> has_invalid_chars_for_filesystem("a:b")
        True
    """
    return _INVALID_CHARACTERS_RE.search(name) is not None


def print_paths(paths: Iterable[StrPath], *, file: TextIO | None = None) -> None:
    """Print ``paths`` one per line, indented, between blank lines."""
    out = file if file is not None else sys.stdout
    print(file=out)
    for path in paths:
        print(f"    {Path(path).as_posix()}", file=out)
    print(file=out)


__all__ = [
    "FILESYSTEM_INVALID_CHARACTERS",
    "find_file_recursively_up",
    "has_invalid_chars_for_filesystem",
    "print_paths",
]
