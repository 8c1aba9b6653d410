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

"""Base exception hierarchy for :mod:`hostfiles`."""

from __future__ import annotations


class HostFilesError(Exception):
    """Base class for all hostfiles exceptions.

    Operating system failures are not wrapped: raising operations let the
    standard ``OSError`` subclasses (``FileNotFoundError``,
    ``FileExistsError``, ...) propagate unchanged. This class only roots the
    errors that the library itself defines.

    Example:
        Catch any hostfiles-specific error::

            try:
                contents = fs.read_contents(path).value
            except HostFilesError as e:
                logger.error("Library error: %s", e)
    """


class ExpectedValueError(HostFilesError, ValueError):
    """Raised when an ``Expected`` is built or read inconsistently.

    Building a result with both a value and an error, or with neither, raises
    this exception. So does reading ``value`` from a result that carries an
    error, or ``error`` from a result that carries a value. Check ``ok`` (or
    the truthiness of the result) first.

    Example::

        result = fs.read_lines(path)
        if not result:
            return []
        return result.value
    """


class FatalError(HostFilesError, SystemExit):
    """Raised by ``check_exit`` when a must-succeed condition does not hold.

    Subclasses ``SystemExit`` so that an uncaught instance terminates the
    process with exit status 1, the same way a failed runtime check would.
    The message carries the source location captured in a ``LineInfo``.

    Warning:
        Only ``Filesystem.write_contents`` uses this path. A partially written
        output file is considered worse than stopping the process.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.code = 1

    def __str__(self) -> str:
        return self.message


__all__ = [
    "ExpectedValueError",
    "FatalError",
    "HostFilesError",
]
