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

"""Tests for result, error-slot and status value types."""

from __future__ import annotations

import errno
import os

import pytest

from hostfiles import (
    CopyOptions,
    ErrorCode,
    Expected,
    ExpectedValueError,
    FatalError,
    FileStatus,
    FileType,
    HostFilesError,
    LineInfo,
)


class TestExpected:
    def test_value_side(self) -> None:
        result = Expected(value="payload")

        assert result.ok
        assert bool(result) is True
        assert result.value == "payload"
        assert not result.error_code

    def test_falsy_payloads_are_still_values(self) -> None:
        assert Expected(value="").ok
        assert Expected(value=[]).ok
        assert Expected(value=b"").ok

    def test_error_side(self) -> None:
        result: Expected[str] = Expected(error=errno.ENOENT)

        assert not result.ok
        assert bool(result) is False
        assert result.error == errno.ENOENT
        assert result.error_code.value == errno.ENOENT

    def test_reading_value_of_error_result_raises(self) -> None:
        result: Expected[str] = Expected(error=errno.ENOENT)

        with pytest.raises(ExpectedValueError, match="holds error"):
            _ = result.value

    def test_reading_error_of_value_result_raises(self) -> None:
        result = Expected(value="payload")

        with pytest.raises(ExpectedValueError, match="holds a value"):
            _ = result.error

    def test_library_error_catches_wrong_side_access(self) -> None:
        result: Expected[bytes] = Expected(error=errno.EFBIG)

        with pytest.raises(HostFilesError):
            _ = result.value

    def test_both_sides_rejected(self) -> None:
        with pytest.raises(ExpectedValueError):
            _ = Expected(value="x", error=errno.EIO)

    def test_neither_side_rejected(self) -> None:
        with pytest.raises(ValueError, match="exactly one"):
            _ = Expected()

    def test_is_immutable(self) -> None:
        result = Expected(value=1)

        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]

    def test_value_or_exit_returns_value(self) -> None:
        assert Expected(value=[1, 2]).value_or_exit(LineInfo.here()) == [1, 2]

    def test_value_or_exit_aborts_on_error(self) -> None:
        result: Expected[str] = Expected(error=errno.EFBIG)

        with pytest.raises(FatalError, match=os.strerror(errno.EFBIG)):
            _ = result.value_or_exit(LineInfo.here())


class TestErrorCode:
    def test_default_is_clear(self) -> None:
        ec = ErrorCode()

        assert not ec
        assert ec.value == 0
        assert ec.message == "success"

    def test_assign_and_clear(self) -> None:
        ec = ErrorCode()
        ec.assign(errno.ENOENT)

        assert ec
        assert ec.name == "ENOENT"
        assert ec.message == os.strerror(errno.ENOENT)

        ec.clear()
        assert not ec

    def test_assign_from_os_error(self) -> None:
        ec = ErrorCode()

        ec.assign_from(FileExistsError(errno.EEXIST, "exists"))

        assert ec.value == errno.EEXIST

    def test_assign_from_error_without_errno_uses_eio(self) -> None:
        ec = ErrorCode()

        ec.assign_from(OSError("no errno attached"))

        assert ec.value == errno.EIO

    def test_unknown_code_name_is_numeric(self) -> None:
        assert ErrorCode(987654).name == "987654"


class TestFileStatus:
    @pytest.mark.parametrize(
        ("file_type", "exists", "is_other"),
        [
            (FileType.NONE, False, False),
            (FileType.NOT_FOUND, False, False),
            (FileType.REGULAR, True, False),
            (FileType.DIRECTORY, True, False),
            (FileType.SYMLINK, True, False),
            (FileType.FIFO, True, True),
            (FileType.SOCKET, True, True),
            (FileType.UNKNOWN, True, True),
        ],
    )
    def test_predicates(
        self, file_type: FileType, exists: bool, is_other: bool
    ) -> None:
        status = FileStatus(file_type)

        assert status.exists is exists
        assert status.is_other is is_other
        assert status.is_regular_file is (file_type is FileType.REGULAR)
        assert status.is_directory is (file_type is FileType.DIRECTORY)

    def test_permissions_default_to_zero(self) -> None:
        assert FileStatus(FileType.NOT_FOUND).permissions == 0


class TestCopyOptions:
    def test_flags_combine(self) -> None:
        options = CopyOptions.RECURSIVE | CopyOptions.OVERWRITE_EXISTING

        assert options & CopyOptions.RECURSIVE
        assert not options & CopyOptions.SKIP_EXISTING

    def test_none_is_empty(self) -> None:
        assert not CopyOptions.NONE


class TestErrorHierarchy:
    def test_expected_value_error_is_value_error(self) -> None:
        assert issubclass(ExpectedValueError, ValueError)
        assert issubclass(ExpectedValueError, HostFilesError)

    def test_fatal_error_exits_with_status_one(self) -> None:
        error = FatalError("boom")

        assert isinstance(error, SystemExit)
        assert isinstance(error, HostFilesError)
        assert error.code == 1
        assert str(error) == "boom"
