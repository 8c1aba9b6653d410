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

"""Runtime checks that stop the process with a location-tagged message."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Self

from .errors import FatalError
from .logging import StructuredLogger, get_logger

logger: StructuredLogger = get_logger(__name__, context={"component": "checks"})


@dataclass(slots=True, frozen=True)
class LineInfo:
    """Source location attached to a fatal check."""

    file: str
    line: int
    function: str

    @classmethod
    def here(cls, depth: int = 1) -> Self:
        """Capture the location of the caller ``depth`` frames up."""
        frame = sys._getframe(depth)  # noqa: SLF001
        return cls(
            file=frame.f_code.co_filename,
            line=frame.f_lineno,
            function=frame.f_code.co_name,
        )

    def __str__(self) -> str:
        return f"{Path(self.file).name}:{self.line} ({self.function})"


def exit_fail(line_info: LineInfo, message: str = "") -> NoReturn:
    """Log a critical ``fatal_check_failed`` event and raise ``FatalError``."""
    text = f"Error detected in {line_info}"
    if message:
        text = f"{text}: {message}"
    logger.critical(
        text,
        event="fatal_check_failed",
        context={
            "file": line_info.file,
            "line": line_info.line,
            "function": line_info.function,
        },
    )
    raise FatalError(text)


def check_exit(condition: bool, line_info: LineInfo, message: str = "") -> None:
    """Abort through :func:`exit_fail` unless ``condition`` holds."""
    if not condition:
        exit_fail(line_info, message)


__all__ = ["LineInfo", "check_exit", "exit_fail"]
