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

"""Tests for stateless path helpers."""

from __future__ import annotations

from io import StringIO
from pathlib import Path, PurePosixPath

import pytest
from hypothesis import given, settings, strategies as st

from hostfiles import (
    FILESYSTEM_INVALID_CHARACTERS,
    find_file_recursively_up,
    has_invalid_chars_for_filesystem,
    print_paths,
)


class TestInvalidCharacters:
    """Test has_invalid_chars_for_filesystem."""

    def test_character_set(self) -> None:
        assert set(FILESYSTEM_INVALID_CHARACTERS) == set('\\/:*?"<>|')

    @pytest.mark.parametrize("char", list('\\/:*?"<>|'))
    def test_each_reserved_character_is_rejected(self, char: str) -> None:
        assert has_invalid_chars_for_filesystem(f"name{char}part") is True

    def test_plain_names_are_accepted(self) -> None:
        assert has_invalid_chars_for_filesystem("abcXYZ0123") is False
        assert has_invalid_chars_for_filesystem("report-2024_v1.final.txt") is False

    def test_empty_string_is_accepted(self) -> None:
        assert has_invalid_chars_for_filesystem("") is False

    @given(st.text(alphabet=st.characters(categories=["L", "N"])))
    @settings(max_examples=200)
    def test_alphanumeric_text_never_rejected(self, name: str) -> None:
        assert has_invalid_chars_for_filesystem(name) is False

    @given(
        prefix=st.text(max_size=20),
        char=st.sampled_from(list('\\/:*?"<>|')),
        suffix=st.text(max_size=20),
    )
    @settings(max_examples=200)
    def test_reserved_character_anywhere_is_rejected(
        self, prefix: str, char: str, suffix: str
    ) -> None:
        assert has_invalid_chars_for_filesystem(prefix + char + suffix) is True


class TestFindFileRecursivelyUp:
    """Test find_file_recursively_up against a fake existence check."""

    def test_returns_starting_dir_when_it_matches(self) -> None:
        present = {Path("/repo/src/pkg/setup.cfg")}

        found = find_file_recursively_up(
            "/repo/src/pkg", "setup.cfg", exists=present.__contains__
        )

        assert found == Path("/repo/src/pkg")

    def test_returns_ancestor_two_levels_up(self) -> None:
        present = {Path("/repo/marker")}

        found = find_file_recursively_up(
            Path("/repo/src/pkg"), "marker", exists=present.__contains__
        )

        assert found == Path("/repo")

    def test_checks_every_level_up_to_root(self) -> None:
        checked: list[Path] = []

        def check(path: Path) -> bool:
            checked.append(path)
            return False

        found = find_file_recursively_up("/a/b", "marker", exists=check)

        assert found is None
        assert [PurePosixPath(p.as_posix()) for p in checked] == [
            PurePosixPath("/a/b/marker"),
            PurePosixPath("/a/marker"),
            PurePosixPath("/marker"),
        ]

    def test_relative_path_stops_without_checking_dot(self) -> None:
        checked: list[Path] = []

        def check(path: Path) -> bool:
            checked.append(path)
            return False

        assert find_file_recursively_up("a/b", "marker", exists=check) is None
        assert checked == [Path("a/b/marker"), Path("a/marker")]

    def test_dot_itself_is_checked(self) -> None:
        present = {Path("marker")}

        found = find_file_recursively_up(".", "marker", exists=present.__contains__)

        assert found == Path(".")

    def test_empty_start_checks_nothing(self) -> None:
        checked: list[Path] = []

        def check(path: Path) -> bool:
            checked.append(path)
            return True

        assert find_file_recursively_up("", "marker", exists=check) is None
        assert checked == []

    def test_real_tree(self, tmp_path: Path) -> None:
        start = tmp_path / "one" / "two"
        start.mkdir(parents=True)
        (tmp_path / "project.toml").touch()

        assert find_file_recursively_up(start, "project.toml") == tmp_path

    def test_directory_named_like_target_counts(self, tmp_path: Path) -> None:
        start = tmp_path / "one"
        (start / ".git").mkdir(parents=True)

        assert find_file_recursively_up(start, ".git") == start


class TestPrintPaths:
    """Test print_paths output layout."""

    def test_layout(self) -> None:
        out = StringIO()

        print_paths([Path("a/b.txt"), "c"], file=out)

        assert out.getvalue() == "\n    a/b.txt\n    c\n\n"

    def test_empty_sequence_prints_blank_lines(self) -> None:
        out = StringIO()

        print_paths([], file=out)

        assert out.getvalue() == "\n\n"

    def test_defaults_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_paths([Path("x")])

        assert capsys.readouterr().out == "\n    x\n\n"
