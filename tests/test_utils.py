"""Unit tests for selection reading and project-root discovery."""

import io
import os
import tempfile
from pathlib import Path

import pytest

from codeguide.utils import (
    find_project_root,
    parse_line_range,
    read_selection,
    slice_lines,
)


def _create_test_structure(files: list[str], dirs: list[str] | None = None) -> Path:
    """Create a temporary directory with the given file and directory paths."""
    tmpdir = Path(tempfile.mkdtemp(prefix="codeguide_utils_"))
    for d in dirs or []:
        (tmpdir / d).mkdir(parents=True, exist_ok=True)
    for path in files:
        full_path = tmpdir / path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text("line 1\nline 2\nline 3\n")
    return tmpdir


class TestParseLineRange:
    """Tests for --lines parsing."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2:5", (2, 5)),
            ("3", (3, 3)),
            ("4:", (4, None)),
            (":7", (None, 7)),
            (" 1 : 2 ", (1, 2)),
        ],
    )
    def test_valid(self, value, expected) -> None:
        assert parse_line_range(value) == expected

    @pytest.mark.parametrize("value", ["0:3", "5:2", "a:b", "x", "-1"])
    def test_invalid(self, value) -> None:
        with pytest.raises(ValueError):
            parse_line_range(value)


class TestSliceLines:
    """Tests for 1-based inclusive slicing."""

    def test_middle(self) -> None:
        assert slice_lines("a\nb\nc\nd\n", 2, 3) == "b\nc\n"

    def test_open_ended(self) -> None:
        assert slice_lines("a\nb\nc\n", 2, None) == "b\nc\n"
        assert slice_lines("a\nb\nc\n", None, 1) == "a\n"

    def test_past_end_is_empty(self) -> None:
        assert slice_lines("a\n", 5, 9) == ""


class TestReadSelection:
    """Tests for reading the selection from files and stdin."""

    def test_whole_file(self) -> None:
        root = _create_test_structure(["src/app.py"])
        selection = read_selection(os.fspath(root / "src" / "app.py"))
        assert selection.text == "line 1\nline 2\nline 3\n"
        assert selection.origin == os.fspath((root / "src" / "app.py").resolve())

    def test_line_range(self) -> None:
        root = _create_test_structure(["app.py"])
        selection = read_selection(os.fspath(root / "app.py"), line_range="2")
        assert selection.text == "line 2\n"

    def test_stdin(self) -> None:
        selection = read_selection("-", stdin=io.StringIO("x = 1\ny = 2\n"), line_range=":1")
        assert selection.text == "x = 1\n"
        assert selection.origin == "<stdin>"

    def test_stdin_with_undecodable_bytes(self) -> None:
        """Invalid UTF-8 on stdin is replaced, as for files."""
        stream = io.TextIOWrapper(io.BytesIO(b"x = \xff\n"), encoding="utf-8")
        selection = read_selection("-", stdin=stream)
        assert selection.text == "x = \ufffd\n"

    def test_missing_file(self) -> None:
        with pytest.raises(FileNotFoundError):
            read_selection("/definitely/not/here.py")

    def test_directory(self) -> None:
        root = _create_test_structure([], dirs=["pkg"])
        with pytest.raises(IsADirectoryError):
            read_selection(os.fspath(root / "pkg"))


class TestFindProjectRoot:
    """Tests for walk-up project discovery."""

    def test_finds_codeguide_dir(self) -> None:
        root = _create_test_structure(["src/deep/mod.py"], dirs=[".codeguide"])
        assert find_project_root(root / "src" / "deep" / "mod.py") == root.resolve()

    def test_finds_git_dir(self) -> None:
        root = _create_test_structure(["lib/x.py"], dirs=[".git"])
        assert find_project_root(root / "lib") == root.resolve()

    def test_nearest_marker_wins(self) -> None:
        root = _create_test_structure(["sub/a.py"], dirs=[".git", "sub/.codeguide"])
        assert find_project_root(root / "sub" / "a.py") == (root / "sub").resolve()

    def test_marker_file_is_ignored(self) -> None:
        """Only marker *directories* count."""
        root = _create_test_structure(["inner/.git"], dirs=[".codeguide"])
        assert find_project_root(root / "inner") == root.resolve()
