"""codeguide utility helpers."""

import sys
from pathlib import Path
from typing import TextIO

from codeguide.config import PROJECT_ROOT_MARKERS
from codeguide.models import Selection

STDIN_MARKER: str = "-"


def validate_file(path: str) -> Path:
    """Resolve and validate that *path* points to an existing file.

    Args:
        path: Raw path string from the CLI.

    Returns:
        Resolved ``Path`` object.

    Raises:
        FileNotFoundError: If the path does not exist.
        IsADirectoryError: If the path is a directory.
    """
    resolved = Path(path).resolve()

    if not resolved.exists():
        raise FileNotFoundError(f"Path does not exist: {resolved}")

    if resolved.is_dir():
        raise IsADirectoryError(f"Path is a directory: {resolved}")

    return resolved


def parse_line_range(value: str) -> tuple[int | None, int | None]:
    """Parse a 1-based inclusive ``START:END`` range.

    Either bound may be omitted (``10:``, ``:20``). A single number selects
    one line.

    Raises:
        ValueError: If the range is malformed or empty.
    """
    text = value.strip()
    if ":" not in text:
        start = end = _parse_line_number(text)
        return start, end

    raw_start, raw_end = text.split(":", 1)
    start = _parse_line_number(raw_start) if raw_start.strip() else None
    end = _parse_line_number(raw_end) if raw_end.strip() else None

    if start is not None and end is not None and start > end:
        raise ValueError(f"Line range start {start} is after end {end}")

    return start, end


def _parse_line_number(raw: str) -> int:
    try:
        number = int(raw)
    except ValueError:
        raise ValueError(f"Invalid line number: {raw!r}") from None
    if number < 1:
        raise ValueError(f"Line numbers start at 1, got {number}")
    return number


def slice_lines(text: str, start: int | None, end: int | None) -> str:
    """Return lines *start*..*end* (1-based, inclusive) of *text*."""
    lines = text.splitlines(keepends=True)
    lo = (start or 1) - 1
    hi = end if end is not None else len(lines)
    return "".join(lines[lo:hi])


def read_selection(
    path: str,
    *,
    line_range: str | None = None,
    stdin: TextIO | None = None,
) -> Selection:
    """Read the text to explain from *path* (``-`` for standard input).

    Raises:
        FileNotFoundError: If *path* does not exist.
        IsADirectoryError: If *path* is a directory.
        ValueError: If *line_range* is malformed.
    """
    bounds = parse_line_range(line_range) if line_range else (None, None)

    if path == STDIN_MARKER:
        stream = stdin if stdin is not None else sys.stdin
        text = _read_stream(stream)
        origin = "<stdin>"
    else:
        resolved = validate_file(path)
        with open(resolved, encoding="utf-8", errors="replace") as fh:
            text = fh.read()
        origin = str(resolved)

    return Selection(text=slice_lines(text, *bounds), origin=origin)


def _read_stream(stream: TextIO) -> str:
    """Read *stream* to the end, replacing undecodable bytes like file input does."""
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        return stream.read()
    encoding = getattr(stream, "encoding", None) or "utf-8"
    return buffer.read().decode(encoding, errors="replace")


def find_project_root(start: Path) -> Path | None:
    """Walk up from *start* looking for a project marker directory.

    Returns the first ancestor (including *start*) that contains
    ``.codeguide/`` or ``.git/``, or ``None``.
    """
    current = start.resolve()
    if current.is_file():
        current = current.parent

    while True:
        if any((current / marker).is_dir() for marker in PROJECT_ROOT_MARKERS):
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent
