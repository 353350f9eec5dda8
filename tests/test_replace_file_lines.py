"""Tests for line-range replacement."""

from __future__ import annotations

from pathlib import Path

import pytest

from cliff.errors import ActionError
from cliff.tools.files import replace_file_lines


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "file.txt"
    path.write_bytes(content.encode("utf-8"))
    return path


def _read(path: Path) -> str:
    return path.read_bytes().decode("utf-8")


def test_replace_middle_lines(tmp_path: Path) -> None:
    """Lines 1..2 are swapped for the replacement lines."""

    path = _write(tmp_path, "line1\nline2\nline3\nline4\nline5")
    replace_file_lines(str(path), 1, 2, "new_line_a\nnew_line_b")
    assert _read(path) == "line1\nnew_line_a\nnew_line_b\nline4\nline5"


def test_replace_first_line(tmp_path: Path) -> None:
    path = _write(tmp_path, "line1\nline2\nline3")
    replace_file_lines(str(path), 0, 0, "first")
    assert _read(path) == "first\nline2\nline3"


def test_replace_last_line(tmp_path: Path) -> None:
    path = _write(tmp_path, "line1\nline2\nline3")
    replace_file_lines(str(path), 2, 2, "last")
    assert _read(path) == "line1\nline2\nlast"


def test_empty_replacement_deletes_range(tmp_path: Path) -> None:
    """An empty replacement removes the range without inserting anything."""

    path = _write(tmp_path, "line1\nline2\nline3\nline4")
    replace_file_lines(str(path), 1, 2, "")
    assert _read(path) == "line1\nline4"


def test_replace_beyond_end_pads_with_blank_lines(tmp_path: Path) -> None:
    """A start index past the end is reached by appending blank lines."""

    path = _write(tmp_path, "line1\nline2")
    replace_file_lines(str(path), 4, 4, "new_line_far_away")
    assert _read(path) == "line1\nline2\n\n\nnew_line_far_away"


@pytest.mark.parametrize("k", [1, 2, 5])
def test_padding_inserts_exactly_k_blank_lines(tmp_path: Path, k: int) -> None:
    """For N lines, replacing at N + k inserts k blank lines before the replacement."""

    original = ["a", "b", "c"]
    path = _write(tmp_path, "\n".join(original))
    replace_file_lines(str(path), len(original) + k, len(original) + k, "x\ny")

    lines = _read(path).split("\n")
    assert len(lines) == len(original) + k + 2
    assert lines[: len(original)] == original
    assert lines[len(original) : len(original) + k] == [""] * k
    assert lines[-2:] == ["x", "y"]


def test_until_past_end_is_clamped(tmp_path: Path) -> None:
    """The range end is clamped to the current line count."""

    path = _write(tmp_path, "line1\nline2\nline3")
    replace_file_lines(str(path), 1, 99, "tail")
    assert _read(path) == "line1\ntail"


def test_replace_whole_file(tmp_path: Path) -> None:
    path = _write(tmp_path, "a\nb\nc")
    replace_file_lines(str(path), 0, 2, "z")
    assert _read(path) == "z"


def test_noop_replacement_is_idempotent(tmp_path: Path) -> None:
    """Replacing a range with its own lines leaves the file unchanged."""

    content = "alpha\nbeta\ngamma\ndelta"
    path = _write(tmp_path, content)
    replace_file_lines(str(path), 1, 2, "beta\ngamma")
    assert _read(path) == content


def test_noop_replacement_normalizes_crlf(tmp_path: Path) -> None:
    """Only line endings change when CRLF content is replaced with itself."""

    path = _write(tmp_path, "alpha\r\nbeta\r\ngamma")
    replace_file_lines(str(path), 0, 1, "alpha\nbeta")
    assert _read(path) == "alpha\nbeta\ngamma"


def test_replacement_text_is_literal(tmp_path: Path) -> None:
    """Replacement lines are written as given, including JSON-looking text."""

    path = _write(tmp_path, "x")
    replace_file_lines(str(path), 0, 0, '{"action": "ask_llm", "prompt": "hi"}')
    assert _read(path) == '{"action": "ask_llm", "prompt": "hi"}'


def test_missing_file_is_an_error(tmp_path: Path) -> None:
    """A missing file fails with a message naming the path."""

    missing = tmp_path / "missing.txt"
    with pytest.raises(ActionError, match="missing.txt"):
        replace_file_lines(str(missing), 0, 0, "x")
