"""Filesystem leaf operations.

Every function returns the step output (``None`` when the operation has nothing to report) and
raises :class:`~cliff.errors.ActionError` naming the path and the operation on failure.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import wcmatch.glob as wcglob

from cliff.errors import ActionError
from cliff.logging import get_logger
from cliff.utils.paths import expand_home

logger = get_logger(__name__)

_GLOB_FLAGS = wcglob.GLOBSTAR | wcglob.BRACE
# NUL bytes and similar bad input surface as ValueError (UnicodeDecodeError included)
_PATH_ERRORS = (OSError, ValueError)


def _read_text(target: Path) -> str:
    with target.open("r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_text(target: Path, content: str) -> None:
    with target.open("w", encoding="utf-8", newline="") as f:
        f.write(content)


def split_lines(text: str) -> list[str]:
    """Split text into lines without terminators.

    A trailing newline does not produce an empty last line, and a ``\\r`` before ``\\n`` is
    dropped. No other characters are treated as line breaks.
    """

    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def create_file(path: str, content: str) -> None:
    """Create ``path`` (and its parents) with ``content`` written literally."""

    try:
        target = expand_home(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        _write_text(target, content)
    except _PATH_ERRORS as e:
        raise ActionError(f"Failed to write file: {path}: {e}") from e
    logger.info("File created: %s (%d chars)", target, len(content))
    return None


def overwrite_file(path: str, content: str) -> None:
    """Replace the contents of ``path`` with ``content`` written literally."""

    try:
        target = expand_home(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        _write_text(target, content)
    except _PATH_ERRORS as e:
        raise ActionError(f"Failed to overwrite file: {path}: {e}") from e
    logger.info("File overwritten: %s (%d chars)", target, len(content))
    return None


def delete_file(path: str) -> None:
    """Delete ``path``; a missing file is a no-op."""

    try:
        target = expand_home(path)
        if not target.exists():
            logger.warning("Delete skipped, file does not exist: %s", target)
            return None
        target.unlink()
    except _PATH_ERRORS as e:
        raise ActionError(f"Failed to delete file: {path}: {e}") from e
    logger.info("File deleted: %s", target)
    return None


def append_to_file(path: str, content: str) -> None:
    """Append ``content`` plus a newline, creating the file if needed."""

    try:
        with expand_home(path).open("a", encoding="utf-8", newline="") as f:
            f.write(content + "\n")
    except _PATH_ERRORS as e:
        raise ActionError(f"Failed to append content to file: {path}: {e}") from e
    return None


def move_file(source: str, destination: str) -> None:
    try:
        src = expand_home(source)
        dst = expand_home(destination)
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(src), str(dst))
    except _PATH_ERRORS as e:
        raise ActionError(f"Failed to move file from '{source}' to '{destination}': {e}") from e
    logger.info("File moved: %s -> %s", src, dst)
    return None


def copy_file(source: str, destination: str) -> None:
    try:
        src = expand_home(source)
        dst = expand_home(destination)
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)
    except _PATH_ERRORS as e:
        raise ActionError(f"Failed to copy file from '{source}' to '{destination}': {e}") from e
    logger.info("File copied: %s -> %s", src, dst)
    return None


def read_file(path: str) -> str:
    try:
        return _read_text(expand_home(path))
    except _PATH_ERRORS as e:
        raise ActionError(f"Failed to read file: {path}: {e}") from e


def list_directory(path: str) -> str:
    """Entry names of ``path``, sorted, one per line."""

    try:
        names = sorted(entry.name for entry in expand_home(path).iterdir())
    except _PATH_ERRORS as e:
        raise ActionError(f"Failed to read directory: {path}: {e}") from e
    return "\n".join(names)


def check_path_exists(path: str) -> str:
    try:
        exists = expand_home(path).exists()
    except _PATH_ERRORS as e:
        raise ActionError(f"Failed to check path: {path}: {e}") from e
    return "true" if exists else "false"


def find_files(pattern: str) -> str:
    """Paths matching a glob pattern (``**`` and ``{a,b}`` supported), one per line."""

    if not pattern.strip():
        raise ActionError("Failed to glob with pattern: pattern is empty")
    try:
        matches = wcglob.glob(str(expand_home(pattern)), flags=_GLOB_FLAGS)
    except _PATH_ERRORS as e:
        raise ActionError(f"Failed to glob with pattern: {pattern}: {e}") from e
    logger.info("Glob search completed: pattern=%s matches=%d", pattern, len(matches))
    return "\n".join(sorted(matches))


def replace_file_lines(
    path: str, from_line_idx: int, until_line_idx: int, replacement_lines: str
) -> None:
    """Replace lines ``from_line_idx..until_line_idx`` (inclusive) with ``replacement_lines``.

    If ``from_line_idx`` lies beyond the end of the file, the file is first padded with empty
    lines up to that index. An empty replacement deletes the range. The file is rewritten with
    ``\\n`` separators and no trailing newline.
    """

    try:
        target = expand_home(path)
        text = _read_text(target)
    except _PATH_ERRORS as e:
        raise ActionError(f"Failed to read file for replacement: {path}: {e}") from e

    lines = split_lines(text)
    if from_line_idx > len(lines):
        lines.extend([""] * (from_line_idx - len(lines)))

    range_end = min(until_line_idx + 1, len(lines))
    if range_end > from_line_idx:
        del lines[from_line_idx:range_end]
    lines[from_line_idx:from_line_idx] = split_lines(replacement_lines)

    try:
        _write_text(target, "\n".join(lines))
    except _PATH_ERRORS as e:
        raise ActionError(f"Failed to write modified file: {path}: {e}") from e
    logger.info("Replaced lines %d..%d in %s", from_line_idx, until_line_idx, target)
    return None
