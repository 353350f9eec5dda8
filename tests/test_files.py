"""Tests for filesystem leaf operations."""

from __future__ import annotations

from pathlib import Path

import pytest

from cliff.errors import ActionError
from cliff.tools import files
from cliff.utils.paths import expand_home


def test_create_file_makes_parents_and_writes_literally(tmp_path: Path) -> None:
    """Content is written byte-for-byte, including fences and JSON."""

    target = tmp_path / "nested" / "dir" / "out.txt"
    content = '```json\n{"a": 1}\n```'
    assert files.create_file(str(target), content) is None
    assert target.read_text(encoding="utf-8") == content


def test_overwrite_file_replaces_contents(tmp_path: Path) -> None:
    target = tmp_path / "f.txt"
    target.write_text("old", encoding="utf-8")
    files.overwrite_file(str(target), "new")
    assert target.read_text(encoding="utf-8") == "new"


def test_delete_missing_file_is_noop(tmp_path: Path) -> None:
    """Deleting a nonexistent file succeeds without output."""

    assert files.delete_file(str(tmp_path / "missing.txt")) is None


def test_delete_file_removes_it(tmp_path: Path) -> None:
    target = tmp_path / "f.txt"
    target.write_text("x", encoding="utf-8")
    files.delete_file(str(target))
    assert not target.exists()


def test_append_adds_trailing_newline(tmp_path: Path) -> None:
    """Each append writes the content followed by a newline."""

    target = tmp_path / "log.txt"
    files.append_to_file(str(target), "one")
    files.append_to_file(str(target), "two")
    assert target.read_text(encoding="utf-8") == "one\ntwo\n"


def test_move_and_copy(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    src.write_text("payload", encoding="utf-8")

    copied = tmp_path / "copies" / "b.txt"
    files.copy_file(str(src), str(copied))
    assert copied.read_text(encoding="utf-8") == "payload"
    assert src.exists()

    moved = tmp_path / "moved" / "c.txt"
    files.move_file(str(src), str(moved))
    assert moved.read_text(encoding="utf-8") == "payload"
    assert not src.exists()


def test_move_missing_source_fails(tmp_path: Path) -> None:
    with pytest.raises(ActionError, match="Failed to move file"):
        files.move_file(str(tmp_path / "nope"), str(tmp_path / "dst"))


def test_read_missing_file_fails(tmp_path: Path) -> None:
    """Reading a missing file is a failure naming the path."""

    with pytest.raises(ActionError, match="Failed to read file"):
        files.read_file(str(tmp_path / "missing.txt"))


def test_read_file_returns_contents(tmp_path: Path) -> None:
    target = tmp_path / "f.txt"
    target.write_text("hello\nworld", encoding="utf-8")
    assert files.read_file(str(target)) == "hello\nworld"


def test_list_directory_sorted(tmp_path: Path) -> None:
    for name in ("b.txt", "a.txt", "c"):
        (tmp_path / name).write_text("", encoding="utf-8")
    assert files.list_directory(str(tmp_path)) == "a.txt\nb.txt\nc"


def test_list_missing_directory_fails(tmp_path: Path) -> None:
    with pytest.raises(ActionError, match="Failed to read directory"):
        files.list_directory(str(tmp_path / "missing"))


def test_check_path_exists(tmp_path: Path) -> None:
    assert files.check_path_exists(str(tmp_path)) == "true"
    assert files.check_path_exists(str(tmp_path / "missing")) == "false"


def test_find_files_globstar_and_brace(tmp_path: Path) -> None:
    """Recursive and alternation patterns are supported."""

    (tmp_path / "pkg" / "sub").mkdir(parents=True)
    for rel in ("pkg/a.py", "pkg/sub/b.py", "pkg/sub/c.txt", "pkg/d.md"):
        (tmp_path / rel).write_text("", encoding="utf-8")

    found = files.find_files(f"{tmp_path}/**/*.py").split("\n")
    assert found == sorted([str(tmp_path / "pkg/a.py"), str(tmp_path / "pkg/sub/b.py")])

    found = files.find_files(f"{tmp_path}/pkg/*.{{py,md}}").split("\n")
    assert found == sorted([str(tmp_path / "pkg/a.py"), str(tmp_path / "pkg/d.md")])


def test_find_files_no_match_is_empty(tmp_path: Path) -> None:
    assert files.find_files(f"{tmp_path}/*.nothing") == ""


def test_find_files_empty_pattern_fails() -> None:
    with pytest.raises(ActionError, match="Failed to glob"):
        files.find_files("  ")


def test_split_lines_drops_terminators() -> None:
    assert files.split_lines("a\r\nb\n") == ["a", "b"]
    assert files.split_lines("") == []
    assert files.split_lines("a\n\nb") == ["a", "", "b"]


def test_home_prefix_expands(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    files.create_file("~/notes/today.txt", "hi")
    assert (tmp_path / "notes" / "today.txt").read_text(encoding="utf-8") == "hi"
    assert files.check_path_exists("~/notes") == "true"


def test_tilde_user_is_kept_literal(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Only ``~/`` is expanded; ``~name/...`` is a relative path."""

    monkeypatch.chdir(tmp_path)
    assert expand_home("~nouser_zz/x") == Path("~nouser_zz/x")
    assert files.check_path_exists("~nouser_zz/x") == "false"
    with pytest.raises(ActionError, match="Failed to read file: ~nouser_zz/x"):
        files.read_file("~nouser_zz/x")


def test_unresolvable_home_is_an_action_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def no_home() -> Path:
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(Path, "home", staticmethod(no_home))
    with pytest.raises(ActionError, match="Failed to resolve home directory for path: ~/a.txt"):
        files.read_file("~/a.txt")


@pytest.mark.parametrize(
    "call",
    [
        lambda p: files.read_file(p),
        lambda p: files.create_file(p, "x"),
        lambda p: files.append_to_file(p, "x"),
        lambda p: files.list_directory(p),
        lambda p: files.replace_file_lines(p, 0, 0, "x"),
    ],
)
def test_nul_byte_in_path_is_an_action_error(tmp_path: Path, call) -> None:
    with pytest.raises(ActionError, match="Failed to"):
        call(str(tmp_path / "a\x00b"))
