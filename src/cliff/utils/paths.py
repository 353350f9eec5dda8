"""Path helpers."""

from __future__ import annotations

from pathlib import Path

from cliff.errors import ActionError


def expand_home(path: str) -> Path:
    """Expand a leading ``~/`` to the user's home directory.

    Other ``~`` forms (``~``, ``~user/...``) are kept as literal relative paths.
    """

    if not path.startswith("~/"):
        return Path(path)
    try:
        home = Path.home()
    except RuntimeError as e:
        raise ActionError(f"Failed to resolve home directory for path: {path}: {e}") from e
    return home / path[2:]
