"""Planner response unwrapping.

Models frequently answer with a JSON object inside a ```json fenced block. Only that exact
wrapping is removed; anything else is passed to the JSON decoder unchanged so that it fails
loudly instead of being guessed at.
"""

from __future__ import annotations

_FENCE_OPEN = "```json"
_FENCE_CLOSE = "```"


def strip_json_fence(text: str) -> str:
    """Remove a leading ```json fence and a trailing ``` fence.

    Both fences must be present; otherwise ``text`` is returned unchanged.

    Args:
        text: Raw model output.

    Returns:
        The fenced body with surrounding whitespace trimmed, or the original text.
    """

    cleaned = text.strip()
    if (
        len(cleaned) >= len(_FENCE_OPEN) + len(_FENCE_CLOSE)
        and cleaned.startswith(_FENCE_OPEN)
        and cleaned.endswith(_FENCE_CLOSE)
    ):
        return cleaned[len(_FENCE_OPEN) : -len(_FENCE_CLOSE)].strip()
    return text
