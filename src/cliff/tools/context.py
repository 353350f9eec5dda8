"""Context sources for planner prompts.

A context source is either an ``http(s)://`` URL, fetched as-is, or a local file path.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from cliff.errors import ActionError
from cliff.logging import get_logger
from cliff.tools.page_fetcher import PageFetcher
from cliff.utils.paths import expand_home

logger = get_logger(__name__)

NO_CONTEXT = "No context provided."


@dataclass(frozen=True)
class ContextContent:
    source: str
    content: str


def is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


def fetch_context(sources: Sequence[str], fetcher: PageFetcher) -> list[ContextContent]:
    """Load every source in order.

    Raises:
        ActionError: If any file cannot be read or any URL cannot be fetched.
    """

    fetched: list[ContextContent] = []
    for source in sources:
        if is_url(source):
            content = fetcher.fetch(source).text()
        else:
            try:
                content = expand_home(source).read_text(encoding="utf-8")
            except (OSError, ValueError) as e:
                raise ActionError(f"Failed to read file: {source}: {e}") from e
        logger.debug("Loaded context source %s (%d chars)", source, len(content))
        fetched.append(ContextContent(source=source, content=content))
    return fetched


def combine_context(contents: Sequence[ContextContent]) -> str | None:
    """Render loaded sources as one prompt block, or ``None`` when there are none."""

    if not contents:
        return None
    return "\n".join(f"Context from {c.source}:\n{c.content}\n" for c in contents)
