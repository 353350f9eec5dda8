"""Leaf operations executed on behalf of plan steps."""

from __future__ import annotations

from cliff.tools.page_fetcher import FetchedPage, PageFetcher
from cliff.tools.page_parser import PageParser
from cliff.tools.shell import CommandResult, run_command
from cliff.tools.web_search import WebSearchError, WebSearchProvider, get_search_provider

__all__ = [
    "CommandResult",
    "FetchedPage",
    "PageFetcher",
    "PageParser",
    "WebSearchError",
    "WebSearchProvider",
    "get_search_provider",
    "run_command",
]
