"""Web search for the ``search_web`` action.

Two backends are available: DuckDuckGo (no key needed) and the Tavily API. Both return
:class:`~cliff.models.search.SearchResult` items, which :func:`search_web` renders as the step
output.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Iterable, Protocol

import httpx
from duckduckgo_search import DDGS
from duckduckgo_search.exceptions import DuckDuckGoSearchException
from pydantic import ValidationError

from cliff.config import Settings
from cliff.errors import ActionError
from cliff.logging import get_logger
from cliff.models.search import SearchResult

logger = get_logger(__name__)

_RETRYABLE = frozenset({429, 500, 502, 503, 504})


class WebSearchProvider(Protocol):
    def search(self, query: str, *, max_results: int) -> list[SearchResult]: ...


class WebSearchError(ActionError):
    pass


def _to_results(
    items: Iterable[Any], *, source: str, url_key: str, snippet_key: str
) -> list[SearchResult]:
    """Convert raw provider hits, skipping entries without a usable URL."""

    results: list[SearchResult] = []
    for rank, item in enumerate(items, start=1):
        if not isinstance(item, dict) or not item.get(url_key):
            continue
        try:
            results.append(
                SearchResult(
                    title=item.get("title"),
                    snippet=item.get(snippet_key),
                    url=item[url_key],
                    source=source,
                    rank=rank,
                )
            )
        except ValidationError:
            logger.debug("Dropping search hit with invalid url: %r", item.get(url_key))
    return results


@dataclass(frozen=True)
class DuckDuckGoSearchProvider:
    source_name: str = "duckduckgo"

    def search(self, query: str, *, max_results: int) -> list[SearchResult]:
        try:
            with DDGS() as ddgs:
                hits = list(ddgs.text(query, max_results=max_results))
        except DuckDuckGoSearchException as e:
            raise WebSearchError(f"DuckDuckGo search failed for '{query}': {e}") from e
        return _to_results(hits, source=self.source_name, url_key="href", snippet_key="body")


@dataclass(frozen=True)
class TavilySearchProvider:
    """Tavily API search.

    Rate limiting and server errors are retried with exponential backoff (``retry-after`` wins on
    429); any other HTTP error fails immediately.
    """

    api_key: str
    base_url: str = "https://api.tavily.com"
    search_depth: str = "basic"
    timeout_s: float = 30.0
    max_retries: int = 3
    retry_backoff_s: float = 0.75
    retry_max_backoff_s: float = 8.0
    source_name: str = "tavily"
    transport: httpx.BaseTransport | None = None

    def search(self, query: str, *, max_results: int) -> list[SearchResult]:
        body = {
            "api_key": self.api_key,
            "query": query,
            "max_results": max_results,
            "search_depth": self.search_depth,
            "include_answer": False,
            "include_raw_content": False,
        }
        data = self._post(f"{self.base_url.rstrip('/')}/search", body, query=query)
        hits = data.get("results") if isinstance(data, dict) else None
        if not isinstance(hits, list):
            raise WebSearchError(f"Tavily search failed for '{query}': malformed response")
        return _to_results(hits, source=self.source_name, url_key="url", snippet_key="content")

    def _post(self, url: str, body: dict[str, Any], *, query: str) -> Any:
        last_error: Exception | None = None
        with httpx.Client(
            timeout=httpx.Timeout(self.timeout_s), follow_redirects=True, transport=self.transport
        ) as client:
            for attempt in range(self.max_retries + 1):
                delay: float | None = None
                try:
                    resp = client.post(url, json=body)
                    if resp.status_code not in _RETRYABLE:
                        resp.raise_for_status()
                        return resp.json()
                    last_error = httpx.HTTPStatusError(
                        f"status {resp.status_code}", request=resp.request, response=resp
                    )
                    delay = self._retry_after(resp)
                except httpx.HTTPStatusError as e:
                    raise WebSearchError(f"Tavily search failed for '{query}': {e}") from e
                except httpx.TransportError as e:
                    last_error = e
                except ValueError as e:
                    raise WebSearchError(f"Tavily search failed for '{query}': {e}") from e

                if attempt == self.max_retries:
                    break
                if delay is None:
                    delay = min(self.retry_max_backoff_s, self.retry_backoff_s * 2**attempt)
                logger.warning(
                    "Tavily search retry %d/%d in %.2fs: %s",
                    attempt + 1,
                    self.max_retries,
                    delay,
                    last_error,
                )
                time.sleep(delay)

        raise WebSearchError(f"Tavily search failed for '{query}': {last_error}") from last_error

    @staticmethod
    def _retry_after(resp: httpx.Response) -> float | None:
        if resp.status_code != 429:
            return None
        value = resp.headers.get("retry-after")
        try:
            return float(value) if value is not None else None
        except ValueError:
            return None


def get_search_provider(settings: Settings) -> WebSearchProvider:
    """Build the provider selected by ``settings.search_provider``."""

    if settings.search_provider != "tavily":
        return DuckDuckGoSearchProvider()
    if not settings.tavily_api_key:
        raise ValueError(
            "Missing CLIFF_TAVILY_API_KEY while search_provider=tavily. "
            "Set it in environment variables or .env."
        )
    return TavilySearchProvider(
        api_key=settings.tavily_api_key,
        base_url=settings.tavily_api_base_url,
        search_depth=settings.tavily_search_depth,
        timeout_s=settings.tavily_timeout_s,
        max_retries=settings.tavily_max_retries,
        retry_backoff_s=settings.tavily_retry_backoff_s,
        retry_max_backoff_s=settings.tavily_retry_max_backoff_s,
    )


def search_web(provider: WebSearchProvider, query: str, *, max_results: int) -> str:
    """Run a search and render the results as numbered text blocks."""

    results = provider.search(query, max_results=max_results)
    logger.info("Web search completed: query_len=%d results=%d", len(query), len(results))
    if not results:
        return f"No results found for '{query}'."
    return "\n\n".join(r.render() for r in results)
