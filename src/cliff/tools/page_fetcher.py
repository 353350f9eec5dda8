"""Page fetching utilities."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from cliff.config import Settings
from cliff.errors import ActionError
from cliff.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FetchedPage:
    """Fetched page payload."""

    url: str
    content: bytes
    content_type: str | None
    encoding: str | None = None

    @property
    def is_html(self) -> bool:
        return self.content_type is not None and "html" in self.content_type.lower()

    def text(self) -> str:
        return self.content.decode(self.encoding or "utf-8", errors="replace")


class PageFetcher:
    """Fetch pages over HTTP."""

    def __init__(self, settings: Settings, *, transport: httpx.BaseTransport | None = None) -> None:
        self._settings = settings
        self._client = httpx.Client(
            timeout=httpx.Timeout(settings.http_timeout_s),
            headers={"User-Agent": settings.http_user_agent},
            follow_redirects=True,
            transport=transport,
        )

    def fetch(self, url: str) -> FetchedPage:
        """Fetch a URL.

        Raises:
            ActionError: On transport errors and non-2xx responses.
        """

        try:
            resp = self._client.get(url)
        except httpx.HTTPError as e:
            raise ActionError(f"Failed to fetch URL: {url}: {e}") from e
        if not resp.is_success:
            raise ActionError(f"Failed to fetch URL: {url} - Status: {resp.status_code}")
        logger.info("Fetched %s (%d bytes)", resp.url, len(resp.content))
        return FetchedPage(
            url=str(resp.url),
            content=resp.content,
            content_type=resp.headers.get("content-type"),
            encoding=resp.encoding,
        )

    def close(self) -> None:
        self._client.close()
