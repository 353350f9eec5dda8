"""Turn fetched pages into the plain text returned by ``read_web_page`` and context loading."""

from __future__ import annotations

from bs4 import BeautifulSoup
from readability import Document

from cliff.logging import get_logger
from cliff.models.document import ParsedDocument
from cliff.tools.page_fetcher import FetchedPage

logger = get_logger(__name__)

TRUNCATION_MARKER = "\n\n[TRUNCATED]"


def _readable(html: str) -> tuple[str | None, str]:
    doc = Document(html)
    body = BeautifulSoup(doc.summary(html_partial=True), "lxml")
    return doc.short_title() or None, body.get_text("\n", strip=True)


def _plain(html: str) -> tuple[str | None, str]:
    soup = BeautifulSoup(html, "lxml")
    title = soup.title.get_text(strip=True) if soup.title else None
    return title, soup.get_text("\n", strip=True)


class PageParser:
    """Extract the main text of a page, capped at ``max_chars``."""

    def __init__(self, *, max_chars: int = 25_000) -> None:
        self._max_chars = max_chars

    def parse_html(self, url: str, html: str, *, content_type: str | None = None) -> ParsedDocument:
        try:
            title, text = _readable(html)
        except Exception as e:
            # readability gives up on fragments and odd markup
            logger.warning("Readability failed for url=%s, using full page text: %s", url, e)
            title, text = _plain(html)

        lines = (line.strip() for line in text.splitlines())
        text = "\n".join(line for line in lines if line)
        return ParsedDocument(
            url=url, title=title, text=self._cap(text), content_type=content_type
        )

    def parse_page(self, page: FetchedPage) -> ParsedDocument:
        """Parse any fetched page; non-HTML bodies are kept as decoded text."""

        if page.is_html:
            return self.parse_html(page.url, page.text(), content_type=page.content_type)
        return ParsedDocument(
            url=page.url, text=self._cap(page.text()), content_type=page.content_type
        )

    def _cap(self, text: str) -> str:
        if len(text) <= self._max_chars:
            return text
        return text[: self._max_chars] + TRUNCATION_MARKER
