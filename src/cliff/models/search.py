"""Search-related models."""

from __future__ import annotations

from pydantic import BaseModel, HttpUrl


class SearchResult(BaseModel):
    """A single web search result item."""

    title: str | None = None
    snippet: str | None = None
    url: HttpUrl
    source: str
    rank: int

    def render(self) -> str:
        lines = [f"{self.rank}. {self.title or '(untitled)'}", f"   {self.url}"]
        if self.snippet:
            lines.append(f"   {self.snippet.strip()}")
        return "\n".join(lines)
