from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SearchResult(BaseModel):
    """One ranked web page returned by the search provider."""

    id: str
    url: str = ""
    title: str = ""
    text: str = ""
    highlights: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", frozen=True)

    @property
    def highlight_text(self) -> str:
        return " ".join(self.highlights)
