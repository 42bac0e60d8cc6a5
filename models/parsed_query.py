from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ParsedQuery(BaseModel):
    """Target company, target title and title variations derived from a query."""

    company: str = ""
    job_title: str = Field(default="", alias="jobTitle")
    title_variations: list[str] = Field(default_factory=list, alias="titleVariations")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("company", "job_title", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("title_variations", mode="before")
    @classmethod
    def _clean_variations(cls, value):
        if not isinstance(value, (list, tuple, set)):
            return []
        seen: list[str] = []
        for item in value:
            if isinstance(item, str) and item.strip() and item.strip() not in seen:
                seen.append(item.strip())
        return seen
