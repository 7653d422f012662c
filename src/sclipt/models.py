"""
Snippet model for sclipt.

One record per stored fragment. Field order here is the key order on disk.
"""

from datetime import datetime
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Snippet(BaseModel):
    """A stored text fragment."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1, description="Opaque unique identifier")
    title: str = Field(description="Short trimmed title")
    content: str = Field(description="Trimmed body, may span lines")
    created_at: datetime = Field(alias="createdAt", description="Creation time, ISO 8601")
    # Legacy records written before tagging existed have no tags key
    tags: list[str] = Field(default_factory=list, description="Lowercase tags")

    @field_validator("title", "content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    def to_record(self) -> dict:
        """Serialize to the JSON storage shape."""
        return self.model_dump(mode="json", by_alias=True)


def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    """
    Trim and lowercase tags, dropping blanks.

    Order is preserved and duplicates are kept.
    """
    if not tags:
        return []
    normalized = []
    for tag in tags:
        tag = tag.strip().lower()
        if tag:
            normalized.append(tag)
    return normalized
