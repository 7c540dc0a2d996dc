"""Pydantic models for the knowledge base: monuments, passages and search results."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ContentType(str, Enum):
    """Kind of text a knowledge passage holds."""

    DESCRIPTION = "description"
    HISTORY = "history"
    LEGEND = "legend"
    STORY = "story"
    PRACTICAL_INFO = "practical_info"
    EVENT = "event"
    FOOD = "food"
    NATURE = "nature"


class MatchType(str, Enum):
    """How a search result was found."""

    SEMANTIC = "semantic"
    KEYWORD = "keyword"


def slugify(name: str) -> str:
    """Derive a monument slug from its name: lowercase, whitespace runs become '-'."""
    return re.sub(r"\s+", "-", name.strip().lower())


def count_words(text: str) -> int:
    """Whitespace word count used for passage statistics."""
    return len(text.split())


class Monument(BaseModel):
    """A place of interest in the village."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name_it: str
    name_en: str | None = None
    name_es: str | None = None
    slug: str = ""
    category: str
    description_short: str | None = None
    village: str | None = None
    region: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_featured: bool = False

    @model_validator(mode="after")
    def _derive_slug(self) -> "Monument":
        if not self.slug:
            self.slug = slugify(self.name_it)
        return self


class KnowledgePassage(BaseModel):
    """A single retrievable unit of knowledge-base text."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    monument_id: str | None = None
    title: str
    content: str
    content_type: ContentType = ContentType.DESCRIPTION
    category: str
    location: str | None = None
    tags: list[str] = Field(default_factory=list)
    language: str = "it"
    embedding: list[float] | None = None
    embedding_model: str | None = None
    word_count: int = 0
    source_document: str | None = None
    source_page: int | None = None
    chunk_index: int | None = None

    @model_validator(mode="after")
    def _derive_word_count(self) -> "KnowledgePassage":
        # Always recomputed; never trusted from input
        self.word_count = count_words(self.content)
        return self

    @property
    def embedding_text(self) -> str:
        """Text sent to the embedding provider when seeding."""
        return f"{self.title}\n\n{self.content}"

    def to_record(self) -> dict[str, Any]:
        """Row payload for the knowledge_base table."""
        record = self.model_dump(mode="json", exclude={"id"}, exclude_none=True)
        if self.id:
            record["id"] = self.id
        return record


@dataclass
class SearchFilters:
    """Equality filters shared by semantic and keyword search."""

    category: str | None = None
    monument_id: str | None = None
    content_type: str | None = None
    language: str | None = None

    def as_equality_filters(self) -> dict[str, str]:
        """Return only the filters that are set."""
        filters = {
            "category": self.category,
            "monument_id": self.monument_id,
            "content_type": self.content_type,
            "language": self.language,
        }
        return {k: v for k, v in filters.items() if v is not None}


class SearchResult(BaseModel):
    """A passage returned by the retrieval service.

    ``score`` is the cosine similarity for semantic matches and ``None`` for
    keyword matches, which carry no ranking confidence.
    """

    passage: KnowledgePassage
    score: float | None = None
    match_type: MatchType


class MonumentDetail(BaseModel):
    """A monument together with its passages."""

    monument: Monument
    passages: list[KnowledgePassage] = Field(default_factory=list)
