"""
Search schemas.
"""
from pydantic import Field, field_validator
from typing import List, Optional, Literal
from enum import Enum

from app.models.enums import LessonLevel
from app.schemas.common import CamelModel, TopicSummary
from app.schemas.utils import coerce_level


class SearchType(str, Enum):
    """Restricts advanced search to one result set."""
    TOPIC = "topic"
    LESSON = "lesson"


class TopicHit(CamelModel):
    id: int
    title: str
    slug: str
    description: str
    icon: str
    color: str


class LessonHit(CamelModel):
    id: int
    title: str
    slug: str
    level: Optional[LessonLevel] = None
    topic_id: int
    topic: Optional[TopicSummary] = None

    @field_validator("level", mode="before")
    @classmethod
    def read_level(cls, value):
        return coerce_level(value)


class SearchResults(CamelModel):
    topics: List[TopicHit] = Field(default_factory=list)
    lessons: List[LessonHit] = Field(default_factory=list)


class SearchResponse(CamelModel):
    success: bool = True
    query: str
    total_results: int
    data: SearchResults


class SearchFilters(CamelModel):
    type: Optional[SearchType] = None
    level: Optional[LessonLevel] = None
    topic_slug: Optional[str] = None


class AdvancedSearchResponse(SearchResponse):
    filters: SearchFilters


class Suggestion(CamelModel):
    """Autocomplete entry; topics carry an icon, lessons their topic title."""
    type: Literal["topic", "lesson"]
    title: str
    slug: str
    icon: Optional[str] = None
    topic: Optional[str] = None


class SuggestionsResponse(CamelModel):
    success: bool = True
    data: List[Suggestion] = Field(default_factory=list)
