"""
Lesson schemas.
"""
from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime

from app.models.enums import LessonLevel
from app.schemas.common import CamelModel, TopicSummary, UserSummary
from app.schemas.utils import coerce_level


class CreateLessonRequest(CamelModel):
    """Create lesson request. Presence of topicId/title/slug/content is checked by the service."""
    topic_id: Optional[int] = Field(None, description="Owning topic ID")
    title: Optional[str] = Field(None, description="Lesson title")
    slug: Optional[str] = Field(None, description="URL identifier, unique within the topic")
    level: Optional[LessonLevel] = Field(None, description="beginner, intermediate or advanced")
    content: Optional[str] = Field(None, description="Lesson body as HTML")
    sample_code: Optional[str] = Field(None, description="Optional code sample")
    order: Optional[int] = Field(None, description="Position within the topic, ascending")
    is_published: Optional[bool] = Field(None, description="Visible on public endpoints")


class UpdateLessonRequest(CreateLessonRequest):
    """Partial update - only fields present in the body are applied."""
    pass


class LessonListItem(CamelModel):
    """Lesson in listings: no content body, no author."""
    id: int
    topic_id: int
    title: str
    slug: str
    level: Optional[LessonLevel] = None
    sample_code: str = ""
    order: int = 0
    is_published: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("level", mode="before")
    @classmethod
    def read_level(cls, value):
        return coerce_level(value)


class LessonResponse(LessonListItem):
    """Full lesson with its topic summary."""
    content: str
    topic: Optional[TopicSummary] = None


class AdminLessonResponse(LessonResponse):
    created_by: Optional[UserSummary] = None


class LessonLink(CamelModel):
    """Neighbour reference used for previous/next navigation."""
    id: int
    title: str
    slug: str


class LessonNavigation(CamelModel):
    previous: Optional[LessonLink] = None
    next: Optional[LessonLink] = None


class LessonDetail(LessonResponse):
    navigation: LessonNavigation


class LessonsResponse(CamelModel):
    success: bool = True
    count: int
    data: List[LessonResponse]


class TopicLessonsResponse(CamelModel):
    success: bool = True
    count: int
    topic: TopicSummary
    data: List[LessonListItem]


class AdminLessonsResponse(CamelModel):
    success: bool = True
    count: int
    data: List[AdminLessonResponse]


class LessonDetailResponse(CamelModel):
    success: bool = True
    data: LessonDetail


class AdminLessonDetailResponse(CamelModel):
    success: bool = True
    data: AdminLessonResponse


class LessonMutationResponse(CamelModel):
    success: bool = True
    message: str
    data: LessonResponse
