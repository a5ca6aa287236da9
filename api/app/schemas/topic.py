"""
Topic schemas.
"""
from pydantic import Field
from typing import List, Optional
from datetime import datetime

from app.schemas.common import CamelModel, UserSummary
from app.schemas.lesson import LessonListItem, LessonResponse


class CreateTopicRequest(CamelModel):
    """Create topic request. Presence of title/slug/description is checked by the service."""
    title: Optional[str] = Field(None, max_length=100, description="Topic title")
    slug: Optional[str] = Field(None, description="Unique URL identifier, stored lowercase")
    description: Optional[str] = Field(None, max_length=500, description="Short description")
    icon: Optional[str] = Field(None, description="Emoji icon")
    color: Optional[str] = Field(None, description="Hex color, e.g. '#3b82f6'")
    order: Optional[int] = Field(None, description="Display order, ascending")
    is_published: Optional[bool] = Field(None, description="Visible on public endpoints")


class UpdateTopicRequest(CreateTopicRequest):
    """Partial update - only fields present in the body are applied."""
    pass


class TopicResponse(CamelModel):
    """Topic as exposed on public endpoints (no author)."""
    id: int
    title: str
    slug: str
    description: str
    icon: str
    color: str
    order: int = 0
    is_published: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TopicWithCount(TopicResponse):
    lessons_count: int = 0


class AdminTopicResponse(TopicWithCount):
    created_by: Optional[UserSummary] = None


class TopicDetail(TopicResponse):
    """Published topic with its published lessons."""
    lessons: List[LessonListItem] = Field(default_factory=list)


class AdminTopicDetail(TopicResponse):
    """Any topic with every lesson regardless of publish state."""
    created_by: Optional[UserSummary] = None
    lessons: List[LessonResponse] = Field(default_factory=list)


class TopicsResponse(CamelModel):
    success: bool = True
    count: int
    data: List[TopicWithCount]


class AdminTopicsResponse(CamelModel):
    success: bool = True
    count: int
    data: List[AdminTopicResponse]


class TopicDetailResponse(CamelModel):
    success: bool = True
    data: TopicDetail


class AdminTopicDetailResponse(CamelModel):
    success: bool = True
    data: AdminTopicDetail


class TopicMutationResponse(CamelModel):
    success: bool = True
    message: str
    data: TopicResponse
