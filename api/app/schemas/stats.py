"""
Admin dashboard schemas.
"""
from pydantic import Field
from typing import Dict, List, Optional
from datetime import datetime

from app.schemas.common import CamelModel, TopicSummary


class RecentTopic(CamelModel):
    id: int
    title: str
    slug: str
    created_at: datetime
    is_published: bool


class RecentLesson(CamelModel):
    id: int
    title: str
    slug: str
    topic: Optional[TopicSummary] = None
    created_at: datetime
    is_published: bool


class DashboardStats(CamelModel):
    total_topics: int
    published_topics: int
    unpublished_topics: int
    total_lessons: int
    published_lessons: int
    unpublished_lessons: int
    total_users: int
    lessons_by_level: Dict[str, int] = Field(default_factory=dict)
    recent_topics: List[RecentTopic] = Field(default_factory=list)
    recent_lessons: List[RecentLesson] = Field(default_factory=list)


class StatsResponse(CamelModel):
    success: bool = True
    data: DashboardStats
