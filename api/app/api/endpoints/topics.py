"""
Public topic endpoints.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.database import get_session
from app.schemas.topic import (
    TopicDetail,
    TopicDetailResponse,
    TopicsResponse,
    TopicWithCount,
)
from app.services import topic_service

router = APIRouter(prefix="/topics", tags=["topics"])


@router.get("", response_model=TopicsResponse)
async def get_topics(session: Session = Depends(get_session)):
    """Get published topics with their published lesson counts."""
    topics = topic_service.list_published_topics(session)
    return TopicsResponse(
        count=len(topics),
        data=[
            TopicWithCount.model_validate({**topic.model_dump(), "lessons_count": count})
            for topic, count in topics
        ]
    )


@router.get("/{slug}", response_model=TopicDetailResponse)
async def get_topic_by_slug(slug: str, session: Session = Depends(get_session)):
    """Get a published topic by slug with its published lessons (content omitted)."""
    topic, lessons = topic_service.get_published_topic_by_slug(session, slug)
    return TopicDetailResponse(
        data=TopicDetail.model_validate({**topic.model_dump(), "lessons": lessons})
    )
