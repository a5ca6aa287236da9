"""
Public lesson endpoints.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.database import get_session
from app.schemas.common import TopicSummary
from app.schemas.lesson import (
    LessonDetail,
    LessonDetailResponse,
    LessonLink,
    LessonListItem,
    LessonNavigation,
    LessonResponse,
    LessonsResponse,
    TopicLessonsResponse,
)
from app.services import lesson_service

router = APIRouter(prefix="/lessons", tags=["lessons"])


@router.get("", response_model=LessonsResponse)
async def get_lessons(session: Session = Depends(get_session)):
    """Get published lessons with their topic summary."""
    lessons = lesson_service.list_published_lessons(session)
    return LessonsResponse(
        count=len(lessons),
        data=[LessonResponse.model_validate(lesson) for lesson in lessons]
    )


@router.get("/topic/{topic_slug}", response_model=TopicLessonsResponse)
async def get_lessons_by_topic(topic_slug: str, session: Session = Depends(get_session)):
    """Get the published lessons of one topic, in reading order."""
    topic, lessons = lesson_service.list_lessons_by_topic_slug(session, topic_slug)
    return TopicLessonsResponse(
        count=len(lessons),
        topic=TopicSummary.model_validate(topic),
        data=[LessonListItem.model_validate(lesson) for lesson in lessons]
    )


@router.get("/{slug}", response_model=LessonDetailResponse)
async def get_lesson_by_slug(slug: str, session: Session = Depends(get_session)):
    """Get a published lesson by slug with previous/next navigation."""
    lesson, previous_lesson, next_lesson = lesson_service.get_published_lesson_by_slug(session, slug)
    navigation = LessonNavigation(
        previous=LessonLink.model_validate(previous_lesson) if previous_lesson else None,
        next=LessonLink.model_validate(next_lesson) if next_lesson else None,
    )
    return LessonDetailResponse(
        data=LessonDetail(
            **LessonResponse.model_validate(lesson).model_dump(),
            navigation=navigation
        )
    )
