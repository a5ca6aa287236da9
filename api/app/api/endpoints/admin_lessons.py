"""
Admin lesson endpoints. Every route requires an authenticated admin.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.api.deps import require_admin
from app.core.database import get_session
from app.models import User
from app.schemas.common import MessageResponse
from app.schemas.lesson import (
    AdminLessonDetailResponse,
    AdminLessonResponse,
    AdminLessonsResponse,
    CreateLessonRequest,
    LessonMutationResponse,
    LessonResponse,
    UpdateLessonRequest,
)
from app.services import lesson_service

router = APIRouter(
    prefix="/admin/lessons",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=AdminLessonsResponse)
async def get_all_lessons(session: Session = Depends(get_session)):
    """Get every lesson, including unpublished ones, newest first."""
    lessons = lesson_service.list_all_lessons(session)
    return AdminLessonsResponse(
        count=len(lessons),
        data=[AdminLessonResponse.model_validate(lesson) for lesson in lessons]
    )


@router.get("/{lesson_id}", response_model=AdminLessonDetailResponse)
async def get_lesson_by_id(lesson_id: int, session: Session = Depends(get_session)):
    """Get a lesson by ID regardless of publish state."""
    lesson = lesson_service.get_lesson(session, lesson_id)
    return AdminLessonDetailResponse(data=AdminLessonResponse.model_validate(lesson))


@router.post("", response_model=LessonMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_lesson(
    request: CreateLessonRequest,
    user: User = Depends(require_admin),
    session: Session = Depends(get_session)
):
    """Create a lesson in an existing topic. The slug must be unique within that topic."""
    lesson = lesson_service.create_lesson(session, request, user)
    return LessonMutationResponse(
        message="Lesson created successfully",
        data=LessonResponse.model_validate(lesson)
    )


@router.put("/{lesson_id}", response_model=LessonMutationResponse)
async def update_lesson(
    lesson_id: int,
    request: UpdateLessonRequest,
    session: Session = Depends(get_session)
):
    """Update a lesson by ID. Fields missing from the body keep their value."""
    lesson = lesson_service.update_lesson(session, lesson_id, request)
    return LessonMutationResponse(
        message="Lesson updated successfully",
        data=LessonResponse.model_validate(lesson)
    )


@router.delete("/{lesson_id}", response_model=MessageResponse)
async def delete_lesson(lesson_id: int, session: Session = Depends(get_session)):
    """Delete a lesson by ID."""
    lesson_service.delete_lesson(session, lesson_id)
    return MessageResponse(message="Lesson deleted successfully")
