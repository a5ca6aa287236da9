"""
Admin topic endpoints. Every route requires an authenticated admin.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.api.deps import require_admin
from app.core.database import get_session
from app.models import User
from app.schemas.common import MessageResponse
from app.schemas.topic import (
    AdminTopicDetail,
    AdminTopicDetailResponse,
    AdminTopicResponse,
    AdminTopicsResponse,
    CreateTopicRequest,
    TopicMutationResponse,
    TopicResponse,
    UpdateTopicRequest,
)
from app.services import topic_service

router = APIRouter(
    prefix="/admin/topics",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=AdminTopicsResponse)
async def get_all_topics(session: Session = Depends(get_session)):
    """Get every topic, including unpublished ones, with author and lesson count."""
    topics = topic_service.list_all_topics(session)
    return AdminTopicsResponse(
        count=len(topics),
        data=[
            AdminTopicResponse.model_validate({
                **topic.model_dump(),
                "lessons_count": count,
                "created_by": topic.created_by,
            })
            for topic, count in topics
        ]
    )


@router.get("/{topic_id}", response_model=AdminTopicDetailResponse)
async def get_topic_by_id(topic_id: int, session: Session = Depends(get_session)):
    """Get a topic by ID with all of its lessons."""
    topic, lessons = topic_service.get_topic_by_id(session, topic_id)
    return AdminTopicDetailResponse(
        data=AdminTopicDetail.model_validate({
            **topic.model_dump(),
            "created_by": topic.created_by,
            "lessons": lessons,
        })
    )


@router.post("", response_model=TopicMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_topic(
    request: CreateTopicRequest,
    user: User = Depends(require_admin),
    session: Session = Depends(get_session)
):
    """Create a topic. Title, slug and description are required; slug must be unique."""
    topic = topic_service.create_topic(session, request, user)
    return TopicMutationResponse(
        message="Topic created successfully",
        data=TopicResponse.model_validate(topic)
    )


@router.put("/{topic_id}", response_model=TopicMutationResponse)
async def update_topic(
    topic_id: int,
    request: UpdateTopicRequest,
    session: Session = Depends(get_session)
):
    """Update a topic by ID. Fields missing from the body keep their value."""
    topic = topic_service.update_topic(session, topic_id, request)
    return TopicMutationResponse(
        message="Topic updated successfully",
        data=TopicResponse.model_validate(topic)
    )


@router.delete("/{topic_id}", response_model=MessageResponse)
async def delete_topic(topic_id: int, session: Session = Depends(get_session)):
    """Delete a topic. Topics that still own lessons are rejected."""
    topic_service.delete_topic(session, topic_id)
    return MessageResponse(message="Topic deleted successfully")
