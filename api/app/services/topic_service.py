"""
Topic service for business logic related to topics.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, func

from app.core.exceptions import (
    ConflictError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from app.models import Lesson, Topic, User
from app.models.topic import DEFAULT_TOPIC_COLOR, DEFAULT_TOPIC_ICON
from app.schemas.topic import CreateTopicRequest, UpdateTopicRequest
from app.schemas.utils import is_blank, missing_fields, normalize_slug

logger = logging.getLogger(__name__)

REQUIRED_TOPIC_FIELDS = ("title", "slug", "description")
DUPLICATE_SLUG_MESSAGE = "Slug already exists. Please use a unique slug."


def _topic_ordering():
    # order ascending, newest first within the same order
    return (Topic.order.asc(), Topic.created_at.desc(), Topic.id.desc())  # type: ignore


def _lesson_ordering():
    return (Lesson.order.asc(), Lesson.created_at.asc(), Lesson.id.asc())  # type: ignore


def count_lessons_by_topic(session: Session, published_only: bool) -> Dict[int, int]:
    """Map topic id -> number of lessons, in one grouped query."""
    query = select(Lesson.topic_id, func.count(Lesson.id)).group_by(Lesson.topic_id)
    if published_only:
        query = query.where(Lesson.is_published == True)  # noqa: E712
    return {topic_id: count for topic_id, count in session.exec(query).all()}


def list_published_topics(session: Session) -> List[Tuple[Topic, int]]:
    """Published topics with their published lesson counts."""
    topics = session.exec(
        select(Topic).where(Topic.is_published == True).order_by(*_topic_ordering())  # noqa: E712
    ).all()
    counts = count_lessons_by_topic(session, published_only=True)
    return [(topic, counts.get(topic.id, 0)) for topic in topics]


def list_all_topics(session: Session) -> List[Tuple[Topic, int]]:
    """Every topic regardless of publish state, counting every lesson."""
    topics = session.exec(select(Topic).order_by(*_topic_ordering())).all()
    counts = count_lessons_by_topic(session, published_only=False)
    return [(topic, counts.get(topic.id, 0)) for topic in topics]


def get_published_topic_by_slug(session: Session, slug: str) -> Tuple[Topic, List[Lesson]]:
    """Published topic by slug with its published lessons in reading order."""
    topic = session.exec(
        select(Topic).where(
            Topic.slug == normalize_slug(slug),
            Topic.is_published == True  # noqa: E712
        )
    ).first()
    if not topic:
        raise NotFoundError("Topic not found")

    lessons = session.exec(
        select(Lesson)
        .where(Lesson.topic_id == topic.id, Lesson.is_published == True)  # noqa: E712
        .order_by(*_lesson_ordering())
    ).all()
    return topic, list(lessons)


def get_topic(session: Session, topic_id: int) -> Topic:
    topic = session.get(Topic, topic_id)
    if not topic:
        raise NotFoundError("Topic not found")
    return topic


def get_topic_by_id(session: Session, topic_id: int) -> Tuple[Topic, List[Lesson]]:
    """Any topic by primary key with all of its lessons."""
    topic = get_topic(session, topic_id)
    lessons = session.exec(
        select(Lesson).where(Lesson.topic_id == topic.id).order_by(*_lesson_ordering())
    ).all()
    return topic, list(lessons)


def slug_taken(session: Session, slug: str, exclude_id: Optional[int] = None) -> bool:
    """Check global topic slug uniqueness, optionally ignoring one topic."""
    query = select(Topic.id).where(Topic.slug == slug)
    if exclude_id is not None:
        query = query.where(Topic.id != exclude_id)
    return session.exec(query).first() is not None


def _commit(session: Session, topic: Topic) -> Topic:
    # The unique index is the last line of defence against concurrent writers
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        logger.warning(f"Duplicate topic slug rejected by store: {topic.slug}")
        raise ConflictError("Topic with this slug already exists") from exc
    session.refresh(topic)
    return topic


def create_topic(session: Session, request: CreateTopicRequest, user: User) -> Topic:
    """
    Create a topic authored by `user`.

    Raises:
        ValidationError: If title, slug or description is missing
        ConflictError: If the slug is already used by another topic
    """
    values = request.model_dump()
    if missing_fields(values, REQUIRED_TOPIC_FIELDS):
        raise ValidationError("Please provide title, slug, and description")

    slug = normalize_slug(request.slug)
    if slug_taken(session, slug):
        raise ConflictError(DUPLICATE_SLUG_MESSAGE)

    topic = Topic(
        title=request.title.strip(),
        slug=slug,
        description=request.description,
        icon=request.icon or DEFAULT_TOPIC_ICON,
        color=request.color or DEFAULT_TOPIC_COLOR,
        order=request.order or 0,
        is_published=request.is_published if request.is_published is not None else True,
        created_by_id=user.id,
    )
    session.add(topic)
    topic = _commit(session, topic)

    logger.info(f"Topic {topic.id} '{topic.slug}' created by user {user.id}")
    return topic


def update_topic(session: Session, topic_id: int, request: UpdateTopicRequest) -> Topic:
    """
    Merge the fields present in `request` into an existing topic.

    Fields absent from the body (or sent as null) keep their stored value.
    """
    topic = get_topic(session, topic_id)
    changes = request.model_dump(exclude_unset=True, exclude_none=True)

    blank = [name for name in REQUIRED_TOPIC_FIELDS if name in changes and is_blank(changes[name])]
    if blank:
        raise ValidationError(f"{', '.join(blank)} cannot be empty")

    if "slug" in changes:
        changes["slug"] = normalize_slug(changes["slug"])
        # Only re-check when the slug actually changes
        if changes["slug"] != topic.slug and slug_taken(session, changes["slug"], exclude_id=topic.id):
            raise ConflictError(DUPLICATE_SLUG_MESSAGE)
    if "title" in changes:
        changes["title"] = changes["title"].strip()

    for field, value in changes.items():
        setattr(topic, field, value)
    topic.updated_at = datetime.utcnow()

    session.add(topic)
    topic = _commit(session, topic)

    logger.info(f"Topic {topic.id} updated: {sorted(changes)}")
    return topic


def delete_topic(session: Session, topic_id: int) -> None:
    """
    Delete a topic that owns no lessons.

    Raises:
        NotFoundError: If the topic does not exist
        ReferentialIntegrityError: If lessons still reference the topic
    """
    topic = get_topic(session, topic_id)

    lesson_count = session.exec(
        select(func.count(Lesson.id)).where(Lesson.topic_id == topic.id)
    ).one()
    if lesson_count > 0:
        raise ReferentialIntegrityError(
            f"Cannot delete topic. It has {lesson_count} lesson(s). Please delete lessons first."
        )

    session.delete(topic)
    session.commit()
    logger.info(f"Topic {topic_id} deleted")
