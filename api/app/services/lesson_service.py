"""
Lesson service for business logic related to lessons.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models import Lesson, LessonLevel, Topic, User
from app.schemas.lesson import CreateLessonRequest, UpdateLessonRequest
from app.schemas.utils import is_blank, missing_fields, normalize_slug

logger = logging.getLogger(__name__)

REQUIRED_LESSON_FIELDS = ("topic_id", "title", "slug", "content")
DUPLICATE_SLUG_MESSAGE = "Lesson with this slug already exists in this topic"


def _reading_order():
    return (Lesson.order.asc(), Lesson.created_at.asc(), Lesson.id.asc())  # type: ignore


def list_published_lessons(session: Session) -> List[Lesson]:
    """Published lessons, order ascending then newest first."""
    return list(session.exec(
        select(Lesson)
        .where(Lesson.is_published == True)  # noqa: E712
        .order_by(Lesson.order.asc(), Lesson.created_at.desc(), Lesson.id.desc())  # type: ignore
    ).all())


def list_all_lessons(session: Session) -> List[Lesson]:
    """Every lesson regardless of publish state, newest first."""
    return list(session.exec(
        select(Lesson).order_by(Lesson.created_at.desc(), Lesson.id.desc())  # type: ignore
    ).all())


def get_lesson(session: Session, lesson_id: int) -> Lesson:
    lesson = session.get(Lesson, lesson_id)
    if not lesson:
        raise NotFoundError("Lesson not found")
    return lesson


def get_published_lesson_by_slug(
    session: Session,
    slug: str
) -> Tuple[Lesson, Optional[Lesson], Optional[Lesson]]:
    """
    Published lesson by slug with its previous/next neighbours.

    Neighbours come from the published lessons of the same topic in reading
    order; the current lesson is located by id, not by its order value.
    When several topics use the same slug the earliest lesson wins.

    Returns:
        (lesson, previous, next) where either neighbour may be None
    """
    lesson = session.exec(
        select(Lesson)
        .where(Lesson.slug == normalize_slug(slug), Lesson.is_published == True)  # noqa: E712
        .order_by(Lesson.id.asc())  # type: ignore
    ).first()
    if not lesson:
        raise NotFoundError("Lesson not found")

    siblings = session.exec(
        select(Lesson)
        .where(Lesson.topic_id == lesson.topic_id, Lesson.is_published == True)  # noqa: E712
        .order_by(*_reading_order())
    ).all()
    ids = [sibling.id for sibling in siblings]
    index = ids.index(lesson.id)

    previous_lesson = siblings[index - 1] if index > 0 else None
    next_lesson = siblings[index + 1] if index < len(siblings) - 1 else None
    return lesson, previous_lesson, next_lesson


def list_lessons_by_topic_slug(session: Session, topic_slug: str) -> Tuple[Topic, List[Lesson]]:
    """Resolve a topic by slug and return its published lessons in reading order."""
    topic = session.exec(select(Topic).where(Topic.slug == normalize_slug(topic_slug))).first()
    if not topic:
        raise NotFoundError("Topic not found")

    lessons = session.exec(
        select(Lesson)
        .where(Lesson.topic_id == topic.id, Lesson.is_published == True)  # noqa: E712
        .order_by(*_reading_order())
    ).all()
    return topic, list(lessons)


def slug_taken(session: Session, *, topic_id: int, slug: str, exclude_id: Optional[int] = None) -> bool:
    """Check (topic_id, slug) uniqueness, optionally ignoring one lesson."""
    query = select(Lesson.id).where(Lesson.topic_id == topic_id, Lesson.slug == slug)
    if exclude_id is not None:
        query = query.where(Lesson.id != exclude_id)
    return session.exec(query).first() is not None


def _require_topic(session: Session, topic_id: int) -> Topic:
    topic = session.get(Topic, topic_id)
    if not topic:
        raise NotFoundError("Topic not found")
    return topic


def _commit(session: Session, lesson: Lesson) -> Lesson:
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        logger.warning(f"Duplicate lesson slug rejected by store: topic {lesson.topic_id}, '{lesson.slug}'")
        raise ConflictError(DUPLICATE_SLUG_MESSAGE) from exc
    session.refresh(lesson)
    return lesson


def create_lesson(session: Session, request: CreateLessonRequest, user: User) -> Lesson:
    """
    Create a lesson in an existing topic.

    Raises:
        ValidationError: If topicId, title, slug or content is missing
        NotFoundError: If the topic does not exist
        ConflictError: If the topic already has a lesson with this slug
    """
    values = request.model_dump()
    if missing_fields(values, REQUIRED_LESSON_FIELDS):
        raise ValidationError("Please provide topicId, title, slug, and content")

    topic = _require_topic(session, request.topic_id)

    slug = normalize_slug(request.slug)
    if slug_taken(session, topic_id=topic.id, slug=slug):
        raise ConflictError(DUPLICATE_SLUG_MESSAGE)

    lesson = Lesson(
        topic_id=topic.id,
        title=request.title.strip(),
        slug=slug,
        level=request.level or LessonLevel.BEGINNER,
        content=request.content,
        sample_code=request.sample_code or "",
        order=request.order or 0,
        is_published=request.is_published if request.is_published is not None else True,
        created_by_id=user.id,
    )
    session.add(lesson)
    lesson = _commit(session, lesson)

    logger.info(f"Lesson {lesson.id} '{lesson.slug}' created in topic {topic.id} by user {user.id}")
    return lesson


def update_lesson(session: Session, lesson_id: int, request: UpdateLessonRequest) -> Lesson:
    """
    Merge the fields present in `request` into an existing lesson.

    Moving a lesson to another topic requires that topic to exist, and the
    resulting (topic, slug) pair must stay unique.
    """
    lesson = get_lesson(session, lesson_id)
    changes = request.model_dump(exclude_unset=True, exclude_none=True)

    blank = [name for name in ("title", "slug", "content") if name in changes and is_blank(changes[name])]
    if blank:
        raise ValidationError(f"{', '.join(blank)} cannot be empty")

    target_topic_id = changes.get("topic_id", lesson.topic_id)
    if target_topic_id != lesson.topic_id:
        _require_topic(session, target_topic_id)

    if "slug" in changes:
        changes["slug"] = normalize_slug(changes["slug"])
    target_slug = changes.get("slug", lesson.slug)

    if target_slug != lesson.slug or target_topic_id != lesson.topic_id:
        if slug_taken(session, topic_id=target_topic_id, slug=target_slug, exclude_id=lesson.id):
            raise ConflictError(DUPLICATE_SLUG_MESSAGE)
    if "title" in changes:
        changes["title"] = changes["title"].strip()

    for field, value in changes.items():
        setattr(lesson, field, value)
    lesson.updated_at = datetime.utcnow()

    session.add(lesson)
    lesson = _commit(session, lesson)

    logger.info(f"Lesson {lesson.id} updated: {sorted(changes)}")
    return lesson


def delete_lesson(session: Session, lesson_id: int) -> None:
    """Delete a lesson; its topic is left untouched."""
    lesson = get_lesson(session, lesson_id)
    session.delete(lesson)
    session.commit()
    logger.info(f"Lesson {lesson_id} deleted")
