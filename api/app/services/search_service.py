"""
Search service: case-insensitive text matching over topics and lessons.
"""
import logging
from typing import List, Optional, Tuple

from sqlmodel import Session, select, or_, func

from app.core.exceptions import ValidationError
from app.models import Lesson, LessonLevel, Topic
from app.schemas.search import SearchType, Suggestion
from app.schemas.utils import normalize_slug

logger = logging.getLogger(__name__)

TOPIC_RESULT_LIMIT = 10
LESSON_RESULT_LIMIT = 20
SUGGESTION_LIMIT = 5
SUGGESTION_MIN_LENGTH = 2

LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the query is matched literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_pattern(text: str) -> str:
    return f"%{escape_like(text)}%"


def prefix_pattern(text: str) -> str:
    return f"{escape_like(text)}%"


def clean_query(q: Optional[str]) -> str:
    """Trim the query, rejecting blank input."""
    if q is None or not q.strip():
        raise ValidationError("Please provide a search query")
    return q.strip()


def search_topics(session: Session, query: str) -> List[Topic]:
    pattern = contains_pattern(query)
    return list(session.exec(
        select(Topic)
        .where(
            Topic.is_published == True,  # noqa: E712
            or_(
                Topic.title.ilike(pattern, escape=LIKE_ESCAPE),  # type: ignore[attr-defined]
                Topic.description.ilike(pattern, escape=LIKE_ESCAPE),  # type: ignore[attr-defined]
            )
        )
        .order_by(Topic.id)
        .limit(TOPIC_RESULT_LIMIT)
    ).all())


def search_lessons(
    session: Session,
    query: str,
    level: Optional[LessonLevel] = None,
    topic_id: Optional[int] = None
) -> List[Lesson]:
    pattern = contains_pattern(query)
    statement = select(Lesson).where(
        Lesson.is_published == True,  # noqa: E712
        or_(
            Lesson.title.ilike(pattern, escape=LIKE_ESCAPE),  # type: ignore[attr-defined]
            Lesson.content.ilike(pattern, escape=LIKE_ESCAPE),  # type: ignore[attr-defined]
        )
    )
    if level is not None:
        statement = statement.where(func.lower(Lesson.level) == level.value)
    if topic_id is not None:
        statement = statement.where(Lesson.topic_id == topic_id)
    return list(session.exec(statement.order_by(Lesson.id).limit(LESSON_RESULT_LIMIT)).all())


def search(session: Session, q: Optional[str]) -> Tuple[str, List[Topic], List[Lesson]]:
    """Match published topics (title/description) and lessons (title/content)."""
    query = clean_query(q)
    topics = search_topics(session, query)
    lessons = search_lessons(session, query)
    logger.debug(f"Search '{query}': {len(topics)} topic(s), {len(lessons)} lesson(s)")
    return query, topics, lessons


def advanced_search(
    session: Session,
    q: Optional[str],
    search_type: Optional[SearchType] = None,
    level: Optional[LessonLevel] = None,
    topic_slug: Optional[str] = None
) -> Tuple[str, List[Topic], List[Lesson]]:
    """
    Search with optional filters.

    Args:
        search_type: Restrict to topics or lessons; None searches both
        level: Only lessons of this level
        topic_slug: Only lessons of this topic; ignored when no topic has the slug
    """
    query = clean_query(q)
    topics: List[Topic] = []
    lessons: List[Lesson] = []

    if search_type in (None, SearchType.TOPIC):
        topics = search_topics(session, query)

    if search_type in (None, SearchType.LESSON):
        topic_id = None
        if topic_slug:
            topic_id = session.exec(
                select(Topic.id).where(Topic.slug == normalize_slug(topic_slug))
            ).first()
        lessons = search_lessons(session, query, level=level, topic_id=topic_id)

    return query, topics, lessons


def suggestions(session: Session, q: Optional[str]) -> List[Suggestion]:
    """
    Title-prefix autocomplete over published topics then lessons.

    Queries shorter than two characters yield an empty list rather than an error.
    """
    if q is None or len(q.strip()) < SUGGESTION_MIN_LENGTH:
        return []

    pattern = prefix_pattern(q.strip())
    topics = session.exec(
        select(Topic)
        .where(
            Topic.is_published == True,  # noqa: E712
            Topic.title.ilike(pattern, escape=LIKE_ESCAPE)  # type: ignore[attr-defined]
        )
        .order_by(Topic.id)
        .limit(SUGGESTION_LIMIT)
    ).all()
    lessons = session.exec(
        select(Lesson)
        .where(
            Lesson.is_published == True,  # noqa: E712
            Lesson.title.ilike(pattern, escape=LIKE_ESCAPE)  # type: ignore[attr-defined]
        )
        .order_by(Lesson.id)
        .limit(SUGGESTION_LIMIT)
    ).all()

    return [
        Suggestion(type="topic", title=topic.title, slug=topic.slug, icon=topic.icon)
        for topic in topics
    ] + [
        Suggestion(type="lesson", title=lesson.title, slug=lesson.slug, topic=lesson.topic.title)
        for lesson in lessons
    ]
