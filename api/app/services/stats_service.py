"""
Dashboard statistics. Read-only aggregation over topics, lessons and users.
"""
from typing import Dict

from sqlmodel import Session, select, func

from app.models import Lesson, Topic, User
from app.schemas.stats import DashboardStats

RECENT_LIMIT = 5
UNKNOWN_LEVEL = "unknown"


def lessons_by_level(session: Session) -> Dict[str, int]:
    """Lesson counts grouped by level; levels lowercased, missing ones as 'unknown'."""
    rows = session.exec(
        select(Lesson.level, func.count(Lesson.id)).group_by(Lesson.level)
    ).all()
    counts: Dict[str, int] = {}
    for level, count in rows:
        key = (str(getattr(level, "value", level)) if level else UNKNOWN_LEVEL).lower()
        counts[key] = counts.get(key, 0) + count
    return counts


def get_dashboard_stats(session: Session) -> DashboardStats:
    total_topics = session.exec(select(func.count(Topic.id))).one()
    published_topics = session.exec(
        select(func.count(Topic.id)).where(Topic.is_published == True)  # noqa: E712
    ).one()
    total_lessons = session.exec(select(func.count(Lesson.id))).one()
    published_lessons = session.exec(
        select(func.count(Lesson.id)).where(Lesson.is_published == True)  # noqa: E712
    ).one()
    total_users = session.exec(select(func.count(User.id))).one()

    recent_topics = session.exec(
        select(Topic).order_by(Topic.created_at.desc(), Topic.id.desc()).limit(RECENT_LIMIT)  # type: ignore
    ).all()
    recent_lessons = session.exec(
        select(Lesson).order_by(Lesson.created_at.desc(), Lesson.id.desc()).limit(RECENT_LIMIT)  # type: ignore
    ).all()

    return DashboardStats(
        total_topics=total_topics,
        published_topics=published_topics,
        unpublished_topics=total_topics - published_topics,
        total_lessons=total_lessons,
        published_lessons=published_lessons,
        unpublished_lessons=total_lessons - published_lessons,
        total_users=total_users,
        lessons_by_level=lessons_by_level(session),
        recent_topics=recent_topics,
        recent_lessons=recent_lessons,
    )
