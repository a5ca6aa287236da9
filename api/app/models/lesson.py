"""
Lesson model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from sqlalchemy import Column, Text, String as SAString, UniqueConstraint
from app.models.enums import LessonLevel

if TYPE_CHECKING:
    from app.models.topic import Topic
    from app.models.user import User


class Lesson(SQLModel, table=True):
    """Lesson table - a content unit belonging to exactly one topic."""
    __tablename__ = "lesson"
    __table_args__ = (
        # Slugs are unique per topic, not globally
        UniqueConstraint("topic_id", "slug", name="uq_lesson_topic_id_slug"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    topic_id: int = Field(foreign_key="topic.id", index=True)
    title: str
    slug: str = Field(index=True)
    level: Optional[LessonLevel] = Field(
        default=LessonLevel.BEGINNER,
        sa_column=Column(SAString, default=LessonLevel.BEGINNER.value)
    )  # stored as string, converted to enum
    content: str = Field(sa_column=Column(Text, nullable=False))  # HTML markup
    sample_code: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    order: int = Field(default=0)
    is_published: bool = Field(default=True, index=True)
    created_by_id: Optional[int] = Field(default=None, foreign_key="user.id")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    topic: "Topic" = Relationship(back_populates="lessons")
    created_by: Optional["User"] = Relationship()
