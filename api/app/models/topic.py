"""
Topic model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from app.models.lesson import Lesson
    from app.models.user import User


DEFAULT_TOPIC_ICON = "📚"
DEFAULT_TOPIC_COLOR = "#3b82f6"


class Topic(SQLModel, table=True):
    """Topic table - top-level subject grouping lessons."""
    __tablename__ = "topic"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=100)
    slug: str = Field(unique=True, index=True)  # Lowercase, external identifier in URLs
    description: str = Field(max_length=500)
    icon: str = Field(default=DEFAULT_TOPIC_ICON)
    color: str = Field(default=DEFAULT_TOPIC_COLOR)
    order: int = Field(default=0)  # Display ordering, ascending
    is_published: bool = Field(default=True, index=True)
    created_by_id: Optional[int] = Field(default=None, foreign_key="user.id")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships - lessons are owned by foreign key only, deletes never cascade
    lessons: List["Lesson"] = Relationship(back_populates="topic")
    created_by: Optional["User"] = Relationship()
