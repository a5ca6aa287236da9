"""
Models package - imports all models so they register with SQLModel metadata.
"""
from app.models.enums import UserRole, LessonLevel
from app.models.user import User
from app.models.topic import Topic
from app.models.lesson import Lesson

__all__ = [
    'UserRole',
    'LessonLevel',
    'User',
    'Topic',
    'Lesson',
]
