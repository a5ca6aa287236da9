"""
Model enums.
"""
from enum import Enum


class UserRole(str, Enum):
    """Access level of a user account."""
    ADMIN = "admin"
    USER = "user"


class LessonLevel(str, Enum):
    """Difficulty level of a lesson."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
