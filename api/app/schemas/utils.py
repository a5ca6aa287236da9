"""
Utility functions for request validation.
"""
from typing import Any, Dict, Iterable, Optional

from app.models.enums import LessonLevel


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after trimming."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def normalize_slug(slug: Optional[str]) -> Optional[str]:
    """
    Normalize a slug for storage and lookups.

    Slugs are compared and stored trimmed and lowercased.

    Args:
        slug: Raw slug from the request (can be None)

    Returns:
        Normalized slug, or None
    """
    if slug is None:
        return None
    return slug.strip().lower()


def missing_fields(values: Dict[str, Any], required: Iterable[str]) -> list[str]:
    """Return the names in `required` whose value in `values` is blank."""
    return [name for name in required if is_blank(values.get(name))]


def coerce_level(value: Any) -> Any:
    """
    Read a stored lesson level leniently.

    Legacy rows may hold mixed-case or unrecognised levels; those are
    lowercased, and anything still outside LessonLevel becomes None.
    """
    if value is None or isinstance(value, LessonLevel):
        return value
    if isinstance(value, str):
        try:
            return LessonLevel(value.strip().lower())
        except ValueError:
            return None
    return value
