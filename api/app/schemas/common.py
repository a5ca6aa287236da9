"""
Shared schema building blocks.
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, Dict, Any


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserSummary(CamelModel):
    """Author attribution shown in admin views."""
    id: int
    name: str
    email: str


class TopicSummary(CamelModel):
    """Trimmed topic shown alongside lessons."""
    id: int
    title: str
    slug: str
    icon: Optional[str] = None
    color: Optional[str] = None


class MessageResponse(CamelModel):
    """Envelope for writes that return no document (deletes)."""
    success: bool = True
    message: str
    data: Dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(CamelModel):
    """Envelope for every failure."""
    success: bool = False
    message: str
    error: Optional[str] = None
