from pydantic import Field
from typing import Optional
from datetime import datetime

from app.models.enums import UserRole
from app.schemas.common import CamelModel


class LoginRequest(CamelModel):
    """Login request schema."""
    email: str = Field(..., min_length=1, description="Account email")
    password: str = Field(..., min_length=1, description="Password")


class UserResponse(CamelModel):
    """User response schema (without password)."""
    id: int
    name: str
    email: str
    role: UserRole
    created_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    """Authentication response schema."""
    success: bool = True
    token: str
    user: UserResponse


class CurrentUserResponse(CamelModel):
    success: bool = True
    data: UserResponse
