"""
User model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from sqlalchemy import Column, String as SAString
import hashlib

from app.models.enums import UserRole


class User(SQLModel, table=True):
    """User table - accounts that can sign in and author content."""
    __tablename__ = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)  # Stored lowercased
    password: str  # Hashed password
    role: UserRole = Field(
        default=UserRole.USER,
        sa_column=Column(SAString, nullable=False, default=UserRole.USER.value)
    )  # 'admin' or 'user' - stored as string, converted to enum
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @staticmethod
    def hash_password(password: str) -> str:
        """Simple password hashing using SHA256."""
        return hashlib.sha256(password.encode()).hexdigest()

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return self.password == self.hash_password(password)
