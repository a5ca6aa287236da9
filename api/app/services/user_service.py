"""
User service for authentication lookups.
"""
import logging
from typing import Optional

from sqlmodel import Session, select

from app.core.exceptions import AuthenticationError
from app.models import User

logger = logging.getLogger(__name__)


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == email.strip().lower())).first()


def authenticate(session: Session, email: str, password: str) -> User:
    """
    Resolve a user from email/password credentials.

    Raises:
        AuthenticationError: If no account matches or the password is wrong
    """
    user = get_user_by_email(session, email)
    if not user or not user.verify_password(password):
        logger.warning(f"Failed login attempt for {email!r}")
        raise AuthenticationError("Invalid credentials")
    return user
