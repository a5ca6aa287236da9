"""
Request guards: authenticate the bearer token, then authorize the role.
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from app.core.database import get_session
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.security import decode_access_token
from app.models import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: Session = Depends(get_session)
) -> User:
    """Resolve the user behind `Authorization: Bearer <token>` or fail with 401."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token")

    payload = decode_access_token(credentials.credentials)
    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise AuthenticationError("Not authorized, token failed") from exc

    user = session.get(User, user_id)
    if user is None:
        raise AuthenticationError("Not authorized, user not found")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Admin-only guard; always runs after authentication."""
    if not user.is_admin:
        raise AuthorizationError("Not authorized as an admin")
    return user
