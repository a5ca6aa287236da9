from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.deps import get_current_user
from app.core.database import get_session
from app.core.security import create_access_token
from app.models import User
from app.schemas.auth import AuthResponse, CurrentUserResponse, LoginRequest, UserResponse
from app.services.user_service import authenticate

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginRequest,
    session: Session = Depends(get_session)
):
    """Exchange email/password for a bearer token."""
    user = authenticate(session, login_data.email, login_data.password)
    return AuthResponse(
        token=create_access_token(str(user.id)),
        user=UserResponse.model_validate(user)
    )


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(user: User = Depends(get_current_user)):
    """Return the account behind the bearer token."""
    return CurrentUserResponse(data=UserResponse.model_validate(user))
