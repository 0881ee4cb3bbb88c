"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tierlist.api.dependencies import get_current_user
from tierlist.api.errors import unwrap
from tierlist.database import get_db
from tierlist.models.user import User
from tierlist.schemas.auth import (
    RefreshRequest,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from tierlist.services.auth import login_user, refresh_tokens, register_user

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    return unwrap(register_user(db, user_data.username, user_data.password))


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with username and password."""
    return unwrap(login_user(db, credentials.username, credentials.password))


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    request: RefreshRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Rotate a refresh token and issue a new token pair."""
    return unwrap(refresh_tokens(db, request.refresh_token))


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user
