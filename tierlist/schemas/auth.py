"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserRegister(BaseModel):
    """User registration request."""

    username: str = Field(..., max_length=50)
    password: str = Field(..., max_length=50)


class UserLogin(BaseModel):
    """User login request."""

    username: str = Field(..., max_length=50)
    password: str = Field(..., max_length=50)


class RefreshRequest(BaseModel):
    """Exchange a refresh token for a new token pair."""

    refresh_token: str = Field(..., max_length=255)


class TokenResponse(BaseModel):
    """Access and refresh tokens with their expiry times."""

    model_config = ConfigDict(from_attributes=True)

    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime
    token_type: str = "bearer"  # noqa: S105


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    created_at: datetime
