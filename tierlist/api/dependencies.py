"""FastAPI dependencies for authentication, database and services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tierlist.config import get_settings
from tierlist.database import get_db
from tierlist.models.user import User
from tierlist.services.auth import decode_access_token, get_user_by_id
from tierlist.services.storage import ImageStorageService
from tierlist.services.tier_lists import TierListService

security = HTTPBearer()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    token = credentials.credentials
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if user_id is None or not user_id.isdigit():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = get_user_by_id(db, int(user_id))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


@lru_cache
def get_storage_service() -> ImageStorageService:
    """Get the shared object storage client."""
    return ImageStorageService.from_settings(get_settings())


def get_tier_list_service(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[ImageStorageService, Depends(get_storage_service)],
) -> TierListService:
    """Get tier list service with dependencies."""
    return TierListService(db, storage)
