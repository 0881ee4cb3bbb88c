"""Tier list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from tierlist.api.dependencies import get_current_user, get_tier_list_service
from tierlist.api.errors import unwrap
from tierlist.models.user import User
from tierlist.schemas.row import BackupRowResponse, RowResponse
from tierlist.schemas.tier_list import (
    TierListCreate,
    TierListDataResponse,
    TierListResponse,
    TierListUpdate,
)
from tierlist.services.tier_lists import TierListService

router = APIRouter(prefix="/api/v1/lists", tags=["lists"])


@router.get("", response_model=list[TierListResponse])
async def get_lists(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Get all tier lists owned by the current user."""
    return unwrap(service.get_tier_lists(current_user.id))


@router.post("", response_model=TierListResponse, status_code=status.HTTP_201_CREATED)
async def create_list(
    list_data: TierListCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Create a new tier list with the default rows."""
    return unwrap(service.create_tier_list(current_user.id, list_data.title))


@router.get("/{list_id}", response_model=TierListDataResponse)
async def get_list(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Get a tier list with its rows, backup row and images."""
    data = unwrap(service.get_tier_list_data(current_user.id, list_id))
    tier_list = data.tier_list
    return TierListDataResponse(
        id=tier_list.id,
        title=tier_list.title,
        created_at=tier_list.created_at,
        updated_at=tier_list.updated_at,
        rows=[RowResponse.model_validate(row) for row in data.rows],
        backup_row=BackupRowResponse.model_validate(data.backup_row),
    )


@router.put("/{list_id}", response_model=TierListResponse)
async def update_list(
    list_id: int,
    list_data: TierListUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Rename a tier list."""
    return unwrap(service.update_tier_list(current_user.id, list_id, list_data.title))


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_list(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Delete a tier list with all its rows and images."""
    unwrap(service.delete_tier_list(current_user.id, list_id))
