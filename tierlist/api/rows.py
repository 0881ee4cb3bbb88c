"""Row API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from tierlist.api.dependencies import get_current_user, get_tier_list_service
from tierlist.api.errors import unwrap
from tierlist.models.user import User
from tierlist.schemas.row import (
    RowColorUpdate,
    RowCreate,
    RowOrderUpdate,
    RowRankUpdate,
    RowResponse,
)
from tierlist.services.tier_lists import TierListService

router = APIRouter(prefix="/api/v1/rows", tags=["rows"])


@router.post("", response_model=RowResponse, status_code=status.HTTP_201_CREATED)
async def create_row(
    row_data: RowCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Add a row to a tier list."""
    return unwrap(
        service.create_row(
            current_user.id,
            row_data.list_id,
            row_data.rank,
            row_data.color_hex,
            row_data.order,
        )
    )


@router.put("/{row_id}/rank", response_model=RowResponse)
async def update_row_rank(
    row_id: int,
    row_data: RowRankUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Change a row's label."""
    return unwrap(
        service.update_row_rank(current_user.id, row_data.list_id, row_id, row_data.rank)
    )


@router.put("/{row_id}/color", response_model=RowResponse)
async def update_row_color(
    row_id: int,
    row_data: RowColorUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Change a row's color."""
    return unwrap(
        service.update_row_color(current_user.id, row_data.list_id, row_id, row_data.color_hex)
    )


@router.put("/{row_id}/order", response_model=RowResponse)
async def update_row_order(
    row_id: int,
    row_data: RowOrderUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Move a row to a new position among the list's rows."""
    return unwrap(
        service.update_row_order(current_user.id, row_data.list_id, row_id, row_data.order)
    )


@router.delete("/{row_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_row(
    row_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
    list_id: int = Query(..., gt=0),
    delete_with_images: bool = Query(False),
):
    """Delete a row, either with its images or moving them to the backup row."""
    unwrap(service.delete_row(current_user.id, list_id, row_id, delete_with_images))
