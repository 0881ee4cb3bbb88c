"""Tier list schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tierlist.schemas.row import BackupRowResponse, RowResponse


class TierListCreate(BaseModel):
    """Create a new tier list."""

    title: str = Field(..., max_length=100)


class TierListUpdate(BaseModel):
    """Rename a tier list."""

    title: str = Field(..., max_length=100)


class TierListResponse(BaseModel):
    """Tier list summary."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    created_at: datetime
    updated_at: datetime


class TierListDataResponse(TierListResponse):
    """Tier list with its rows, the backup row and all images."""

    rows: list[RowResponse] = []
    backup_row: BackupRowResponse
