"""Row schemas."""

from pydantic import BaseModel, ConfigDict, Field

from tierlist.schemas.common import OrderValue
from tierlist.schemas.image import ImageResponse


class RowCreate(BaseModel):
    """Add a row to a list."""

    list_id: int = Field(..., gt=0)
    rank: str = Field(..., max_length=50)
    color_hex: str = Field(..., max_length=7)
    order: int | None = None  # default: after the last row


class RowRankUpdate(BaseModel):
    list_id: int = Field(..., gt=0)
    rank: str = Field(..., max_length=50)


class RowColorUpdate(BaseModel):
    list_id: int = Field(..., gt=0)
    color_hex: str = Field(..., max_length=7)


class RowOrderUpdate(BaseModel):
    list_id: int = Field(..., gt=0)
    order: int


class RowResponse(BaseModel):
    """Ranked row with its images in order."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    rank: str
    color_hex: str
    order: OrderValue
    images: list[ImageResponse] = []


class BackupRowResponse(BaseModel):
    """Backup row with its images in order."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    images: list[ImageResponse] = []
